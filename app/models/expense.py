import enum
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Numeric, Boolean, Enum, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.db.session import Base


class Currency(str, enum.Enum):
    INR = "INR"
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"


class SplitType(str, enum.Enum):
    EQUAL = "equal"
    EXACT = "exact"


class Expense(Base):
    __tablename__ = "expenses"
    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_expense_amount_non_negative"),
        # personal expenses never belong to a group, group expenses always do
        CheckConstraint(
            "(is_personal AND group_id IS NULL) OR (NOT is_personal AND group_id IS NOT NULL)",
            name="ck_expense_personal_group",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    group_id = Column(Integer, ForeignKey("groups.id"), nullable=True, index=True)
    paid_by = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    amount = Column(Numeric(10, 2), nullable=False)
    currency = Column(Enum(Currency, name="currency", native_enum=False, create_constraint=True, validate_strings=True, values_callable=lambda e: [m.value for m in e]), nullable=False, default=Currency.INR)
    date = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), index=True)
    split_type = Column(Enum(SplitType, native_enum=False, values_callable=lambda e: [m.value for m in e]), nullable=False, default=SplitType.EQUAL)
    is_personal = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    splits = relationship("ExpenseSplit", back_populates="expense", cascade="all, delete", order_by="ExpenseSplit.id")
    payer = relationship("User")
    group = relationship("Group", back_populates="expenses")
