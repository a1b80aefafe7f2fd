from sqlalchemy import Column, Integer, String, DateTime, Enum
from sqlalchemy.sql import func
from app.db.session import Base
from app.models.expense import Currency

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    default_currency = Column(
        Enum(Currency, name="user_currency", native_enum=False, create_constraint=True,
             validate_strings=True, values_callable=lambda e: [m.value for m in e]),
        nullable=False, default=Currency.INR, server_default=Currency.INR.value
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())
