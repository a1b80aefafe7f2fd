from pydantic import BaseModel, ConfigDict
from app.models.expense import Currency

class MemberOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    default_currency: Currency
