from typing import Optional

from pydantic import EmailStr, Field

from teachflow.schemas.base import ApiModel


class PaymentIntentCreate(ApiModel):
    # cents
    amount: int = Field(gt=0)


class ClientSecret(ApiModel):
    client_secret: str


class PaymentCreate(ApiModel):
    class_id: str = Field(min_length=1)
    email: EmailStr
    amount: float = Field(gt=0)
    payment_method: Optional[str] = None
    transaction_id: Optional[str] = None
    user_name: Optional[str] = None


class PaymentRecorded(ApiModel):
    message: str
    payment_id: str
    enrollment_id: str
