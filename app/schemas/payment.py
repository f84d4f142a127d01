from typing import Optional, Union
from pydantic import BaseModel, Field
from app.models.enums import PaymentStatus, PaymentType, Month
from app.schemas.student import StudentSummary


class PaymentRead(BaseModel):
    id: str = Field(alias="_id")
    # The list endpoint populates the student, other endpoints return the bare id
    student: Union[StudentSummary, str, None] = Field(default=None, alias="studentId")
    amount: float = 0.0
    month: Optional[str] = None
    year: Optional[int] = None
    status: PaymentStatus = PaymentStatus.PENDING
    payment_type: Optional[PaymentType] = Field(default=None, alias="paymentType")

    class Config:
        populate_by_name = True
        coerce_numbers_to_str = True

    @property
    def student_name(self) -> str:
        if isinstance(self.student, StudentSummary):
            return self.student.name or ""
        return ""

    @property
    def student_email(self) -> Optional[str]:
        if isinstance(self.student, StudentSummary):
            return self.student.email
        return None

    @property
    def student_ref(self) -> Optional[str]:
        if isinstance(self.student, StudentSummary):
            return self.student.id
        return self.student


class PaymentListResponse(BaseModel):
    payments: Optional[list[PaymentRead]] = None


class PendingPaymentCreate(BaseModel):
    student_id: str = Field(alias="studentId", min_length=1)
    amount: float = Field(gt=0, allow_inf_nan=False)
    month: Month
    year: int = Field(ge=1900, le=2100)

    class Config:
        populate_by_name = True
        str_strip_whitespace = True


class DepositPaymentCreate(PendingPaymentCreate):
    payment_type: PaymentType = Field(alias="paymentType")


class PaymentUpdate(BaseModel):
    status: Optional[PaymentStatus] = None
    amount: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    month: Optional[Month] = None
    year: Optional[int] = Field(default=None, ge=1900, le=2100)
    payment_type: Optional[PaymentType] = Field(default=None, alias="paymentType")

    class Config:
        populate_by_name = True


class PaymentTotals(BaseModel):
    total: float
    paid: float
    pending: float
    collection_percent: int


class PaymentSummary(BaseModel):
    totals: PaymentTotals
    count: int
    filtered_count: int
    search: str
    status: str
