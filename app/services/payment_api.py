from typing import Any, Optional
import httpx
from pydantic import ValidationError
from app.core.http import ApiError, request_json
from app.schemas.payment import (
    PaymentListResponse,
    PendingPaymentCreate,
    DepositPaymentCreate,
    PaymentUpdate,
)


class PaymentService:
    """Calls against the backend ``/payments`` resource."""

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def get_all(self, params: Optional[dict] = None) -> PaymentListResponse:
        query = {k: v for k, v in (params or {}).items() if v is not None}
        data = await request_json(self.client, "GET", "/payments", params=query)
        try:
            return PaymentListResponse.model_validate(data or {})
        except ValidationError as e:
            raise ApiError(f"Malformed payments list: {e.error_count()} invalid field(s)") from e

    async def add_pending_payment(self, data: PendingPaymentCreate) -> Any:
        return await request_json(
            self.client, "POST", "/payments/addPending",
            json=data.model_dump(mode="json", by_alias=True),
        )

    async def deposit_payment(self, data: DepositPaymentCreate) -> Any:
        return await request_json(
            self.client, "PUT", "/payments/depositPayment",
            json=data.model_dump(mode="json", by_alias=True),
        )

    async def get_one_student_payment(self, student_id: str) -> Any:
        return await request_json(self.client, "GET", f"/payments/get/{student_id}")

    async def update_payment(self, payment_id: str, data: PaymentUpdate) -> Any:
        return await request_json(
            self.client, "PATCH", f"/payments/update/{payment_id}",
            json=data.model_dump(mode="json", by_alias=True, exclude_none=True),
        )

    async def delete_payment(self, payment_id: str) -> Any:
        return await request_json(self.client, "DELETE", f"/payments/delete/{payment_id}")
