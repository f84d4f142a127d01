"""
Per-session cache of payment records.

Every action goes through ``PaymentService``. After add-pending, deposit and
update the whole list is fetched again, because only the list endpoint
returns records with the student populated. Delete removes the record from
the cache directly. Alerts are emitted after the cache reflects the change.
"""
import logging
from typing import Any, Optional, Union
from app.core.http import ApiError
from app.schemas.payment import PaymentRead, PaymentUpdate
from app.services.alerts import (
    AlertEmitter,
    pending_payment_alert,
    deposit_alert,
    update_alert,
    delete_alert,
)
from app.services.notifier import Notifier
from app.services.payment_api import PaymentService
from app.services.validation import (
    PaymentInput,
    PaymentValidationError,
    validate_pending_payment,
    validate_deposit_payment,
)

logger = logging.getLogger(__name__)


class PaymentStore:
    def __init__(self, payment_service: PaymentService, alerts: AlertEmitter, notifier: Notifier):
        self.payment_service = payment_service
        self.alerts = alerts
        self.notifier = notifier

        self.payments: list[PaymentRead] = []
        self.loading: bool = False
        self.error: Optional[str] = None
        self._fetch_seq = 0

    async def fetch_payments(self, params: Optional[dict] = None) -> None:
        self._fetch_seq += 1
        seq = self._fetch_seq
        self.loading = True
        self.error = None

        try:
            data = await self.payment_service.get_all(params)
        except ApiError as e:
            if seq != self._fetch_seq:
                logger.debug(f"Discarding failed payments fetch #{seq}, #{self._fetch_seq} is newer")
                return
            logger.error(f"Failed to fetch payments: {e.message}")
            self.error = e.message
            self.loading = False
            self.payments = []
            self.notifier.error("Failed to fetch payments")
            return

        if seq != self._fetch_seq:
            logger.debug(f"Discarding payments fetch #{seq}, #{self._fetch_seq} is newer")
            return

        self.payments = data.payments or []
        self.loading = False

    async def add_pending_payment(self, data: PaymentInput) -> Any:
        payload, errors = validate_pending_payment(data)
        if errors:
            self.notifier.error("Please correct the pending payment details")
            raise PaymentValidationError(errors)

        self.loading = True
        try:
            response = await self.payment_service.add_pending_payment(payload)
        except ApiError as e:
            self.loading = False
            self.notifier.error(e.user_message("Failed to add pending payment"))
            raise

        await self.fetch_payments()
        await self.alerts.emit(pending_payment_alert(payload))

        self.notifier.success("Pending payment added successfully")
        return response

    async def deposit_payment(self, data: PaymentInput) -> Any:
        payload, errors = validate_deposit_payment(data)
        if errors:
            self.notifier.error("Please correct the deposit details")
            raise PaymentValidationError(errors)

        self.loading = True
        try:
            response = await self.payment_service.deposit_payment(payload)
        except ApiError as e:
            self.loading = False
            self.notifier.error(e.user_message("Failed to deposit payment"))
            raise

        await self.fetch_payments()
        await self.alerts.emit(deposit_alert(payload))

        self.notifier.success("Payment deposited successfully")
        return response

    async def get_student_payment(self, student_id: str) -> Any:
        try:
            return await self.payment_service.get_one_student_payment(student_id)
        except ApiError:
            self.notifier.error("Failed to fetch student payment")
            raise

    async def update_payment(self, payment_id: str, data: Union[PaymentUpdate, dict]) -> Any:
        payment_id = str(payment_id)
        if not isinstance(data, PaymentUpdate):
            data = PaymentUpdate.model_validate(data)

        self.loading = True
        try:
            response = await self.payment_service.update_payment(payment_id, data)
        except ApiError as e:
            logger.error(f"Failed to update payment {payment_id}: {e.message}")
            self.loading = False
            self.notifier.error("Failed to update payment")
            raise

        await self.fetch_payments()
        await self.alerts.emit(update_alert(data))

        self.notifier.success("Payment updated successfully")
        return response

    async def delete_payment(self, payment_id: str) -> None:
        payment_id = str(payment_id)
        self.loading = True
        try:
            await self.payment_service.delete_payment(payment_id)
        except ApiError as e:
            logger.error(f"Failed to delete payment {payment_id}: {e.message}")
            self.loading = False
            self.notifier.error("Failed to delete payment")
            raise

        self.payments = [p for p in self.payments if p.id != payment_id]
        self.loading = False

        await self.alerts.emit(delete_alert())
        self.notifier.success("Payment deleted successfully")

    def get_cached(self, payment_id: str) -> Optional[PaymentRead]:
        payment_id = str(payment_id)
        return next((p for p in self.payments if p.id == payment_id), None)

    def clear_error(self) -> None:
        self.error = None

    def reset(self) -> None:
        self.payments = []
        self.loading = False
        self.error = None
        self._fetch_seq += 1
