"""
Alerts raised as a side effect of payment changes.

Alert creation is best-effort: the payment change has already been applied
when ``AlertEmitter.emit`` runs, so a failure here is logged and reported
through the return value only.
"""
import logging
from app.core.config import settings
from app.models.enums import AlertType, AlertPriority
from app.schemas.alert import AlertCreate
from app.schemas.payment import PendingPaymentCreate, DepositPaymentCreate, PaymentUpdate
from app.services.alert_api import AlertService
from app.utils.formatting import format_amount

logger = logging.getLogger(__name__)


class AlertEmitter:
    def __init__(self, alert_service: AlertService):
        self.alert_service = alert_service

    async def emit(self, alert: AlertCreate) -> bool:
        try:
            await self.alert_service.create(alert)
        except Exception:
            logger.exception(f"Failed to create alert '{alert.title}'")
            return False
        return True


def pending_payment_alert(data: PendingPaymentCreate) -> AlertCreate:
    return AlertCreate(
        title="New Pending Payment",
        message=(
            f"Pending payment of {settings.CURRENCY_SYMBOL}{format_amount(data.amount)} "
            f"added for {data.month.value} {data.year}"
        ),
        type=AlertType.INFO,
        priority=AlertPriority.MEDIUM,
    )


def deposit_alert(data: DepositPaymentCreate) -> AlertCreate:
    return AlertCreate(
        title="Payment Deposited",
        message=(
            f"Payment of {settings.CURRENCY_SYMBOL}{format_amount(data.amount)} deposited via "
            f"{data.payment_type.value} for {data.month.value} {data.year}"
        ),
        type=AlertType.SUCCESS,
        priority=AlertPriority.MEDIUM,
    )


def update_alert(data: PaymentUpdate) -> AlertCreate:
    status = data.status.value if data.status else "modified"
    return AlertCreate(
        title="Payment Updated",
        message=f"Payment status updated to {status}",
        type=AlertType.INFO,
        priority=AlertPriority.LOW,
    )


def delete_alert() -> AlertCreate:
    return AlertCreate(
        title="Payment Deleted",
        message="Payment record has been deleted",
        type=AlertType.WARNING,
        priority=AlertPriority.LOW,
    )
