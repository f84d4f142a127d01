from app.models.enums import (
    PaymentStatus,
    PaymentType,
    StatusFilter,
    Month,
    AlertType,
    AlertPriority,
    NotificationLevel,
)

__all__ = [
    "PaymentStatus",
    "PaymentType",
    "StatusFilter",
    "Month",
    "AlertType",
    "AlertPriority",
    "NotificationLevel",
]
