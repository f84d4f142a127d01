import logging
from app.core.http import ApiError
from app.schemas.alert import AlertRead
from app.schemas.common import ActionResult
from app.services.alert_api import AlertService
from app.services.notifier import Notifier

logger = logging.getLogger(__name__)


class AlertStore:
    """Per-session cache of alerts. Changes are patched into the cache, never re-fetched."""

    def __init__(self, alert_service: AlertService, notifier: Notifier):
        self.alert_service = alert_service
        self.notifier = notifier

        self.alerts: list[AlertRead] = []
        self.loading: bool = False

    @property
    def unread_count(self) -> int:
        return sum(1 for a in self.alerts if not a.read)

    async def fetch_alerts(self) -> None:
        self.loading = True
        try:
            alerts = await self.alert_service.get_all()
        except ApiError as e:
            # No user-facing message for alert fetches
            logger.warning(f"Failed to fetch alerts: {e.message}")
            self.loading = False
            return

        self.alerts = alerts
        self.loading = False

    async def mark_as_read(self, alert_id: str) -> ActionResult:
        try:
            await self.alert_service.mark_as_read(alert_id)
        except ApiError as e:
            logger.error(f"Failed to mark alert {alert_id} as read: {e.message}")
            return ActionResult(success=False)

        self.alerts = [
            a.model_copy(update={"read": True}) if a.id == alert_id else a
            for a in self.alerts
        ]
        return ActionResult(success=True)

    async def mark_all_as_read(self) -> ActionResult:
        try:
            await self.alert_service.mark_all_as_read()
        except ApiError as e:
            logger.error(f"Failed to mark all alerts as read: {e.message}")
            return ActionResult(success=False)

        self.alerts = [a.model_copy(update={"read": True}) for a in self.alerts]
        self.notifier.success("All alerts marked as read")
        return ActionResult(success=True)

    async def delete_alert(self, alert_id: str) -> ActionResult:
        self.loading = True
        try:
            await self.alert_service.delete(alert_id)
        except ApiError as e:
            logger.error(f"Failed to delete alert {alert_id}: {e.message}")
            self.loading = False
            return ActionResult(success=False)

        self.alerts = [a for a in self.alerts if a.id != alert_id]
        self.loading = False
        return ActionResult(success=True)

    def reset(self) -> None:
        self.alerts = []
        self.loading = False
