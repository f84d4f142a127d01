from typing import Any
import httpx
from pydantic import TypeAdapter, ValidationError
from app.core.http import ApiError, request_json
from app.schemas.alert import AlertRead, AlertCreate

_alert_list = TypeAdapter(list[AlertRead])


class AlertService:
    """Calls against the backend ``/alerts`` resource."""

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def get_all(self) -> list[AlertRead]:
        data = await request_json(self.client, "GET", "/alerts")
        if isinstance(data, dict):
            data = data.get("alerts")
        try:
            return _alert_list.validate_python(data or [])
        except ValidationError as e:
            raise ApiError(f"Malformed alerts list: {e.error_count()} invalid field(s)") from e

    async def create(self, data: AlertCreate) -> Any:
        return await request_json(self.client, "POST", "/alerts", json=data.model_dump(mode="json"))

    async def mark_as_read(self, alert_id: str) -> Any:
        return await request_json(self.client, "PATCH", f"/alerts/{alert_id}/read")

    async def mark_all_as_read(self) -> Any:
        return await request_json(self.client, "PATCH", "/alerts/read-all")

    async def delete(self, alert_id: str) -> Any:
        return await request_json(self.client, "DELETE", f"/alerts/{alert_id}")
