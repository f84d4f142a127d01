from typing import Optional
from pydantic import AliasChoices, BaseModel, Field
from app.models.enums import AlertType, AlertPriority


class AlertRead(BaseModel):
    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    title: str = ""
    message: str = ""
    type: AlertType = AlertType.INFO
    priority: AlertPriority = AlertPriority.MEDIUM
    # Older payloads name the flag ``isRead``
    read: bool = Field(default=False, validation_alias=AliasChoices("read", "isRead"))
    created_at: Optional[str] = Field(default=None, validation_alias=AliasChoices("createdAt", "created_at"))

    class Config:
        coerce_numbers_to_str = True


class AlertCreate(BaseModel):
    title: str
    message: str
    type: AlertType = AlertType.INFO
    priority: AlertPriority = AlertPriority.MEDIUM
