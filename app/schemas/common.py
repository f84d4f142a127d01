from typing import Generic, TypeVar, Optional
from pydantic import BaseModel


T = TypeVar("T")


class DataResponse(BaseModel, Generic[T]):
    data: T
    message: Optional[str] = None


class FieldError(BaseModel):
    field: str
    message: str


class ActionResult(BaseModel):
    success: bool
