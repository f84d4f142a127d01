from typing import Optional
from pydantic import BaseModel, Field


class StudentSummary(BaseModel):
    id: str = Field(alias="_id")
    name: Optional[str] = None
    email: Optional[str] = None

    class Config:
        populate_by_name = True
        coerce_numbers_to_str = True
