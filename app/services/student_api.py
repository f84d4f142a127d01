import httpx
from pydantic import TypeAdapter, ValidationError
from app.core.http import ApiError, request_json
from app.schemas.student import StudentSummary

_student_list = TypeAdapter(list[StudentSummary])


class StudentService:
    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def get_all(self) -> list[StudentSummary]:
        data = await request_json(self.client, "GET", "/students")
        if isinstance(data, dict):
            data = data.get("students")
        if not isinstance(data, list):
            return []
        try:
            return _student_list.validate_python(data)
        except ValidationError as e:
            raise ApiError(f"Malformed students list: {e.error_count()} invalid field(s)") from e
