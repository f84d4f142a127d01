import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("SESSION_SWEEP_ENABLED", "false")
os.environ.setdefault("API_BASE_URL", "http://backend.test")

import itertools
import json
import httpx
import pytest
from fastapi.testclient import TestClient

from app.services.alert_api import AlertService
from app.services.alerts import AlertEmitter
from app.services.notifier import Notifier
from app.services.payment_api import PaymentService
from app.stores.alert_store import AlertStore
from app.stores.payment_store import PaymentStore


class FakeBackend:
    """In-memory stand-in for the payments/alerts/students REST service."""

    def __init__(self):
        self.students = [
            {"_id": "s1", "name": "Asha Rao", "email": "asha@school.test"},
            {"_id": "s2", "name": "Vikram Singh", "email": "vikram@school.test"},
        ]
        self.payments: list[dict] = []
        self.alerts: list[dict] = []
        self.requests: list[httpx.Request] = []
        self.failures: dict[tuple[str, str], httpx.Response] = {}
        self._ids = itertools.count(1)

    # helpers used by tests

    def next_id(self, prefix: str) -> str:
        return f"{prefix}{next(self._ids)}"

    def add_payment(self, student_id="s1", amount=500, month="May", year=2024, status="pending", payment_type=None):
        record = {
            "_id": self.next_id("p"),
            "studentId": student_id,
            "amount": amount,
            "month": month,
            "year": year,
            "status": status,
        }
        if payment_type:
            record["paymentType"] = payment_type
        self.payments.append(record)
        return record

    def add_alert(self, title="Note", read=False):
        record = {"_id": self.next_id("a"), "title": title, "message": title, "type": "info",
                  "priority": "low", "isRead": read}
        self.alerts.append(record)
        return record

    def fail(self, method: str, path: str, status_code: int = 500, message: str | None = None):
        body = {"message": message} if message else {}
        self.failures[(method, path)] = httpx.Response(status_code, json=body)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    # transport

    def _populated(self, payment: dict) -> dict:
        student = next((s for s in self.students if s["_id"] == payment["studentId"]), None)
        return {**payment, "studentId": student or payment["studentId"]}

    def _find(self, payment_id: str):
        return next((p for p in self.payments if str(p["_id"]) == payment_id), None)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        method, path = request.method, request.url.path

        if (method, path) in self.failures:
            return self.failures[(method, path)]

        body = json.loads(request.content) if request.content else None
        parts = path.strip("/").split("/")

        if parts[0] == "students" and method == "GET":
            return httpx.Response(200, json=self.students)

        if parts[0] == "payments":
            return self._handle_payments(method, parts[1:], request, body)

        if parts[0] == "alerts":
            return self._handle_alerts(method, parts[1:], body)

        return httpx.Response(404, json={"message": "Not found"})

    def _handle_payments(self, method, parts, request, body):
        if not parts and method == "GET":
            status = request.url.params.get("status")
            rows = [p for p in self.payments if not status or p["status"] == status]
            return httpx.Response(200, json={"payments": [self._populated(p) for p in rows]})

        if parts == ["addPending"] and method == "POST":
            record = self.add_payment(body["studentId"], body["amount"], body["month"], body["year"])
            return httpx.Response(201, json={"message": "Pending payment added", "paymentData": record})

        if parts == ["depositPayment"] and method == "PUT":
            record = next(
                (p for p in self.payments
                 if (p["studentId"], p["month"], p["year"]) == (body["studentId"], body["month"], body["year"])),
                None,
            )
            if record is None:
                record = self.add_payment(body["studentId"], body["amount"], body["month"], body["year"])
            record.update(amount=body["amount"], status="paid", paymentType=body["paymentType"])
            return httpx.Response(200, json=record)

        if len(parts) == 2 and parts[0] == "get" and method == "GET":
            rows = [p for p in self.payments if p["studentId"] == parts[1]]
            return httpx.Response(200, json={"payments": rows})

        if len(parts) == 2 and parts[0] == "update" and method == "PATCH":
            record = self._find(parts[1])
            if record is None:
                return httpx.Response(404, json={"message": "Payment not found"})
            record.update(body or {})
            return httpx.Response(200, json=record)

        if len(parts) == 2 and parts[0] == "delete" and method == "DELETE":
            record = self._find(parts[1])
            if record is None:
                return httpx.Response(404, json={"message": "Payment not found"})
            self.payments.remove(record)
            return httpx.Response(200, json={"message": "Payment deleted"})

        return httpx.Response(404, json={"message": "Not found"})

    def _handle_alerts(self, method, parts, body):
        if not parts and method == "GET":
            return httpx.Response(200, json=self.alerts)

        if not parts and method == "POST":
            record = {"_id": self.next_id("a"), **body, "isRead": False}
            self.alerts.append(record)
            return httpx.Response(201, json=record)

        if parts == ["read-all"] and method == "PATCH":
            for alert in self.alerts:
                alert["isRead"] = True
            return httpx.Response(200, json={"message": "ok"})

        if len(parts) == 2 and parts[1] == "read" and method == "PATCH":
            for alert in self.alerts:
                if alert["_id"] == parts[0]:
                    alert["isRead"] = True
            return httpx.Response(200, json={"message": "ok"})

        if len(parts) == 1 and method == "DELETE":
            self.alerts = [a for a in self.alerts if a["_id"] != parts[0]]
            return httpx.Response(200, json={"message": "Alert deleted"})

        return httpx.Response(404, json={"message": "Not found"})


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def api_client(backend):
    return httpx.AsyncClient(transport=httpx.MockTransport(backend.handle), base_url="http://backend.test")


@pytest.fixture
def notifier():
    return Notifier()


@pytest.fixture
def payment_store(api_client, notifier):
    return PaymentStore(PaymentService(api_client), AlertEmitter(AlertService(api_client)), notifier)


@pytest.fixture
def alert_store(api_client, notifier):
    return AlertStore(AlertService(api_client), notifier)


@pytest.fixture
def client(api_client):
    from main import app

    app.state.api_client = api_client
    with TestClient(app) as test_client:
        yield test_client
