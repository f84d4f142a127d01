"""
Per-session state for the admin screen.

Each browser session owns a ``SessionContext``: its own payment store, alert
store, notifier and page state. Contexts live in a ``SessionRegistry`` that
the application creates at startup; they are torn down when closed
explicitly, when idle longer than the configured timeout, and at shutdown.
"""
import logging
import uuid
from datetime import datetime, timedelta
from typing import Optional
import httpx
from app.services.alert_api import AlertService
from app.services.alerts import AlertEmitter
from app.services.notifier import Notifier
from app.services.payment_api import PaymentService
from app.services.payments_view import PaymentsViewState
from app.services.student_api import StudentService
from app.stores.alert_store import AlertStore
from app.stores.payment_store import PaymentStore

logger = logging.getLogger(__name__)


class SessionContext:
    def __init__(self, session_id: str, client: httpx.AsyncClient):
        self.session_id = session_id
        self.created_at = datetime.utcnow()
        self.last_seen = self.created_at

        alert_service = AlertService(client)
        self.notifier = Notifier()
        self.students = StudentService(client)
        self.payment_store = PaymentStore(PaymentService(client), AlertEmitter(alert_service), self.notifier)
        self.alert_store = AlertStore(alert_service, self.notifier)
        self.view = PaymentsViewState()

    def touch(self) -> None:
        self.last_seen = datetime.utcnow()

    def teardown(self) -> None:
        self.payment_store.reset()
        self.alert_store.reset()
        self.notifier.drain()
        self.view = PaymentsViewState()


class SessionRegistry:
    def __init__(self, client: httpx.AsyncClient, idle_timeout: timedelta):
        self.client = client
        self.idle_timeout = idle_timeout
        self._sessions: dict[str, SessionContext] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def create(self) -> SessionContext:
        self.close_idle()
        session_id = uuid.uuid4().hex
        context = SessionContext(session_id, self.client)
        self._sessions[session_id] = context
        logger.info(f"Session {session_id} opened ({len(self._sessions)} active)")
        return context

    def get(self, session_id: Optional[str]) -> Optional[SessionContext]:
        if not session_id:
            return None
        context = self._sessions.get(session_id)
        if context is None:
            return None
        if datetime.utcnow() - context.last_seen > self.idle_timeout:
            self.close(session_id)
            return None
        context.touch()
        return context

    def close(self, session_id: str) -> bool:
        context = self._sessions.pop(session_id, None)
        if context is None:
            return False
        context.teardown()
        logger.info(f"Session {session_id} closed ({len(self._sessions)} active)")
        return True

    def close_idle(self, now: Optional[datetime] = None) -> int:
        now = now or datetime.utcnow()
        expired = [
            sid for sid, context in self._sessions.items()
            if now - context.last_seen > self.idle_timeout
        ]
        for sid in expired:
            self.close(sid)
        if expired:
            logger.info(f"Closed {len(expired)} idle session(s)")
        return len(expired)

    async def sweep(self, now: Optional[datetime] = None) -> int:
        return self.close_idle(now)

    def close_all(self) -> None:
        for sid in list(self._sessions):
            self.close(sid)
