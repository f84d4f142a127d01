from datetime import datetime, timedelta
import pytest
from app.core.security import create_session_token, decode_session_token
from app.schemas.payment import PaymentRead
from app.services.sessions import SessionRegistry


def test_session_token_round_trip():
    token = create_session_token("abc123")
    assert decode_session_token(token) == "abc123"


def test_expired_or_tampered_token_is_rejected():
    expired = create_session_token("abc123", expires_delta=timedelta(seconds=-5))
    assert decode_session_token(expired) is None
    assert decode_session_token(create_session_token("abc123") + "x") is None
    assert decode_session_token("not-a-token") is None


def test_each_session_gets_its_own_stores(api_client):
    registry = SessionRegistry(api_client, timedelta(minutes=5))

    first = registry.create()
    second = registry.create()

    assert first.session_id != second.session_id
    assert first.payment_store is not second.payment_store
    assert first.alert_store is not second.alert_store
    assert registry.get(first.session_id) is first
    assert registry.get(None) is None
    assert registry.get("missing") is None
    assert len(registry) == 2


def test_close_tears_down_state(api_client):
    registry = SessionRegistry(api_client, timedelta(minutes=5))
    context = registry.create()
    context.payment_store.payments = [PaymentRead(id="p1", amount=10)]
    context.view.search = "asha"
    context.notifier.success("done")

    assert registry.close(context.session_id) is True

    assert context.payment_store.payments == []
    assert context.view.search == ""
    assert context.notifier.peek() == []
    assert registry.get(context.session_id) is None
    assert registry.close(context.session_id) is False


@pytest.mark.asyncio
async def test_sweep_closes_idle_sessions(api_client):
    registry = SessionRegistry(api_client, timedelta(minutes=30))
    idle = registry.create()
    active = registry.create()
    idle.last_seen = datetime.utcnow() - timedelta(hours=1)

    closed = await registry.sweep()

    assert closed == 1
    assert registry.get(idle.session_id) is None
    assert registry.get(active.session_id) is active


def test_close_all(api_client):
    registry = SessionRegistry(api_client, timedelta(minutes=5))
    registry.create()
    registry.create()

    registry.close_all()

    assert len(registry) == 0


def test_idle_session_is_not_resumed(api_client):
    registry = SessionRegistry(api_client, timedelta(minutes=30))
    context = registry.create()
    context.view.search = "asha"
    context.last_seen = datetime.utcnow() - timedelta(hours=1)

    assert registry.get(context.session_id) is None
    assert context.session_id not in registry
    assert context.view.search == ""


def test_create_evicts_idle_sessions_without_sweeper(api_client):
    registry = SessionRegistry(api_client, timedelta(minutes=30))
    stale = registry.create()
    stale.last_seen = datetime.utcnow() - timedelta(hours=1)

    fresh = registry.create()

    assert len(registry) == 1
    assert stale.session_id not in registry
    assert fresh.session_id in registry
