import pytest
from app.models.enums import NotificationLevel


@pytest.mark.asyncio
async def test_fetch_normalises_read_flag(backend, alert_store):
    backend.add_alert("one", read=True)
    backend.add_alert("two", read=False)

    await alert_store.fetch_alerts()

    assert [a.read for a in alert_store.alerts] == [True, False]
    assert alert_store.unread_count == 1
    assert alert_store.loading is False


@pytest.mark.asyncio
async def test_fetch_failure_is_silent(backend, alert_store, notifier):
    backend.add_alert("one")
    await alert_store.fetch_alerts()
    backend.fail("GET", "/alerts", 500)

    await alert_store.fetch_alerts()

    assert alert_store.loading is False
    assert len(alert_store.alerts) == 1
    assert notifier.peek() == []


@pytest.mark.asyncio
async def test_mark_as_read_patches_one_record(backend, alert_store):
    first = backend.add_alert("one")
    backend.add_alert("two")
    await alert_store.fetch_alerts()
    backend.requests.clear()

    result = await alert_store.mark_as_read(first["_id"])

    assert result.success is True
    assert [a.read for a in alert_store.alerts] == [True, False]
    assert backend.calls("GET", "/alerts") == []


@pytest.mark.asyncio
async def test_mark_as_read_failure_returns_result(backend, alert_store):
    first = backend.add_alert("one")
    await alert_store.fetch_alerts()
    backend.fail("PATCH", f"/alerts/{first['_id']}/read", 500)

    result = await alert_store.mark_as_read(first["_id"])

    assert result.success is False
    assert alert_store.alerts[0].read is False


@pytest.mark.asyncio
async def test_mark_all_as_read(backend, alert_store, notifier):
    backend.add_alert("one")
    backend.add_alert("two")
    await alert_store.fetch_alerts()

    result = await alert_store.mark_all_as_read()

    assert result.success is True
    assert [a.read for a in alert_store.alerts] == [True, True]
    assert alert_store.unread_count == 0
    assert [n.message for n in notifier.peek() if n.level == NotificationLevel.SUCCESS] == [
        "All alerts marked as read"
    ]


@pytest.mark.asyncio
async def test_mark_all_as_read_failure(backend, alert_store, notifier):
    backend.add_alert("one")
    await alert_store.fetch_alerts()
    backend.fail("PATCH", "/alerts/read-all", 500)

    result = await alert_store.mark_all_as_read()

    assert result.success is False
    assert alert_store.alerts[0].read is False
    assert notifier.peek() == []


@pytest.mark.asyncio
async def test_delete_removes_from_cache(backend, alert_store):
    first = backend.add_alert("one")
    second = backend.add_alert("two")
    await alert_store.fetch_alerts()

    result = await alert_store.delete_alert(first["_id"])

    assert result.success is True
    assert [a.id for a in alert_store.alerts] == [second["_id"]]
    assert alert_store.loading is False


@pytest.mark.asyncio
async def test_delete_failure_clears_loading(backend, alert_store):
    first = backend.add_alert("one")
    await alert_store.fetch_alerts()
    backend.fail("DELETE", f"/alerts/{first['_id']}", 500)

    result = await alert_store.delete_alert(first["_id"])

    assert result.success is False
    assert alert_store.loading is False
    assert len(alert_store.alerts) == 1
