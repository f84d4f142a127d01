from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from app.core.templates import templates
from app.deps import CurrentSession

router = APIRouter(prefix="/alerts", tags=["Alerts"])


def _back_to_alerts() -> RedirectResponse:
    return RedirectResponse(url="/alerts", status_code=303)


@router.get("", response_class=HTMLResponse)
async def alerts_page(request: Request, session: CurrentSession):
    store = session.alert_store
    await store.fetch_alerts()

    return templates.TemplateResponse(
        request,
        "alerts.html",
        {
            "store": store,
            "alerts": store.alerts,
            "notifications": session.notifier.drain(),
            "unread_alerts": store.unread_count,
        },
    )


@router.post("/read-all")
async def mark_all_alerts_read(session: CurrentSession):
    await session.alert_store.mark_all_as_read()
    return _back_to_alerts()


@router.post("/{alert_id}/read")
async def mark_alert_read(alert_id: str, session: CurrentSession):
    await session.alert_store.mark_as_read(alert_id)
    return _back_to_alerts()


@router.post("/{alert_id}/delete")
async def delete_alert(alert_id: str, session: CurrentSession):
    await session.alert_store.delete_alert(alert_id)
    return _back_to_alerts()
