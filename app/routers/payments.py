import logging
from datetime import datetime
from typing import Annotated, Any, Literal, Optional
from fastapi import APIRouter, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse, StreamingResponse
from app.core.http import ApiError
from app.core.templates import templates
from app.deps import CurrentSession
from app.models.enums import Month, PaymentType, StatusFilter
from app.schemas.common import DataResponse
from app.schemas.payment import PaymentSummary, PaymentUpdate
from app.services.payments_view import (
    DepositForm,
    PendingForm,
    calculate_totals,
    filter_payments,
    toggled_status,
)
from app.services.sessions import SessionContext
from app.services.validation import PaymentValidationError
from app.utils.excel import payments_workbook

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payments", tags=["Payments"])


def _back_to_payments() -> RedirectResponse:
    return RedirectResponse(url="/payments", status_code=303)


async def _load_students(session: SessionContext):
    try:
        return await session.students.get_all()
    except ApiError as e:
        logger.error(f"Error fetching students: {e.message}")
        return []


@router.get("", response_class=HTMLResponse)
async def payments_page(
    request: Request,
    session: CurrentSession,
    search: Optional[str] = None,
    status: Optional[StatusFilter] = None,
    refresh: bool = False,
):
    """
    Payments page.

    The first visit of a session (or ?refresh=1) loads payments and students
    from the backend; later visits render from the session cache.
    """
    view = session.view
    view.set_filters(search, status.value if status else None)

    if not view.mounted or refresh:
        await session.payment_store.fetch_payments()
        view.students = await _load_students(session)
        view.mounted = True

    store = session.payment_store
    return templates.TemplateResponse(
        request,
        "payments.html",
        {
            "store": store,
            "view": view,
            "payments": filter_payments(store.payments, view.search, view.status_filter),
            "totals": calculate_totals(store.payments),
            "months": [m.value for m in Month],
            "payment_types": [t.value for t in PaymentType],
            "status_filters": [s.value for s in StatusFilter],
            "notifications": session.notifier.drain(),
            "unread_alerts": session.alert_store.unread_count,
        },
    )


@router.get("/summary", response_model=DataResponse[PaymentSummary])
async def payments_summary(
    session: CurrentSession,
    search: Optional[str] = None,
    status: Optional[StatusFilter] = None,
):
    view = session.view
    search = view.search if search is None else search
    status = view.status_filter if status is None else status
    payments = session.payment_store.payments
    filtered = filter_payments(payments, search, status)

    return DataResponse(data=PaymentSummary(
        totals=calculate_totals(payments),
        count=len(payments),
        filtered_count=len(filtered),
        search=search,
        status=status.value,
    ))


@router.get("/export")
async def export_payments(session: CurrentSession):
    """Export the payments currently shown in the table to Excel."""
    view = session.view
    filtered = filter_payments(session.payment_store.payments, view.search, view.status_filter)
    excel_file = payments_workbook(filtered)

    filename = f"payments_{view.status_filter.value}_{datetime.now().strftime('%Y%m%d_%H%M%S')}.xlsx"
    return StreamingResponse(
        excel_file,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f"attachment; filename={filename}"}
    )


@router.get("/student/{student_id}", response_model=DataResponse[Any])
async def student_payment(student_id: str, session: CurrentSession):
    try:
        data = await session.payment_store.get_student_payment(student_id)
    except ApiError as e:
        raise HTTPException(status_code=e.status_code or 502, detail=e.user_message("Failed to fetch student payment"))

    return DataResponse(data=data)


@router.post("/forms/{form}/{action}")
async def toggle_form(
    form: Literal["add", "deposit"],
    action: Literal["open", "close"],
    session: CurrentSession,
):
    if action == "open":
        session.view.open_form(form)
    else:
        session.view.close_form(form)
    return _back_to_payments()


@router.post("/add-pending")
async def submit_pending_payment(
    session: CurrentSession,
    student_id: Annotated[str, Form(alias="studentId")] = "",
    amount: Annotated[str, Form()] = "",
    month: Annotated[str, Form()] = "",
    year: Annotated[str, Form()] = "",
):
    view = session.view
    view.add_form = PendingForm(studentId=student_id, amount=amount, month=month, year=year)

    try:
        await session.payment_store.add_pending_payment(view.add_form.as_input())
    except PaymentValidationError as e:
        logger.info(f"Rejected pending payment form: {e}")
        view.add_errors = e.errors
        view.show_add_form = True
        return _back_to_payments()
    except ApiError as e:
        logger.error(f"Error adding payment: {e.message}")

    view.reset_add_form()
    return _back_to_payments()


@router.post("/deposit")
async def submit_deposit(
    session: CurrentSession,
    student_id: Annotated[str, Form(alias="studentId")] = "",
    amount: Annotated[str, Form()] = "",
    month: Annotated[str, Form()] = "",
    year: Annotated[str, Form()] = "",
    payment_type: Annotated[str, Form(alias="paymentType")] = PaymentType.CASH.value,
):
    view = session.view
    view.deposit_form = DepositForm(
        studentId=student_id, amount=amount, month=month, year=year, paymentType=payment_type,
    )

    try:
        await session.payment_store.deposit_payment(view.deposit_form.as_input())
    except PaymentValidationError as e:
        logger.info(f"Rejected deposit form: {e}")
        view.deposit_errors = e.errors
        view.show_deposit_form = True
        return _back_to_payments()
    except ApiError as e:
        logger.error(f"Error depositing payment: {e.message}")

    view.reset_deposit_form()
    return _back_to_payments()


@router.post("/{payment_id}/status")
async def toggle_payment_status(payment_id: str, session: CurrentSession):
    payment = session.payment_store.get_cached(payment_id)

    if not payment:
        raise HTTPException(status_code=404, detail="Payment not found")

    try:
        await session.payment_store.update_payment(payment_id, PaymentUpdate(status=toggled_status(payment.status)))
    except ApiError as e:
        logger.error(f"Error updating payment: {e.message}")

    return _back_to_payments()


@router.get("/{payment_id}/delete", response_class=HTMLResponse)
async def confirm_delete_page(payment_id: str, request: Request, session: CurrentSession):
    payment = session.payment_store.get_cached(payment_id)

    if not payment:
        raise HTTPException(status_code=404, detail="Payment not found")

    return templates.TemplateResponse(request, "confirm_delete.html", {"payment": payment})


@router.post("/{payment_id}/delete")
async def delete_payment(
    payment_id: str,
    session: CurrentSession,
    confirm: Annotated[str, Form()] = "",
):
    if confirm != "yes":
        return _back_to_payments()

    try:
        await session.payment_store.delete_payment(payment_id)
    except ApiError as e:
        logger.error(f"Error deleting payment: {e.message}")

    return _back_to_payments()
