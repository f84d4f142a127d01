"""
Pure derivations behind the payments page, plus its per-session UI state.

filter_payments(payments, search, status)
    Records whose student name or email contains ``search``
    (case-insensitive) and whose status matches ``status`` ("all" matches
    every status).

calculate_totals(payments)
    Total, paid and pending sums over the whole cache and the collected
    percentage, rounded half up.
"""
import math
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional, Union
from app.models.enums import PaymentStatus, PaymentType, StatusFilter
from app.schemas.common import FieldError
from app.schemas.payment import PaymentRead, PaymentTotals
from app.schemas.student import StudentSummary


def _matches_search(payment: PaymentRead, search: str) -> bool:
    term = search.lower()
    if term in payment.student_name.lower():
        return True
    email = payment.student_email
    return bool(email) and term in email.lower()


def filter_payments(
    payments: Iterable[PaymentRead],
    search: str = "",
    status: Union[StatusFilter, str] = StatusFilter.ALL,
) -> list[PaymentRead]:
    status = StatusFilter(status)
    return [
        p for p in payments
        if _matches_search(p, search or "")
        and (status == StatusFilter.ALL or p.status.value == status.value)
    ]


def collection_percent(paid: float, total: float) -> int:
    if total <= 0:
        return 0
    return math.floor(paid / total * 100 + 0.5)


def calculate_totals(payments: Iterable[PaymentRead]) -> PaymentTotals:
    total = 0.0
    paid = 0.0
    for p in payments:
        total += p.amount
        if p.status == PaymentStatus.PAID:
            paid += p.amount

    return PaymentTotals(
        total=total,
        paid=paid,
        pending=total - paid,
        collection_percent=collection_percent(paid, total),
    )


def toggled_status(status: PaymentStatus) -> PaymentStatus:
    return PaymentStatus.PAID if status == PaymentStatus.PENDING else PaymentStatus.PENDING


def _current_year() -> str:
    return str(date.today().year)


@dataclass
class PendingForm:
    studentId: str = ""
    amount: str = ""
    month: str = ""
    year: str = field(default_factory=_current_year)

    def as_input(self) -> dict:
        return {"studentId": self.studentId, "amount": self.amount, "month": self.month, "year": self.year}


@dataclass
class DepositForm(PendingForm):
    paymentType: str = PaymentType.CASH.value

    def as_input(self) -> dict:
        return {**super().as_input(), "paymentType": self.paymentType}


@dataclass
class PaymentsViewState:
    show_add_form: bool = False
    show_deposit_form: bool = False
    add_form: PendingForm = field(default_factory=PendingForm)
    deposit_form: DepositForm = field(default_factory=DepositForm)
    add_errors: list[FieldError] = field(default_factory=list)
    deposit_errors: list[FieldError] = field(default_factory=list)
    search: str = ""
    status_filter: StatusFilter = StatusFilter.ALL
    students: list[StudentSummary] = field(default_factory=list)
    mounted: bool = False

    def open_form(self, name: str) -> None:
        if name == "add":
            self.show_add_form = True
        elif name == "deposit":
            self.show_deposit_form = True
        else:
            raise ValueError(f"Unknown form: {name}")

    def close_form(self, name: str) -> None:
        if name == "add":
            self.show_add_form = False
            self.add_errors = []
        elif name == "deposit":
            self.show_deposit_form = False
            self.deposit_errors = []
        else:
            raise ValueError(f"Unknown form: {name}")

    def reset_add_form(self) -> None:
        self.add_form = PendingForm()
        self.add_errors = []
        self.show_add_form = False

    def reset_deposit_form(self) -> None:
        self.deposit_form = DepositForm()
        self.deposit_errors = []
        self.show_deposit_form = False

    def set_filters(self, search: Optional[str] = None, status: Optional[str] = None) -> None:
        if search is not None:
            self.search = search
        if status is not None:
            self.status_filter = StatusFilter(status)
