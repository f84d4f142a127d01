from typing import Optional
from app.core.config import settings


def format_amount(amount: Optional[float], grouping: bool = False) -> str:
    """1000.0 -> "1000", 1234.5 -> "1,234.5" with grouping."""
    if amount is None:
        return ""
    value = float(amount)
    if value.is_integer():
        return f"{int(value):,}" if grouping else str(int(value))
    text = f"{value:,.2f}" if grouping else f"{value:.2f}"
    return text.rstrip("0").rstrip(".")


def format_money(amount: Optional[float]) -> str:
    return f"{settings.CURRENCY_SYMBOL}{format_amount(amount or 0, grouping=True)}"


def initials(name: Optional[str]) -> str:
    if not name:
        return "N/A"
    return "".join(part[0] for part in name.split())
