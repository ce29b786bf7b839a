from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional

from ..data.models import LineItem, WorkOrderRecord
from .calculator import LineItemLike, as_line_item, calculate_total_amount
from .parsing import parse_number_or_zero

# GST percent
SUNGLASSES_TAX_RATE = 18
DEFAULT_TAX_RATE = 12

FINANCIAL_YEAR_START_MONTH = 4


class WorkOrderValidationError(ValueError):
    """Raised when a work order is missing required fields."""


def determine_tax_rate(line_items: Iterable[LineItemLike]) -> int:
    """18% GST if the order contains sunglasses, 12% otherwise."""
    has_sunglasses = any(
        as_line_item(item).category == "sunglasses" for item in line_items or ()
    )
    return SUNGLASSES_TAX_RATE if has_sunglasses else DEFAULT_TAX_RATE


def financial_year(today: Optional[date] = None) -> str:
    """Indian financial year (April to March) label, e.g. ``"26-27"``."""
    today = today or date.today()
    start = today.year if today.month >= FINANCIAL_YEAR_START_MONTH else today.year - 1
    return f"{start % 100}-{(start + 1) % 100}"


def build_work_order(
    work_order_id: str,
    product_entries: List[LineItemLike],
    employee: str,
    *,
    description: Optional[str] = None,
    advance_details: Any = None,
    due_date: Optional[date] = None,
    mr_number: Optional[str] = None,
    patient_details: Optional[Dict[str, Any]] = None,
    payment_method: Optional[str] = None,
    is_b2b: bool = False,
    now: Optional[datetime] = None,
) -> WorkOrderRecord:
    """Validate a work order and stamp its total, tax rate and timestamps.

    Raises:
        WorkOrderValidationError: If the order number, line items or employee is missing.
    """
    if not work_order_id or not product_entries or not employee:
        raise WorkOrderValidationError("Required fields are missing")

    lines: List[LineItem] = [as_line_item(item) for item in product_entries]
    stamp = now or datetime.now()

    return WorkOrderRecord(
        work_order_id=work_order_id,
        product_entries=lines,
        description=description,
        advance_details=parse_number_or_zero(advance_details),
        due_date=due_date,
        mr_number=mr_number,
        patient_details=patient_details,
        employee=employee,
        payment_method=payment_method,
        total_amount=calculate_total_amount(lines),
        tax_rate=determine_tax_rate(lines),
        is_b2b=bool(is_b2b),
        created_at=stamp,
        updated_at=stamp,
    )
