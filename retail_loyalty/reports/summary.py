from __future__ import annotations

import calendar
from datetime import date, datetime, time
from decimal import Decimal
from typing import Dict, Iterable, Optional

from ..billing.parsing import ZERO, parse_number_or_zero
from ..data.models import DateBounds, SalesSummary, WorkOrderRecord


def daily_window(day: Optional[date] = None) -> DateBounds:
    """Whole calendar day, midnight to the last microsecond."""
    day = day or date.today()
    return DateBounds(start_ts=datetime.combine(day, time.min), end_ts=datetime.combine(day, time.max))


def monthly_window(year: int, month: int) -> DateBounds:
    """First to last day of the month, inclusive."""
    last_day = calendar.monthrange(year, month)[1]
    return DateBounds(
        start_ts=datetime.combine(date(year, month, 1), time.min),
        end_ts=datetime.combine(date(year, month, last_day), time.max),
    )


def generate_sales_summary(work_orders: Iterable[WorkOrderRecord]) -> SalesSummary:
    """Total sales, advances collected and GST collected per rate."""
    total_sales = ZERO
    advance_payments = ZERO
    tax_details: Dict[str, Decimal] = {}

    for order in work_orders:
        total_sales += order.total_amount
        advance_payments += parse_number_or_zero(order.advance_details)

        if order.tax_rate:
            key = f"{order.tax_rate}%"
            tax = order.total_amount * Decimal(order.tax_rate) / Decimal(100)
            tax_details[key] = tax_details.get(key, ZERO) + tax

    return SalesSummary(total_sales=total_sales, advance_payments=advance_payments, tax_details=tax_details)
