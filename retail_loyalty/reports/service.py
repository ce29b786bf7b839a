from __future__ import annotations

from datetime import date
from typing import Optional

from ..data.interface import DataAccess
from ..data.models import DateBounds, SalesSummary, WorkOrderFilters
from .pdf import render_summary_pdf
from .summary import daily_window, generate_sales_summary, monthly_window


def summarize(data_access: DataAccess, window: DateBounds) -> SalesSummary:
    orders = data_access.list_work_orders(WorkOrderFilters(start_ts=window.start_ts, end_ts=window.end_ts))
    return generate_sales_summary(orders)


def daily_report_pdf(data_access: DataAccess, day: Optional[date] = None) -> bytes:
    """Sales summary PDF for one day (today by default)."""
    window = daily_window(day)
    return render_summary_pdf(summarize(data_access, window), title="Daily Sales Summary Report")


def monthly_report_pdf(data_access: DataAccess, year: int, month: int) -> bytes:
    """Sales summary PDF for one calendar month."""
    window = monthly_window(year, month)
    return render_summary_pdf(summarize(data_access, window), title="Monthly Sales Summary Report")
