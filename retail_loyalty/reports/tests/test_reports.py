from datetime import date, datetime
from decimal import Decimal

from retail_loyalty.billing.work_orders import build_work_order
from retail_loyalty.data.backends.csv_backend import CsvDataAccess
from retail_loyalty.data.models import SalesSummary, WorkOrderRecord
from retail_loyalty.reports.pdf import render_summary_pdf
from retail_loyalty.reports.service import daily_report_pdf, monthly_report_pdf, summarize
from retail_loyalty.reports.summary import daily_window, generate_sales_summary, monthly_window


def _order(work_order_id, price, category=None, advance=0, day=1):
    return build_work_order(
        work_order_id,
        [{"price": price, "quantity": 1, "category": category}],
        "Asha",
        advance_details=advance,
        now=datetime(2026, 10, day, 12, 0),
    )


def test_sales_summary_totals_and_tax_per_rate():
    summary = generate_sales_summary([
        _order("1", 1000, advance="500"),
        _order("2", 2000, category="sunglasses"),
        _order("3", 500, advance="x"),
    ])
    assert summary.total_sales == 3500
    assert summary.advance_payments == 500
    assert summary.tax_details == {"12%": Decimal("180"), "18%": Decimal("360")}


def test_orders_without_tax_rate_add_no_tax():
    order = WorkOrderRecord(
        work_order_id="9",
        product_entries=[],
        employee="Asha",
        total_amount=Decimal("300"),
        tax_rate=None,
    )
    summary = generate_sales_summary([order])
    assert summary.total_sales == 300
    assert summary.tax_details == {}


def test_empty_summary():
    summary = generate_sales_summary([])
    assert summary.total_sales == 0
    assert summary.advance_payments == 0
    assert summary.tax_details == {}


def test_report_windows():
    day = daily_window(date(2026, 10, 18))
    assert day.start_ts == datetime(2026, 10, 18, 0, 0)
    assert day.end_ts.date() == date(2026, 10, 18)
    assert day.end_ts.hour == 23

    feb = monthly_window(2024, 2)
    assert feb.start_ts == datetime(2024, 2, 1)
    assert feb.end_ts.date() == date(2024, 2, 29)

    april = monthly_window(2026, 4)
    assert april.end_ts.date() == date(2026, 4, 30)


def test_render_summary_pdf():
    summary = SalesSummary(
        total_sales=Decimal("3500"),
        advance_payments=Decimal("500"),
        tax_details={"12%": Decimal("180")},
    )
    pdf = render_summary_pdf(summary)
    assert pdf.startswith(b"%PDF")


def test_reports_read_only_their_window(tmp_path):
    da = CsvDataAccess(data_dir=tmp_path)
    da.create_work_order(_order("1001", 1000, day=1))
    da.create_work_order(_order("1002", 2000, day=1))
    da.create_work_order(_order("1003", 4000, day=2))

    assert summarize(da, daily_window(date(2026, 10, 1))).total_sales == 3000
    assert summarize(da, monthly_window(2026, 10)).total_sales == 7000
    assert summarize(da, monthly_window(2026, 11)).total_sales == 0

    assert daily_report_pdf(da, date(2026, 10, 1)).startswith(b"%PDF")
    assert monthly_report_pdf(da, 2026, 10).startswith(b"%PDF")
