from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Dict

from pydantic import BaseModel, Field


class DateBounds(BaseModel):
    """Inclusive timestamp window a report covers."""
    start_ts: datetime = Field(description="Start timestamp")
    end_ts: datetime = Field(description="End timestamp")


class SalesSummary(BaseModel):
    """Totals shown on the sales summary report."""
    total_sales: Decimal = Field(description="Sum of work order totals")
    advance_payments: Decimal = Field(description="Sum of advances collected")
    tax_details: Dict[str, Decimal] = Field(default_factory=dict, description='GST collected per rate, keyed like "12%"')
