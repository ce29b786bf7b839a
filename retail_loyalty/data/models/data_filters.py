from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class WorkOrderFilters(BaseModel):
    """Filters for the work order data."""
    start_ts: Optional[datetime] = Field(default=None, description="Start timestamp for creation date range")
    end_ts: Optional[datetime] = Field(default=None, description="End timestamp for creation date range")
    employee: Optional[str | list[str]] = Field(default=None, description="Employee filter (single employee or list of employees)")


class BillingFilters(BaseModel):
    """Filters for the billing data."""
    start_ts: Optional[datetime] = Field(default=None, description="Start timestamp for billing date range")
    end_ts: Optional[datetime] = Field(default=None, description="End timestamp for billing date range")
    customer_id: Optional[str | list[str]] = Field(default=None, description="Customer ID filter (single customer or list of customers)")
