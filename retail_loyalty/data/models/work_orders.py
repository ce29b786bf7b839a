from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ...billing.parsing import ZERO
from .billing import LineItem


class WorkOrderRecord(BaseModel):
    """Persisted work order."""
    work_order_id: str = Field(description="Work order number")
    product_entries: List[LineItem] = Field(description="Line items on the order")
    description: Optional[str] = Field(default=None, description="Free-text notes")
    advance_details: Decimal = Field(default=ZERO, description="Advance paid when the order was taken")
    due_date: Optional[date] = Field(default=None, description="Promised delivery date")
    mr_number: Optional[str] = Field(default=None, description="Customer medical record number")
    patient_details: Optional[Dict[str, Any]] = Field(default=None, description="Customer details captured on the order")
    employee: str = Field(description="Employee who took the order")
    payment_method: Optional[str] = Field(default=None, description="cash, card, upi, ...")
    total_amount: Decimal = Field(description="Sum of price x quantity over all lines")
    tax_rate: Optional[int] = Field(default=None, description="GST rate in percent")
    is_b2b: bool = Field(default=False, description="Business-to-business order")
    created_at: datetime = Field(default_factory=datetime.now, description="Creation timestamp")
    updated_at: datetime = Field(default_factory=datetime.now, description="Last update timestamp")
