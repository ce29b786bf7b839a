from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from ...billing.parsing import ZERO, parse_number_or_zero


class PrivilegeCard(BaseModel):
    """Loyalty (privilege) card issued to a customer."""
    pc_number: str = Field(min_length=1, description="Card number printed as the barcode")
    customer_id: str = Field(min_length=1, description="Customer the card belongs to")
    name: str = Field(description="Name printed on the card")
    phone: Optional[str] = Field(default=None, description="Customer phone number")
    loyalty_points: Decimal = Field(default=ZERO, description="Current loyalty points balance")
    created_at: datetime = Field(default_factory=datetime.now, description="When the card was issued")

    @field_validator("loyalty_points", mode="before")
    @classmethod
    def _lenient_points(cls, value: Any) -> Decimal:
        return parse_number_or_zero(value)
