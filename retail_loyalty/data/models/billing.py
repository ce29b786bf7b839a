from __future__ import annotations

import math
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...billing.parsing import ZERO, parse_int_or_zero, parse_number_or_zero


class LineItem(BaseModel):
    """A priced cart line. Malformed price or quantity is read as zero."""
    price: Decimal = Field(default=ZERO, description="Unit price")
    quantity: int = Field(default=0, description="Units sold")
    name: Optional[str] = Field(default=None, description="Product name")
    category: Optional[str] = Field(default=None, description="Product category (drives the GST rate)")

    @field_validator("price", mode="before")
    @classmethod
    def _lenient_price(cls, value: Any) -> Decimal:
        return parse_number_or_zero(value)

    @field_validator("quantity", mode="before")
    @classmethod
    def _lenient_quantity(cls, value: Any) -> int:
        return parse_int_or_zero(value)

    @field_validator("name", "category", mode="before")
    @classmethod
    def _optional_text(cls, value: Any) -> Optional[str]:
        if value is None or value == "" or (isinstance(value, float) and math.isnan(value)):
            return None
        return str(value)


class AmountsResult(BaseModel):
    """Amounts owed for one cart."""
    model_config = ConfigDict(frozen=True)

    total_amount: Decimal = Field(description="Sum of price x quantity over all lines")
    remaining_balance: Decimal = Field(description="Total minus the advance already paid")
    discount: Decimal = Field(description="Loyalty points redeemed as a discount")
    final_amount: Decimal = Field(description="Amount still due, never negative")


class LoyaltyResult(BaseModel):
    """Loyalty balance after one transaction."""
    model_config = ConfigDict(frozen=True)

    updated_points: Decimal = Field(description="Balance after redemption and accrual")
    points_to_redeem: Decimal = Field(description="Points spent on this transaction")
    points_to_add: int = Field(default=0, description="Points earned on this transaction")


class Settlement(BaseModel):
    """Amounts and loyalty update derived together from one cart."""
    model_config = ConfigDict(frozen=True)

    amounts: AmountsResult
    loyalty: LoyaltyResult


class BillingRecord(BaseModel):
    """Persisted outcome of one checkout."""
    customer_id: str = Field(description="Customer the bill belongs to")
    pc_number: Optional[str] = Field(default=None, description="Privilege card used, if any")
    total_amount: Decimal = Field(description="Cart total before advance and discount")
    advance_amount: Decimal = Field(default=ZERO, description="Advance already paid")
    discount: Decimal = Field(default=ZERO, description="Loyalty discount applied")
    final_amount: Decimal = Field(description="Amount collected")
    payment_method: Optional[str] = Field(default=None, description="cash, card, upi, ...")
    loyalty_points_redeemed: Decimal = Field(default=ZERO, description="Points spent")
    loyalty_points_added: int = Field(default=0, description="Points earned")
    created_at: datetime = Field(default_factory=datetime.now, description="When the bill was created")


class Voucher(BaseModel):
    """Flat sales record handed to the accounting export."""
    voucher_date: date = Field(description="Voucher date")
    total_amount: Decimal = Field(description="Sale amount")
    customer: str = Field(description="Party name on the voucher")
