from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field

from ..billing.calculator import LineItemLike, settle
from ..billing.parsing import ZERO, parse_number_or_zero
from ..config import get_config
from ..data.interface import DataAccess
from ..data.models import BillingRecord, LineItem, PrivilegeCard, Settlement, Voucher
from ..integrations.tally import TallyExporter
from ..logging import get_logger


class CheckoutRequest(BaseModel):
    """Everything the order page submits for one bill."""
    customer_id: str = Field(min_length=1, description="Customer being billed")
    customer_name: str = Field(description="Party name used on the accounting voucher")
    line_items: List[LineItem] = Field(default_factory=list, description="Cart lines")
    advance_amount: Any = Field(default=None, description="Advance already paid, free text allowed")
    redeem: bool = Field(default=False, description="Spend loyalty points on this bill")
    pc_number: Optional[str] = Field(default=None, description="Privilege card presented, if any")
    payment_method: Optional[str] = Field(default=None, description="cash, card, upi, ...")


class CheckoutResult(BaseModel):
    settlement: Settlement
    billing_record: BillingRecord
    privilege_card: Optional[PrivilegeCard] = None
    voucher_queued: bool = False


class CheckoutService:
    """Bill a cart: settle amounts and points, persist both, queue the accounting voucher.

    Only customers with a privilege card redeem or earn points; everyone else is
    billed with a zero balance and nothing is accrued.
    """

    def __init__(self, data_access: DataAccess, exporter: Optional[TallyExporter] = None) -> None:
        self.data_access = data_access
        self.exporter = exporter
        self.config = get_config()
        self.logger = get_logger(__name__)

    def find_card(self, customer_id: str, pc_number: Optional[str]) -> Optional[PrivilegeCard]:
        if not pc_number:
            return self.data_access.find_privilege_card_by_customer(customer_id)

        card = self.data_access.get_privilege_card(pc_number)
        if card is None:
            self.logger.warning(f"Privilege card {pc_number} not found, billing without loyalty")
            return None
        if card.customer_id != customer_id:
            # A card only redeems or earns for the customer it was issued to
            self.logger.warning(
                f"Privilege card {pc_number} belongs to customer {card.customer_id}, not {customer_id}; "
                f"billing without loyalty"
            )
            return None
        return card

    def preview(
        self,
        line_items: List[LineItemLike],
        advance_amount: Any,
        redeem: bool,
        card: Optional[PrivilegeCard] = None,
    ) -> Settlement:
        """Settlement for the current cart without persisting anything."""
        points = card.loyalty_points if card else ZERO
        return settle(
            line_items,
            advance_amount,
            redeem and card is not None,
            points,
            accrual_rate=self.config.loyalty_accrual_rate,
            accrual_cap=self.config.loyalty_accrual_cap if card else 0,
        )

    def checkout(self, request: CheckoutRequest, now: Optional[datetime] = None) -> CheckoutResult:
        now = now or datetime.now()
        card = self.find_card(request.customer_id, request.pc_number)

        settlement = self.preview(request.line_items, request.advance_amount, request.redeem, card)
        amounts, loyalty = settlement.amounts, settlement.loyalty
        self.logger.info(
            f"[customer={request.customer_id}] amounts: total={amounts.total_amount} "
            f"remaining={amounts.remaining_balance} discount={amounts.discount} final={amounts.final_amount}"
        )

        # The bill is written first: a failed write must leave the points balance untouched
        record = self.data_access.create_billing_record(
            BillingRecord(
                customer_id=request.customer_id,
                pc_number=card.pc_number if card else None,
                total_amount=amounts.total_amount,
                advance_amount=parse_number_or_zero(request.advance_amount),
                discount=amounts.discount,
                final_amount=amounts.final_amount,
                payment_method=request.payment_method,
                loyalty_points_redeemed=loyalty.points_to_redeem,
                loyalty_points_added=loyalty.points_to_add,
                created_at=now,
            )
        )

        if card is not None:
            card = self.data_access.update_loyalty_points(card.pc_number, loyalty.updated_points)

        queued = False
        if self.exporter is not None:
            voucher = Voucher(
                voucher_date=now.date(),
                total_amount=amounts.total_amount,
                customer=request.customer_name,
            )
            queued = self.exporter.submit(voucher) is not None

        return CheckoutResult(
            settlement=settlement,
            billing_record=record,
            privilege_card=card,
            voucher_queued=queued,
        )
