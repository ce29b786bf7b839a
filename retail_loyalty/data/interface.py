from __future__ import annotations

from decimal import Decimal
from typing import List, Optional, Protocol

from .models import (
    # Filter classes
    BillingFilters,
    WorkOrderFilters,
    # Record models
    BillingRecord,
    PrivilegeCard,
    WorkOrderRecord,
)


# ---- Data access protocol ----

class DataAccess(Protocol):
    """
    Backend-agnostic contract for the checkout service, reports and the Streamlit UI.

    Implementations own the tables `privilege_cards`, `billing` and `work_orders`.
    Lookups return None when nothing matches; updates of a missing record raise
    RecordNotFoundError; inserting an existing key raises DuplicateRecordError.
    """

    # Privilege cards

    def get_privilege_card(self, pc_number: str) -> Optional[PrivilegeCard]:
        """Get a privilege card by its card number."""
        ...

    def find_privilege_card_by_customer(self, customer_id: str) -> Optional[PrivilegeCard]:
        """Get the privilege card issued to a customer, if any."""
        ...

    def create_privilege_card(self, card: PrivilegeCard) -> PrivilegeCard:
        """Issue a new privilege card."""
        ...

    def update_loyalty_points(self, pc_number: str, points: Decimal) -> PrivilegeCard:
        """Overwrite the loyalty points balance of a card."""
        ...

    # Billing

    def create_billing_record(self, record: BillingRecord) -> BillingRecord:
        """Store the outcome of one checkout."""
        ...

    def list_billing_records(self, filters: Optional[BillingFilters] = None) -> List[BillingRecord]:
        """List billing records, oldest first."""
        ...

    # Work orders

    def create_work_order(self, order: WorkOrderRecord) -> WorkOrderRecord:
        """Store a new work order."""
        ...

    def count_work_orders(self) -> int:
        """Number of work orders stored so far (seeds the next order number)."""
        ...

    def list_work_orders(self, filters: Optional[WorkOrderFilters] = None) -> List[WorkOrderRecord]:
        """List work orders, oldest first."""
        ...
