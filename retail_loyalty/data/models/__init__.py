from .data_filters import (
    BillingFilters,
    WorkOrderFilters,
)

from .billing import (
    AmountsResult,
    BillingRecord,
    LineItem,
    LoyaltyResult,
    Settlement,
    Voucher,
)
from .privilege_cards import PrivilegeCard
from .work_orders import WorkOrderRecord
from .reports import (
    DateBounds,
    SalesSummary,
)

__all__ = [
    # Filter classes
    "BillingFilters",
    "WorkOrderFilters",
    # Billing value objects
    "AmountsResult",
    "LineItem",
    "LoyaltyResult",
    "Settlement",
    "Voucher",
    # Persisted records
    "BillingRecord",
    "PrivilegeCard",
    "WorkOrderRecord",
    # Report models
    "DateBounds",
    "SalesSummary",
]
