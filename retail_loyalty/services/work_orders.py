from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from ..billing.calculator import LineItemLike
from ..billing.parsing import parse_int_or_zero
from ..billing.work_orders import build_work_order
from ..data.interface import DataAccess
from ..data.models import WorkOrderRecord
from ..logging import get_logger

# First number handed out when no work order exists yet
DEFAULT_FIRST_WORK_ORDER_ID = 1001


class WorkOrderService:
    def __init__(self, data_access: DataAccess, first_id: int = DEFAULT_FIRST_WORK_ORDER_ID) -> None:
        self.data_access = data_access
        self.first_id = first_id
        self.logger = get_logger(__name__)

    def next_work_order_id(self) -> str:
        """One past the highest numeric work order number, or ``first_id``."""
        numbers = [parse_int_or_zero(o.work_order_id) for o in self.data_access.list_work_orders()]
        numbers = [n for n in numbers if n > 0]
        return str(max(numbers) + 1 if numbers else self.first_id)

    def create(
        self,
        product_entries: List[LineItemLike],
        employee: str,
        *,
        work_order_id: Optional[str] = None,
        description: Optional[str] = None,
        advance_details: Any = None,
        due_date: Optional[date] = None,
        mr_number: Optional[str] = None,
        patient_details: Optional[Dict[str, Any]] = None,
        payment_method: Optional[str] = None,
        is_b2b: bool = False,
        now: Optional[datetime] = None,
    ) -> WorkOrderRecord:
        """Validate, price and store a work order, numbering it when no id is given."""
        order = build_work_order(
            work_order_id or self.next_work_order_id(),
            product_entries,
            employee,
            description=description,
            advance_details=advance_details,
            due_date=due_date,
            mr_number=mr_number,
            patient_details=patient_details,
            payment_method=payment_method,
            is_b2b=is_b2b,
            now=now,
        )
        return self.data_access.create_work_order(order)
