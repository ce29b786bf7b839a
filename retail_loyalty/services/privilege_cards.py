from __future__ import annotations

from typing import Any, Optional

from ..cards.card_generator import generate_card_with_barcode
from ..data.interface import DataAccess
from ..data.models import PrivilegeCard


def issue_privilege_card(
    data_access: DataAccess,
    pc_number: str,
    customer_id: str,
    name: str,
    phone: Optional[str] = None,
    points: Any = None,
) -> PrivilegeCard:
    """Create and store a privilege card with an optional opening balance."""
    card = PrivilegeCard(
        pc_number=pc_number,
        customer_id=customer_id,
        name=name,
        phone=phone,
        loyalty_points=points,
    )
    return data_access.create_privilege_card(card)


def render_privilege_card(card: PrivilegeCard, template_path: Optional[str] = None) -> bytes:
    """PNG image of the card, ready to print or share."""
    return generate_card_with_barcode(card.pc_number, card.name, template_path=template_path)
