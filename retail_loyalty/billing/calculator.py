"""
Billing and loyalty-points arithmetic.

Pure functions over plain values: no I/O, no shared state. Every numeric
input goes through the lenient parsers in ``parsing`` so a malformed form
field degrades to a zero contribution instead of failing the bill.

``compute_amounts`` and ``compute_loyalty_update`` can be called separately;
``compute_loyalty_update`` then trusts the ``remaining_balance`` it is given.
``settle`` runs both and feeds the second from the first.

Arithmetic runs in a Decimal context with the overflow and invalid-operation
traps cleared; a result outside the representable range reads as zero, the
same as a malformed input.
"""
from __future__ import annotations

from decimal import ROUND_FLOOR, Decimal, InvalidOperation, Overflow, getcontext, localcontext
from typing import Any, Iterable, Mapping, Optional, Union

from ..data.models import AmountsResult, LineItem, LoyaltyResult, Settlement
from .parsing import ZERO, parse_number_or_zero

# Points earned per unit of currency, and the most one transaction can earn
ACCRUAL_RATE = Decimal("0.1")
ACCRUAL_CAP = 500

LineItemLike = Union[LineItem, Mapping[str, Any], Any]


def _lenient_context():
    context = getcontext().copy()
    context.traps[Overflow] = False
    context.traps[InvalidOperation] = False
    return localcontext(context)


def _finite_or_zero(value: Decimal) -> Decimal:
    return value if value.is_finite() else ZERO


def as_line_item(item: LineItemLike) -> LineItem:
    if isinstance(item, LineItem):
        return item
    if isinstance(item, Mapping):
        return LineItem.model_validate(dict(item))
    return LineItem(
        price=getattr(item, "price", None),
        quantity=getattr(item, "quantity", None),
        name=getattr(item, "name", None),
        category=getattr(item, "category", None),
    )


def calculate_total_amount(line_items: Optional[Iterable[LineItemLike]]) -> Decimal:
    """Sum price x quantity over the cart. Unparseable fields count as zero."""
    total = ZERO
    with _lenient_context():
        for item in line_items or ():
            line = as_line_item(item)
            total = _finite_or_zero(total + _finite_or_zero(line.price * line.quantity))
    return total


def compute_amounts(
    line_items: Optional[Iterable[LineItemLike]],
    advance_amount: Any,
    redeem: bool,
    loyalty_points: Any,
) -> AmountsResult:
    """Compute what the customer owes for a cart.

    Args:
        line_items: LineItem instances or mappings with ``price``/``quantity``.
        advance_amount: Amount already paid; unparseable input counts as zero.
        redeem: Whether the customer spends loyalty points on this bill.
        loyalty_points: Points available, the ceiling on the discount.

    Returns:
        AmountsResult: total, remaining balance, discount and final amount.
    """
    total_amount = calculate_total_amount(line_items)
    points = parse_number_or_zero(loyalty_points)
    with _lenient_context():
        remaining_balance = _finite_or_zero(total_amount - parse_number_or_zero(advance_amount))
        discount = min(points, remaining_balance) if redeem else ZERO
        final_amount = max(_finite_or_zero(remaining_balance - discount), ZERO)

    return AmountsResult(
        total_amount=total_amount,
        remaining_balance=remaining_balance,
        discount=discount,
        final_amount=final_amount,
    )


def compute_loyalty_update(
    total_amount: Any,
    loyalty_points: Any,
    redeem: bool,
    remaining_balance: Any,
    *,
    accrual_rate: Optional[Decimal] = None,
    accrual_cap: Optional[int] = None,
) -> LoyaltyResult:
    """Compute the customer's points balance after a transaction.

    Points are spent first (capped by both the balance and ``remaining_balance``),
    then earned at ``accrual_rate`` of the pre-redemption total, rounded down and
    capped at ``accrual_cap``.

    ``remaining_balance`` must be the value ``compute_amounts`` produced for the
    same cart; it is not recomputed here.
    """
    rate = ACCRUAL_RATE if accrual_rate is None else parse_number_or_zero(accrual_rate)
    cap = ACCRUAL_CAP if accrual_cap is None else accrual_cap

    total = parse_number_or_zero(total_amount)
    points = parse_number_or_zero(loyalty_points)
    balance = parse_number_or_zero(remaining_balance)

    with _lenient_context():
        points_to_redeem = min(points, balance) if redeem else ZERO
        updated_points = _finite_or_zero(points - points_to_redeem)

        accrued = total * rate
        if accrued >= cap:
            # includes a product that overflowed to +Infinity
            points_to_add = cap
        else:
            points_to_add = int(_finite_or_zero(accrued).to_integral_value(rounding=ROUND_FLOOR))
        updated_points = _finite_or_zero(updated_points + points_to_add)

    return LoyaltyResult(
        updated_points=updated_points,
        points_to_redeem=points_to_redeem,
        points_to_add=points_to_add,
    )


def settle(
    line_items: Optional[Iterable[LineItemLike]],
    advance_amount: Any,
    redeem: bool,
    loyalty_points: Any,
    *,
    accrual_rate: Optional[Decimal] = None,
    accrual_cap: Optional[int] = None,
) -> Settlement:
    """Compute amounts and the loyalty update for one cart in a single pass."""
    amounts = compute_amounts(line_items, advance_amount, redeem, loyalty_points)
    loyalty = compute_loyalty_update(
        amounts.total_amount,
        loyalty_points,
        redeem,
        amounts.remaining_balance,
        accrual_rate=accrual_rate,
        accrual_cap=accrual_cap,
    )
    return Settlement(amounts=amounts, loyalty=loyalty)
