from decimal import Decimal

import pytest

from retail_loyalty.billing.calculator import (
    calculate_total_amount,
    compute_amounts,
    compute_loyalty_update,
    settle,
)
from retail_loyalty.data.models import LineItem


def test_empty_cart_is_all_zeros():
    result = compute_amounts([], 0, False, 0)
    assert result.model_dump() == {
        "total_amount": 0,
        "remaining_balance": 0,
        "discount": 0,
        "final_amount": 0,
    }


def test_advance_is_deducted_without_redemption():
    result = compute_amounts([{"price": 100, "quantity": 2}], 50, False, 100)
    assert result.total_amount == 200
    assert result.remaining_balance == 150
    assert result.discount == 0
    assert result.final_amount == 150


def test_redemption_capped_by_remaining_balance():
    result = compute_amounts([{"price": 10, "quantity": 1}], 0, True, 1000)
    assert result.discount == 10
    assert result.final_amount == 0


def test_redemption_capped_by_available_points():
    result = compute_amounts([{"price": 1000, "quantity": 1}], 0, True, 50)
    assert result.discount == 50
    assert result.final_amount == 950


@pytest.mark.parametrize(
    "items, advance, redeem, points",
    [
        ([{"price": 100, "quantity": 1}], 500, False, 0),
        ([{"price": 100, "quantity": 1}], 500, True, 40),
        ([{"price": "99.99", "quantity": "3"}], "0", True, 1000),
        ([{"price": 0, "quantity": 10}], 0, True, 5),
        ([], 20, True, 20),
    ],
)
def test_final_amount_never_negative(items, advance, redeem, points):
    assert compute_amounts(items, advance, redeem, points).final_amount >= 0


def test_advance_larger_than_total_keeps_negative_balance():
    result = compute_amounts([{"price": 100, "quantity": 1}], 150, False, 0)
    assert result.remaining_balance == -50
    assert result.final_amount == 0


def test_malformed_line_item_contributes_zero():
    assert compute_amounts([{"price": "abc", "quantity": 2}], 0, False, 0).total_amount == 0
    assert compute_amounts([{"quantity": 2}], 0, False, 0).total_amount == 0
    assert compute_amounts([{"price": 10}], 0, False, 0).total_amount == 0


def test_lenient_parsing_of_text_fields():
    result = compute_amounts([{"price": "12.50abc", "quantity": "2 pcs"}], "5 paid", False, 0)
    assert result.total_amount == Decimal("25.00")
    assert result.remaining_balance == Decimal("20.00")


def test_malformed_advance_counts_as_zero():
    result = compute_amounts([{"price": 40, "quantity": 1}], "n/a", False, 0)
    assert result.remaining_balance == 40


def test_negative_values_pass_through():
    """Returns are modelled as negative quantities and are not clamped."""
    total = calculate_total_amount([{"price": 100, "quantity": 2}, {"price": 50, "quantity": -1}])
    assert total == 150


def test_line_items_may_be_models_or_objects():
    class Row:
        price = "20"
        quantity = 3

    total = calculate_total_amount([LineItem(price=Decimal("1.10"), quantity=2), Row()])
    assert total == Decimal("62.20")


def test_decimal_sums_are_exact():
    total = calculate_total_amount([{"price": 0.1, "quantity": 3}])
    assert total == Decimal("0.3")


def test_accrual_rounds_down_and_caps_at_500():
    assert compute_loyalty_update(12345, 0, False, 12345).updated_points == 500
    assert compute_loyalty_update(100, 0, False, 100).updated_points == 10
    assert compute_loyalty_update(109, 0, False, 109).points_to_add == 10


def test_redeemed_points_are_spent_before_accrual():
    result = compute_loyalty_update(200, 100, True, 150)
    assert result.points_to_redeem == 100
    assert result.points_to_add == 20
    assert result.updated_points == 20


def test_redemption_limited_by_remaining_balance():
    result = compute_loyalty_update(1000, 300, True, 120)
    assert result.points_to_redeem == 120
    assert result.updated_points == 300 - 120 + 100


def test_no_redemption_keeps_balance():
    result = compute_loyalty_update(50, 75, False, 50)
    assert result.points_to_redeem == 0
    assert result.updated_points == 80


def test_custom_accrual_rate_and_cap():
    result = compute_loyalty_update(1000, 0, False, 1000, accrual_rate=Decimal("0.05"), accrual_cap=30)
    assert result.points_to_add == 30
    result = compute_loyalty_update(100, 0, False, 100, accrual_rate=Decimal("0.05"), accrual_cap=30)
    assert result.points_to_add == 5


def test_calls_are_idempotent():
    items = [{"price": "250", "quantity": 2}]
    assert compute_amounts(items, 100, True, 80) == compute_amounts(items, 100, True, 80)
    assert compute_loyalty_update(500, 80, True, 400) == compute_loyalty_update(500, 80, True, 400)


def test_settle_feeds_loyalty_from_its_own_amounts():
    items = [{"price": 300, "quantity": 2}, {"price": "bad", "quantity": 1}]
    settlement = settle(items, 100, True, 700)

    amounts = compute_amounts(items, 100, True, 700)
    assert settlement.amounts == amounts
    assert settlement.loyalty == compute_loyalty_update(
        amounts.total_amount, 700, True, amounts.remaining_balance
    )
    assert settlement.amounts.discount == 500
    assert settlement.loyalty.updated_points == 700 - 500 + 60


def test_out_of_range_line_contributes_zero():
    result = compute_amounts([{"price": "1e999999", "quantity": 10}, {"price": 40, "quantity": 1}], 0, False, 0)
    assert result.total_amount == 40
    assert result.final_amount == 40


def test_out_of_range_balance_reads_as_zero():
    result = compute_amounts([{"price": "9e999999", "quantity": 1}], "-9e999999", True, 100)
    assert result.total_amount == Decimal("9e999999")
    assert result.remaining_balance == 0
    assert result.discount == 0
    assert result.final_amount == 0


def test_huge_total_still_earns_the_cap():
    result = compute_loyalty_update("9e999999", 0, False, "9e999999", accrual_rate=Decimal("10"))
    assert result.points_to_add == 500
    assert result.updated_points == 500


def test_settle_survives_out_of_range_input():
    settlement = settle([{"price": "1e999999", "quantity": 10}], 0, True, "1e999999")
    assert settlement.amounts.total_amount == 0
    assert settlement.loyalty.points_to_add == 0
    assert settlement.loyalty.updated_points == Decimal("1e999999")
