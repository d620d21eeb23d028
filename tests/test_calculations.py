import asyncio

import pytest

from app.calculations import (
    calculate_actual_shipping_cost,
    calculate_complete_order,
    calculate_customer_total,
    calculate_discount_amount,
    calculate_order,
    calculate_payment_fees,
    calculate_subtotal,
    determine_is_free_shipping,
    resolve_free_shipping,
)
from app.schemas import AppliedOffer, Discount, PaymentMethod

from conftest import line, make_product


def test_payment_fees_on_amount():
    method = PaymentMethod(id="m", name="mada", fee_percentage=1, fee_fixed=1, tax_rate=15)
    assert calculate_payment_fees(method, 95) == pytest.approx(2.2425)


def test_payment_fees_keep_sign_of_negative_amount():
    method = PaymentMethod(id="m", name="visa", fee_percentage=2)
    assert calculate_payment_fees(method, -100) == pytest.approx(-2.0)


def test_discount_none_is_zero():
    assert calculate_discount_amount(100, None) == 0


def test_discount_percentage_bounds():
    assert calculate_discount_amount(130, Discount(type="percentage", value=0)) == 0
    assert calculate_discount_amount(130, Discount(type="percentage", value=100)) == 130


def test_fixed_discount_is_not_capped():
    assert calculate_discount_amount(10, Discount(type="fixed", value=25)) == 25


def test_free_shipping_threshold_is_inclusive():
    assert determine_is_free_shipping(100, 0, 100)
    assert not determine_is_free_shipping(120, 21, 100)


def test_actual_shipping_cost():
    assert calculate_actual_shipping_cost(15, True) == 0
    assert calculate_actual_shipping_cost(15, False) == 15


def test_auto_detect_ignores_manual_override():
    assert resolve_free_shipping(80, 0, 100, auto_detect=True, manual_override=True) is False
    assert resolve_free_shipping(150, 0, 100, auto_detect=True, manual_override=False) is True


def test_manual_override_sticks_without_auto_detect():
    assert resolve_free_shipping(80, 0, 100, auto_detect=False, manual_override=True) is True
    assert resolve_free_shipping(150, 0, 100, auto_detect=False, manual_override=False) is False
    assert resolve_free_shipping(150, 0, 100, auto_detect=False) is True


def test_subtotal_and_customer_total():
    items = [line(make_product("a", price=80), 2), line(make_product("b", price=5.5), 3)]
    assert calculate_subtotal(items) == 176.5
    assert calculate_subtotal([]) == 0
    assert calculate_customer_total(176.5, 15, 20, 10) == 181.5


def test_scenario_a_single_item_paid_shipping(aramex, mada):
    items = [line(make_product("p1", cost=50, price=80, owner="yassir"))]

    result = calculate_order(items, aramex, mada, None, 100)

    assert result.subtotal == 80
    assert result.is_free_shipping is False
    assert result.actual_shipping_cost == 15
    assert result.customer_total == 95
    assert result.payment_fees == pytest.approx(2.2425)
    assert result.net_profit == pytest.approx(12.7575)
    assert result.profit_share.share_of("yassir") == pytest.approx(12.7575)
    assert result.profit_share.share_of("basim") == 0


def test_scenario_b_free_shipping_over_threshold(aramex, mada):
    items = [
        line(make_product("p1", cost=50, price=80, owner="yassir")),
        line(make_product("p2", cost=30, price=50, owner="basim")),
    ]

    result = calculate_order(items, aramex, mada, None, 100)

    assert result.subtotal == 130
    assert result.is_free_shipping is True
    assert result.actual_shipping_cost == 0
    assert result.customer_total == 130


def test_free_shipping_still_costs_the_merchant(aramex, mada):
    items = [line(make_product("p1", cost=50, price=130, owner="yassir"))]

    result = calculate_order(items, aramex, mada, None, 100)

    expected_fees = (130 * 0.01 + 1) * 1.15
    assert result.is_free_shipping
    assert result.net_profit == pytest.approx(80 - (15 + expected_fees))


def test_scenario_c_fixed_discount_exact(aramex, mada):
    items = [
        line(make_product("p1", cost=50, price=80, owner="yassir")),
        line(make_product("p2", cost=30, price=50, owner="basim")),
    ]

    result = calculate_order(items, aramex, mada, Discount(type="fixed", value=20), 100)

    assert result.discount_amount == 20
    assert result.is_free_shipping is True
    assert result.customer_total == 110


def test_discount_can_drop_order_below_threshold(aramex, mada):
    items = [line(make_product("p1", price=110))]

    result = calculate_order(items, aramex, mada, Discount(type="fixed", value=20), 100)

    assert result.is_free_shipping is False
    assert result.customer_total == 110 + 15 - 20


def test_customer_fee_added_to_total(aramex, cod):
    items = [line(make_product("p1", price=80))]

    result = calculate_order(items, aramex, cod, None, 300)

    assert result.customer_fee == 10
    assert result.customer_total == 80 + 15 + 10


def test_applied_offer_adds_to_discount(aramex, mada):
    items = [line(make_product("p1", price=80)), line(make_product("p2", price=40, owner="basim"), 2)]
    offer = AppliedOffer(
        offer_id="o1",
        trigger_product_id="p1",
        target_product_id="p2",
        discount_type="fixed",
        discount_value=10,
        discount_amount=20,
    )

    result = calculate_order(items, aramex, mada, Discount(type="fixed", value=5), 500, applied_offer=offer)

    assert result.discount_amount == 25
    assert result.customer_total == 160 + 15 - 25


def test_total_reconciliation(aramex, cod):
    items = [line(make_product("p1", price=33.3), 3), line(make_product("p2", price=19.99, owner="basim"), 2)]
    for discount in (None, Discount(type="percentage", value=12.5), Discount(type="fixed", value=7.25)):
        result = calculate_order(items, aramex, cod, discount, 120)
        assert result.customer_total == (
            result.subtotal + result.actual_shipping_cost - result.discount_amount + result.customer_fee
        )


def test_profit_conservation(aramex, mada):
    items = [
        line(make_product("p1", cost=12.5, price=45, owner="yassir"), 3),
        line(make_product("p2", cost=20, price=70, owner="basim"), 1),
        line(make_product("p3", cost=3, price=9.99, owner="basim"), 4),
    ]

    result = calculate_order(items, aramex, mada, Discount(type="percentage", value=10), 300)

    item_total = sum(item.net_profit for item in result.profit_share.items)
    shares = result.profit_share.share_of("yassir") + result.profit_share.share_of("basim")
    assert item_total == pytest.approx(shares)
    assert shares == pytest.approx(result.net_profit)


def test_free_shipping_monotonic_in_subtotal(aramex, mada):
    flags = [
        calculate_order([line(make_product("p1", price=price))], aramex, mada, None, 100).is_free_shipping
        for price in range(50, 151, 5)
    ]
    first_free = flags.index(True)
    assert all(flags[first_free:])
    assert not any(flags[:first_free])


def test_calculation_is_deterministic(aramex, mada):
    items = [line(make_product("p1", cost=17.3, price=44.1), 3), line(make_product("p2", price=9.9, owner="basim"))]
    discount = Discount(type="percentage", value=7)

    first = calculate_order(items, aramex, mada, discount, 100)
    second = calculate_order(items, aramex, mada, discount, 100)

    assert first.model_dump() == second.model_dump()


def test_empty_order_is_zero(aramex, mada):
    result = calculate_order([], aramex, mada, None, 100)

    assert result.subtotal == 0
    assert result.profit_share.items == []
    assert result.profit_share.owner_shares == {}


def test_complete_order_uses_configured_default_threshold(aramex, mada):
    items = [line(make_product("p1", price=250))]

    result = asyncio.run(calculate_complete_order(items, aramex, mada))

    # default threshold is 300
    assert result.is_free_shipping is False
    assert set(result.profit_share.owner_shares) >= {"yassir", "basim"}


def test_complete_order_reads_threshold_from_settings(services, aramex, mada):
    asyncio.run(services.settings.update_free_shipping_threshold(200))
    items = [line(make_product("p1", price=250))]

    result = asyncio.run(calculate_complete_order(
        items, aramex, mada, settings_service=services.settings
    ))

    assert result.is_free_shipping is True
