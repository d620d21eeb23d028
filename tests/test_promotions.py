import asyncio
from datetime import date

import pytest

from app.schemas import Offer
from app.services.promotion_service import (
    apply_offer_to_items,
    calculate_offer_discount,
    find_applicable_offers,
    get_best_offer,
    is_offer_valid,
    resolve_best_offer,
)

from conftest import line, make_product

TODAY = date(2025, 6, 15)


def offer(offer_id="o1", trigger="p1", target="p2", kind="fixed", value=10, **kwargs):
    return Offer(
        id=offer_id,
        name=f"Offer {offer_id}",
        trigger_product_id=trigger,
        target_product_id=target,
        discount_type=kind,
        discount_value=value,
        **kwargs,
    )


@pytest.fixture
def cart():
    return [
        line(make_product("p1", price=80)),
        line(make_product("p2", price=40, owner="basim"), 2),
    ]


def test_offer_date_window_is_inclusive():
    windowed = offer(start_date=date(2025, 6, 1), end_date=date(2025, 6, 15))
    assert is_offer_valid(windowed, TODAY)
    assert not is_offer_valid(windowed, date(2025, 6, 16))
    assert not is_offer_valid(windowed, date(2025, 5, 31))
    assert not is_offer_valid(offer(is_active=False), TODAY)
    assert is_offer_valid(offer(), TODAY)


def test_scenario_d_fixed_offer_capped_at_price():
    assert calculate_offer_discount(offer(value=50), 40) == 40
    assert calculate_offer_discount(offer(kind="percentage", value=25), 40) == 10


def test_find_applicable_needs_trigger_in_cart(cart):
    offers = [offer("a", trigger="p9"), offer("b"), offer("c", is_active=False), offer("d", trigger="p2")]

    assert [o.id for o in find_applicable_offers(cart, offers, TODAY)] == ["b", "d"]


def test_best_offer_is_largest_per_unit_discount(cart):
    offers = [offer("small", value=5), offer("big", kind="percentage", value=50), offer("same", value=20)]

    assert get_best_offer(cart, offers).id == "big"


def test_best_offer_tie_keeps_first(cart):
    assert get_best_offer(cart, [offer("first", value=20), offer("second", value=20)]).id == "first"


def test_best_offer_none_without_target_or_discount(cart):
    assert get_best_offer(cart, [offer(target="p9")]) is None
    assert get_best_offer(cart, [offer(value=0)]) is None
    assert get_best_offer(cart, []) is None


def test_apply_offer_multiplies_by_target_quantity(cart):
    applied = apply_offer_to_items(cart, offer(value=50))

    assert applied.discount_amount == 80
    assert applied.offer_id == "o1"
    # prices are untouched
    assert cart[1].product.selling_price == 40


def test_resolve_best_offer(cart):
    assert resolve_best_offer(cart, [offer(value=15)], TODAY).discount_amount == 30
    assert resolve_best_offer(cart, [offer(trigger="p9")], TODAY) is None


def test_service_toggle_and_active_offers(services, cart):
    asyncio.run(services.promotions.save_offer(offer("o1", value=15)))
    asyncio.run(services.promotions.save_offer(offer("o2", value=5, end_date=date(2020, 1, 1))))

    active = asyncio.run(services.promotions.get_active_offers(TODAY))
    assert [o.id for o in active] == ["o1"]

    asyncio.run(services.promotions.toggle_offer("o1", False))
    assert asyncio.run(services.promotions.find_best_offer(cart, TODAY)) is None

    with pytest.raises(ValueError):
        asyncio.run(services.promotions.toggle_offer("missing", True))
