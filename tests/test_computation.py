from __future__ import annotations

import copy

import pytest

from logics.computation import PercentageMismatch, percentage_sum, recompute
from logics.data_model import AREA_UNIT, AllocationState, CalculationMode, Category

RATE = 95_000.0


def build_single_category_state(**overrides):
    category = Category(id="commercial", name="تجاری همکف", unit=AREA_UNIT, icon="🏪",
                        price_local=700_000_000.0)
    for key, value in overrides.items():
        setattr(category, key, value)
    return AllocationState(exchange_rate=RATE, mode=CalculationMode.BOTTOM_UP, categories=[category])


def test_top_down_allocates_total_by_percentage():
    state = AllocationState()

    result = recompute(state)

    assert isinstance(result, AllocationState)
    commercial = result.categories[0]
    assert commercial.target_sale == 30_000_000_000
    assert commercial.price_foreign == 700_000_000 / RATE
    assert commercial.sellable_quantity == pytest.approx(30_000_000_000 / 700_000_000)
    assert sum(c.target_sale for c in result.categories) == pytest.approx(result.total_target_local)


def test_top_down_quantity_goes_through_foreign_price():
    result = recompute(AllocationState())

    for category in result.categories:
        expected = category.target_sale / ((category.price_local / RATE) * RATE)
        assert category.sellable_quantity == expected


def test_top_down_does_not_modify_input_state():
    state = AllocationState()
    before = copy.deepcopy(state)

    recompute(state)

    assert state == before


def test_top_down_rejects_percentages_not_summing_to_100():
    state = AllocationState()
    state.categories[0].percentage = 31

    result = recompute(state)

    assert result == PercentageMismatch(actual_sum=101.0)


def test_top_down_accepts_sum_within_tolerance():
    state = AllocationState()
    state.categories[0].percentage = 30.05

    assert isinstance(recompute(state), AllocationState)
    assert isinstance(recompute(state, tolerance=0.01), PercentageMismatch)


def test_top_down_zero_rate_degrades_to_zero():
    state = AllocationState(exchange_rate=0.0)

    result = recompute(state)

    assert result.categories[0].target_sale == 30_000_000_000
    assert all(c.price_foreign == 0 for c in result.categories)
    assert all(c.sellable_quantity == 0 for c in result.categories)


def test_bottom_up_single_category():
    state = build_single_category_state(sellable_quantity=10.0)

    result = recompute(state)

    commercial = result.categories[0]
    assert commercial.target_sale == pytest.approx(7_000_000_000)
    assert commercial.target_sale == 10.0 * (700_000_000 / RATE) * RATE
    assert commercial.percentage == 100
    assert result.total_target_local == commercial.target_sale
    assert result.total_target_foreign == pytest.approx(7_000_000_000 / RATE)


def test_bottom_up_percentages_sum_to_100():
    state = AllocationState(mode=CalculationMode.BOTTOM_UP)
    for quantity, category in zip((12, 30, 7.5, 40, 25), state.categories):
        category.sellable_quantity = quantity

    result = recompute(state)

    assert result.total_target_local > 0
    assert percentage_sum(result.categories) == pytest.approx(100)


def test_bottom_up_without_quantities_zeroes_everything():
    state = AllocationState(mode=CalculationMode.BOTTOM_UP)

    result = recompute(state)

    assert result.total_target_local == 0
    assert result.total_target_foreign == 0
    assert all(c.percentage == 0 for c in result.categories)


def test_bottom_up_never_reports_mismatch():
    state = build_single_category_state(sellable_quantity=3.0, percentage=55.0)

    result = recompute(state)

    assert isinstance(result, AllocationState)
