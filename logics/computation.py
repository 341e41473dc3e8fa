import copy
import logging
from dataclasses import dataclass

from logics.data_model import CalculationMode

logger = logging.getLogger(__name__)

PERCENT_TOLERANCE = 0.1


@dataclass(frozen=True)
class Recomputed:
    """Calculation accepted; the new values are in the engine state."""

    mode: CalculationMode


@dataclass(frozen=True)
class PercentageMismatch:
    """TopDown calculation refused because the shares do not add up to 100."""

    actual_sum: float


def foreign_price(price_local, rate):
    return price_local / rate if rate > 0 else 0.0


def percentage_sum(categories):
    total = 0.0
    for category in categories:
        total += category.percentage
    return total


def recompute(state, tolerance=PERCENT_TOLERANCE):
    """
    Derive every computed field of ``state`` for its calculation mode.

    The input is never modified.

    Top-down: split ``total_target_local`` by percentage and derive the
    sellable quantity of each category from its price.
    Bottom-up: value every category's sellable quantity, sum the values into
    the total target and derive each percentage from its share.

    Both branches go through the USD price (``price_foreign * rate``) rather
    than the toman price directly; keep that order, downstream figures are
    compared to the last bit.

    Args:
        state: AllocationState to compute from.
        tolerance: Allowed distance of the top-down percentage sum from 100.

    Returns:
        A new AllocationState, or PercentageMismatch when the top-down
        percentages are off by more than ``tolerance``.
    """
    if state.mode == CalculationMode.TOP_DOWN:
        return _recompute_top_down(state, tolerance)
    return _recompute_bottom_up(state)


def _recompute_top_down(state, tolerance):
    total_pct = percentage_sum(state.categories)
    if abs(total_pct - 100) > tolerance:
        logger.info("[TOPDOWN] Percentages sum to %s, calculation refused", total_pct)
        return PercentageMismatch(actual_sum=total_pct)

    result = copy.deepcopy(state)
    rate = result.exchange_rate
    for category in result.categories:
        category.target_sale = (result.total_target_local * category.percentage) / 100
        category.price_foreign = foreign_price(category.price_local, rate)
        if category.price_foreign > 0:
            category.sellable_quantity = category.target_sale / (category.price_foreign * rate)
        else:
            category.sellable_quantity = 0.0

    logger.debug("[TOPDOWN] Allocated %s toman over %d categories",
                 result.total_target_local, len(result.categories))
    return result


def _recompute_bottom_up(state):
    result = copy.deepcopy(state)
    rate = result.exchange_rate

    total_local = 0.0
    for category in result.categories:
        category.price_foreign = foreign_price(category.price_local, rate)
        category.target_sale = category.sellable_quantity * category.price_foreign * rate
        total_local += category.target_sale

    for category in result.categories:
        category.percentage = (category.target_sale / total_local) * 100 if total_local > 0 else 0.0

    result.total_target_local = total_local
    result.total_target_foreign = foreign_price(total_local, rate)

    logger.debug("[BOTTOMUP] Forecast total %s toman", total_local)
    return result
