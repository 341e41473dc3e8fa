import copy
import logging

from logics.computation import PERCENT_TOLERANCE, PercentageMismatch, Recomputed, foreign_price, percentage_sum, recompute
from logics.data_model import (
    DEFAULT_EXCHANGE_RATE,
    DEFAULT_TOTAL_TARGET,
    AllocationState,
    CalculationMode,
    default_categories,
)
from logics.number_format import parse_number

logger = logging.getLogger(__name__)

PRICE_FIELDS = ("price_local", "price_foreign")
CATEGORY_FIELDS = ("percentage", "sellable_quantity") + PRICE_FIELDS


class AllocationEngine:
    """
    Owns the calculator state and keeps its derived fields consistent.

    The presentation layer reads ``snapshot()`` and sends edits through the
    mutators below. Only ``recompute()`` (and ``switch_mode()``, which calls
    it) fills in target sales, quantities and percentages.

    Args:
        exchange_rate: Toman per USD.
        total_target_local: Annual sales target in toman.
        mode: Initial CalculationMode (or its string value).
        categories: Category list; the seeded defaults when omitted.
        tolerance: Allowed distance of the top-down percentage sum from 100.
    """

    def __init__(self, *, exchange_rate=DEFAULT_EXCHANGE_RATE, total_target_local=DEFAULT_TOTAL_TARGET,
                 mode=CalculationMode.TOP_DOWN, categories=None, tolerance=PERCENT_TOLERANCE):
        self._tolerance = tolerance
        self._state = AllocationState(
            exchange_rate=max(float(exchange_rate), 0.0),
            total_target_local=float(total_target_local),
            mode=CalculationMode(mode),
            categories=copy.deepcopy(list(categories)) if categories is not None else default_categories(),
        )
        rate = self._state.exchange_rate
        for category in self._state.categories:
            category.price_foreign = foreign_price(category.price_local, rate)
        self._state.total_target_foreign = foreign_price(self._state.total_target_local, rate)

    @classmethod
    def from_settings(cls, settings):
        return cls(
            exchange_rate=settings.exchange_rate,
            total_target_local=settings.total_target,
            mode=settings.mode,
            tolerance=settings.percent_tolerance,
        )

    # ── Reading ──────────────────────────────────────────────

    @property
    def mode(self):
        return self._state.mode

    def snapshot(self):
        """Return a detached copy of the whole state."""
        return copy.deepcopy(self._state)

    def category(self, category_id):
        for category in self._state.categories:
            if category.id == category_id:
                return category
        raise KeyError(f"Unknown category: {category_id}")

    def percentage_sum(self):
        return percentage_sum(self._state.categories)

    def editable_fields(self):
        """Category fields that accept input in the active mode."""
        if self._state.mode == CalculationMode.TOP_DOWN:
            return ("percentage",) + PRICE_FIELDS
        return ("sellable_quantity",) + PRICE_FIELDS

    # ── Mutators ─────────────────────────────────────────────

    def set_exchange_rate(self, rate):
        rate = max(float(rate), 0.0)
        self._state.exchange_rate = rate
        for category in self._state.categories:
            category.price_foreign = foreign_price(category.price_local, rate)
        if self._state.mode == CalculationMode.TOP_DOWN:
            self._state.total_target_foreign = foreign_price(self._state.total_target_local, rate)
        logger.debug("[RATE] Exchange rate set to %s", rate)

    def set_total_target_local(self, value):
        self._state.total_target_local = float(value)
        self._state.total_target_foreign = foreign_price(self._state.total_target_local, self._state.exchange_rate)

    def set_total_target_foreign(self, value):
        # Two-way binding: the toman total is back-computed, not re-derived.
        self._state.total_target_foreign = float(value)
        self._state.total_target_local = self._state.total_target_foreign * self._state.exchange_rate

    def update_category_field(self, category_id, field, raw_value):
        """
        Store free-text input into one category field.

        Args:
            category_id: Category ``id``.
            field: One of ``percentage``, ``sellable_quantity``,
                ``price_local`` or ``price_foreign``.
            raw_value: User text; localised digits allowed, junk parses to 0.

        Raises:
            KeyError: Unknown category.
            ValueError: Unknown field.
        """
        if field not in CATEGORY_FIELDS:
            raise ValueError(f"Unknown category field: {field}")

        category = self.category(category_id)
        value = parse_number(raw_value)
        rate = self._state.exchange_rate
        setattr(category, field, value)

        if field == "price_local":
            category.price_foreign = foreign_price(value, rate)
        elif field == "price_foreign":
            category.price_local = value * rate

    def recompute(self):
        """
        Run the calculation for the active mode.

        Returns:
            Recomputed on success. PercentageMismatch when the top-down
            percentages do not sum to 100; the state is then left untouched.
        """
        result = recompute(self._state, tolerance=self._tolerance)
        if isinstance(result, PercentageMismatch):
            return result

        self._state = result
        logger.info("[CALC] %s recompute done, total %s toman", result.mode.value, result.total_target_local)
        return Recomputed(mode=result.mode)

    def switch_mode(self, mode):
        self._state.mode = CalculationMode(mode)
        if self._state.mode == CalculationMode.TOP_DOWN:
            # Holds even when the recompute below is refused.
            self._state.total_target_foreign = foreign_price(
                self._state.total_target_local, self._state.exchange_rate)
        logger.info("[MODE] Switched to %s", self._state.mode.value)
        return self.recompute()
