from dataclasses import dataclass, field
from enum import Enum
from typing import List

COUNT_UNIT = "عدد"
AREA_UNIT = "متر مربع"

DEFAULT_EXCHANGE_RATE = 95_000.0
DEFAULT_TOTAL_TARGET = 100_000_000_000.0


class CalculationMode(str, Enum):
    TOP_DOWN = "top-down"      # total target -> per-category quantities
    BOTTOM_UP = "bottom-up"    # per-category quantities -> total target


@dataclass
class Category:
    """One property type on the calculator screen."""

    id: str
    name: str
    unit: str
    icon: str
    percentage: float = 0.0         # share of total sales, 0-100
    price_local: float = 0.0        # toman per unit
    price_foreign: float = 0.0      # USD per unit, derived from price_local
    sellable_quantity: float = 0.0  # units available to sell
    target_sale: float = 0.0        # toman


# id, name, unit, icon, percentage, price per unit (toman)
DEFAULT_CATEGORIES = [
    ("commercial", "تجاری همکف", AREA_UNIT, "🏪", 30.0, 700_000_000.0),
    ("avaPlus", "تجاری آوا پلاس", AREA_UNIT, "🏢", 40.0, 400_000_000.0),
    ("office", "اداری", AREA_UNIT, "🏬", 15.0, 250_000_000.0),
    ("storage", "انباری", AREA_UNIT, "📦", 13.0, 200_000_000.0),
    ("parking", "پارکینگ", COUNT_UNIT, "🚗", 2.0, 400_000_000.0),
]


def default_categories() -> List[Category]:
    """Build a fresh list of the seeded categories."""
    return [
        Category(id=cid, name=name, unit=unit, icon=icon, percentage=pct, price_local=price)
        for cid, name, unit, icon, pct, price in DEFAULT_CATEGORIES
    ]


@dataclass
class AllocationState:
    """Shared state container for the calculator."""

    exchange_rate: float = DEFAULT_EXCHANGE_RATE        # toman per USD
    total_target_local: float = DEFAULT_TOTAL_TARGET    # toman
    total_target_foreign: float = 0.0                   # USD
    mode: CalculationMode = CalculationMode.TOP_DOWN
    categories: List[Category] = field(default_factory=default_categories)
