import numpy as np
import pandas as pd

from logics.data_model import CalculationMode
from logics.number_format import format_display, quantity_decimals

SUMMARY_COLUMNS = [
    "id", "name", "unit", "percentage", "price_local",
    "price_foreign", "sellable_quantity", "target_sale",
]

TOTAL_CAPTIONS = {
    CalculationMode.TOP_DOWN: "هدف کل فروش (تومان)",
    CalculationMode.BOTTOM_UP: "پیش‌بینی کل فروش (تومان)",
}


def summary_frame(state):
    """
    Tabulate the categories of a state snapshot.

    Returns:
        DataFrame with one row per category in screen order; inf/nan are
        replaced with 0 so the table never shows them.
    """
    records = [
        {column: getattr(category, column) for column in SUMMARY_COLUMNS}
        for category in state.categories
    ]
    df = pd.DataFrame.from_records(records, columns=SUMMARY_COLUMNS)
    return _sanitize_frame(df)


def summary_totals(state):
    """Totals shown at the top of the results card."""
    df = summary_frame(state)
    return {
        "caption": TOTAL_CAPTIONS[state.mode],
        "total_local": state.total_target_local,
        "total_foreign": state.total_target_foreign,
        "percentage_sum": float(df["percentage"].sum()),
        "target_sale_sum": float(df["target_sale"].sum()),
    }


def summary_rows(state):
    """Display rows for the results table: (name, quantity with unit, percent)."""
    df = summary_frame(state)
    rows = []
    for record in df.itertuples(index=False):
        quantity = format_display(record.sellable_quantity, quantity_decimals(record.unit))
        rows.append((
            record.name,
            f"{quantity} {record.unit}",
            f"{format_display(record.percentage, 1)}%",
        ))
    return rows


def _sanitize_frame(df):
    numeric = df.select_dtypes(include="number").columns
    df[numeric] = df[numeric].replace([np.inf, -np.inf], np.nan).fillna(0.0)
    return df
