import tkinter as tk
from tkinter import ttk

from logics.number_format import format_display, quantity_decimals
from UIs.widgets import NumericEntry


class CategoryCard(ttk.LabelFrame):
    """Inputs and computed share for one property category."""

    def __init__(self, parent, category, *, on_edit):
        super().__init__(parent, text=f"{category.icon}  {category.name}", padding=8)
        self.category_id = category.id

        def commit(field):
            return lambda text: on_edit(self.category_id, field, text)

        unit = category.unit
        self._entries = {
            'percentage': NumericEntry(
                self, label="درصد از کل فروش (%)", decimals=1, on_commit=commit('percentage')),
            'sellable_quantity': NumericEntry(
                self, label=f"مقدار قابل فروش ({unit})", decimals=quantity_decimals(unit),
                on_commit=commit('sellable_quantity')),
            'price_local': NumericEntry(
                self, label=f"قیمت هر {unit} (تومان)", decimals=0, on_commit=commit('price_local')),
            'price_foreign': NumericEntry(
                self, label=f"قیمت هر {unit} (دلار)", decimals=1, on_commit=commit('price_foreign')),
        }
        # Right-to-left reading order: first field in the right-hand column.
        for idx, entry in enumerate(self._entries.values()):
            entry.grid(row=idx // 2, column=1 - idx % 2, sticky='ew', padx=4, pady=2)
        self.columnconfigure(0, weight=1)
        self.columnconfigure(1, weight=1)

        ttk.Separator(self).grid(row=2, column=0, columnspan=2, sticky='ew', pady=6)
        tk.Label(self, text="سهم از فروش (تومان)", anchor='e').grid(row=3, column=0, columnspan=2, sticky='ew')
        self._share_label = tk.Label(self, text="", font=("Arial", 12, "bold"), fg="#334155", anchor='e')
        self._share_label.grid(row=4, column=0, columnspan=2, sticky='ew')

    def refresh(self, category, editable_fields):
        for field, entry in self._entries.items():
            entry.set_value(getattr(category, field))
            entry.set_enabled(field in editable_fields)
        self._share_label.config(text=format_display(category.target_sale, 0))

    def flush(self):
        for entry in self._entries.values():
            entry.commit()
