import logging
import tkinter as tk
from tkinter import ttk, messagebox

from logics.computation import PercentageMismatch
from logics.config import get_settings
from logics.data_model import CalculationMode
from logics.engine import AllocationEngine
from logics.number_format import format_display, parse_number
from logics.summary import summary_rows, summary_totals

from UIs.category_card import CategoryCard
from UIs.widgets import NumericEntry, Toast

logger = logging.getLogger(__name__)

MODE_LABELS = {
    CalculationMode.TOP_DOWN: "هدف‌گذاری از کل به جزء",
    CalculationMode.BOTTOM_UP: "پیش‌بینی از جزء به کل",
}
CARD_COLUMNS = 3

PRINT_GUIDE = (
    "برای چاپ نتایج یا ذخیره آن‌ها به صورت فایل PDF، از قابلیت چاپ سیستم‌عامل خود استفاده کنید.\n"
    "معمولاً با فشردن کلیدهای Ctrl+P (در ویندوز) یا Cmd+P (در مک) می‌توانید این کار را انجام دهید."
)


class PropertyCalculatorApp:
    """Single-screen controller: renders the engine state and forwards every edit to it."""

    def __init__(self, root, engine=None, settings=None):
        self.root = root
        self.root.title("ماشین حساب هدف فروش املاک")
        self.root.geometry("1100x950")

        self.settings = settings or get_settings()
        self.engine = engine or AllocationEngine.from_settings(self.settings)

        self._build_ui()
        self._refresh()
        # Initial calculation once the window is mapped, so the toast has a place to go.
        self.root.after(200, lambda: self._handle_result(self.engine.recompute()))

    # ── Layout ───────────────────────────────────────────────

    def _build_ui(self):
        tk.Label(self.root, text="ماشین حساب هدف فروش املاک", font=("Arial", 16, "bold")).pack(pady=(12, 2))
        tk.Label(
            self.root,
            text="حالت محاسبه را انتخاب کنید، سپس مقادیر را وارد و دکمه محاسبه را بزنید.",
            fg="gray",
        ).pack()

        self._build_mode_tabs()
        self._build_settings_card()

        cards_frame = ttk.Frame(self.root)
        cards_frame.pack(fill='x', padx=15, pady=5)
        self._cards = []
        for idx, category in enumerate(self.engine.snapshot().categories):
            card = CategoryCard(cards_frame, category, on_edit=self._on_category_edit)
            card.grid(row=idx // CARD_COLUMNS, column=CARD_COLUMNS - 1 - idx % CARD_COLUMNS,
                      sticky='nsew', padx=5, pady=5)
            self._cards.append(card)
        for col in range(CARD_COLUMNS):
            cards_frame.columnconfigure(col, weight=1)

        ttk.Button(self.root, text="محاسبه کن", command=self._on_calculate).pack(pady=8)

        self._build_summary_card()

        ttk.Button(self.root, text="🖨 راهنمای چاپ", command=self._show_print_guide).pack(pady=(4, 12))

    def _build_mode_tabs(self):
        tabs = ttk.Frame(self.root)
        tabs.pack(pady=8)
        self._mode_var = tk.StringVar(value=self.engine.mode.value)
        # Packed right to left so the first mode sits on the right.
        for mode in CalculationMode:
            ttk.Radiobutton(
                tabs,
                text=MODE_LABELS[mode],
                value=mode.value,
                variable=self._mode_var,
                style='Toolbutton',
                command=self._on_mode_change,
            ).pack(side='right', padx=2)

    def _build_settings_card(self):
        card = ttk.LabelFrame(self.root, text="تنظیمات محاسبه", padding=8)
        card.pack(fill='x', padx=15, pady=5)

        self._rate_entry = NumericEntry(
            card, label="نرخ روز دلار (تومان)", decimals=0, on_commit=self._on_rate_edit)
        self._total_local_entry = NumericEntry(
            card, label="هدف کل فروش سالانه (تومان)", decimals=0, on_commit=self._on_total_local_edit)
        self._total_foreign_entry = NumericEntry(
            card, label="هدف کل فروش سالانه (دلار)", decimals=1, on_commit=self._on_total_foreign_edit)

        self._rate_entry.grid(row=0, column=2, sticky='ew', padx=5)
        self._total_local_entry.grid(row=0, column=1, sticky='ew', padx=5)
        self._total_foreign_entry.grid(row=0, column=0, sticky='ew', padx=5)
        for col in range(3):
            card.columnconfigure(col, weight=1)

        self._pct_sum_label = tk.Label(card, text="", fg="gray", anchor='e')
        self._pct_sum_label.grid(row=1, column=0, columnspan=3, sticky='ew', pady=(6, 0))

    def _build_summary_card(self):
        card = ttk.LabelFrame(self.root, text="خلاصه نتایج", padding=8)
        card.pack(fill='both', expand=True, padx=15, pady=5)

        totals = ttk.Frame(card)
        totals.pack(fill='x')
        self._total_caption = tk.Label(totals, text="", fg="#475569")
        self._total_caption.grid(row=0, column=1, sticky='ew')
        self._total_local_label = tk.Label(totals, text="", font=("Arial", 15, "bold"))
        self._total_local_label.grid(row=1, column=1, sticky='ew')
        tk.Label(totals, text="معادل دلار", fg="#475569").grid(row=0, column=0, sticky='ew')
        self._total_foreign_label = tk.Label(totals, text="", font=("Arial", 15, "bold"))
        self._total_foreign_label.grid(row=1, column=0, sticky='ew')
        totals.columnconfigure(0, weight=1)
        totals.columnconfigure(1, weight=1)

        ttk.Separator(card).pack(fill='x', pady=8)
        tk.Label(card, text="جزئیات فروش بر اساس واحد/متراژ و درصد سهم",
                 font=("Arial", 11, "bold"), anchor='e').pack(fill='x')

        columns = ('percentage', 'quantity', 'name')
        self._table = ttk.Treeview(card, columns=columns, show='headings', height=6)
        for col, heading in zip(columns, ("درصد سهم", "مقدار", "نوع ملک")):
            self._table.heading(col, text=heading, anchor='e')
            self._table.column(col, anchor='e')
        self._table.pack(fill='both', expand=True, pady=4)

        self._table_totals_label = tk.Label(card, text="", fg="#475569", anchor='e')
        self._table_totals_label.pack(fill='x')

    # ── Rendering ────────────────────────────────────────────

    def _refresh(self):
        state = self.engine.snapshot()
        top_down = state.mode == CalculationMode.TOP_DOWN
        self._mode_var.set(state.mode.value)

        self._rate_entry.set_value(state.exchange_rate)
        self._total_local_entry.set_value(state.total_target_local)
        self._total_foreign_entry.set_value(state.total_target_foreign)
        for entry in (self._total_local_entry, self._total_foreign_entry):
            if top_down:
                entry.grid()
            else:
                entry.grid_remove()

        if top_down:
            self._pct_sum_label.config(
                text=f"مجموع درصدها: {format_display(self.engine.percentage_sum(), 1)}%")
        else:
            self._pct_sum_label.config(text="")

        editable = self.engine.editable_fields()
        for card, category in zip(self._cards, state.categories):
            card.refresh(category, editable)

        totals = summary_totals(state)
        self._total_caption.config(text=totals['caption'])
        self._total_local_label.config(text=format_display(totals['total_local'], 0))
        self._total_foreign_label.config(text=f"${format_display(totals['total_foreign'], 1)}")

        self._table.delete(*self._table.get_children())
        for name, quantity, percentage in summary_rows(state):
            self._table.insert('', tk.END, values=(percentage, quantity, name))
        self._table_totals_label.config(
            text=f"جمع سهم از فروش: {format_display(totals['target_sale_sum'], 0)} تومان"
                 f"   |   جمع درصدها: {format_display(totals['percentage_sum'], 1)}%")

    def _handle_result(self, result):
        self._refresh()
        if isinstance(result, PercentageMismatch):
            logger.info("[GUI] Percentage mismatch: %s", result.actual_sum)
            messagebox.showwarning(
                "⚠️ اخطار مجموع درصدها!",
                f"مجموع درصدها باید دقیقاً ۱۰۰% باشد. مجموع فعلی: {format_display(result.actual_sum, 1)}%",
                parent=self.root,
            )
        else:
            Toast(self.root, "محاسبات انجام شد", "نتایج با موفقیت به‌روزرسانی شدند",
                  duration_ms=self.settings.toast_ms)

    # ── Callbacks ────────────────────────────────────────────

    def _on_mode_change(self):
        self._handle_result(self.engine.switch_mode(self._mode_var.get()))

    def _on_calculate(self):
        # Pending edits in a still-focused entry.
        for entry in (self._rate_entry, self._total_local_entry, self._total_foreign_entry):
            entry.commit()
        for card in self._cards:
            card.flush()
        self._handle_result(self.engine.recompute())

    def _on_rate_edit(self, text):
        self.engine.set_exchange_rate(parse_number(text))
        self._refresh()

    def _on_total_local_edit(self, text):
        self.engine.set_total_target_local(parse_number(text))
        self._refresh()

    def _on_total_foreign_edit(self, text):
        self.engine.set_total_target_foreign(parse_number(text))
        self._refresh()

    def _on_category_edit(self, category_id, field, text):
        self.engine.update_category_field(category_id, field, text)
        self._refresh()

    def _show_print_guide(self):
        messagebox.showinfo("راهنمای چاپ / ذخیره PDF", PRINT_GUIDE, parent=self.root)
