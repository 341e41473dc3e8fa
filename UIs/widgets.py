import tkinter as tk
from tkinter import ttk

from logics.number_format import format_display


class NumericEntry(ttk.Frame):
    """
    A captioned entry that shows a formatted number and reports user edits.

    The text is handed to ``on_commit`` on Return or focus-out, but only when
    it differs from what was last displayed, so re-committing a rounded
    display value can never overwrite the exact number behind it.

    Args:
        parent: Parent widget.
        label: Caption shown above the entry.
        decimals: Fraction digits used when displaying values.
        on_commit: callable(text) invoked with the raw user text.
        width: Entry width in characters.

    Example:
        entry = NumericEntry(frame, label="نرخ روز دلار (تومان)", decimals=0,
                             on_commit=lambda text: engine.set_exchange_rate(parse_number(text)))
        entry.set_value(95000)   # shows ۹۵٬۰۰۰
    """

    def __init__(self, parent, *, label, decimals, on_commit, width=22):
        super().__init__(parent, padding=2)
        self.decimals = decimals
        self._on_commit = on_commit
        self._shown = ""

        self._label = tk.Label(self, text=label, anchor='e')
        self._label.pack(fill='x')

        self._var = tk.StringVar()
        self._entry = ttk.Entry(self, textvariable=self._var, width=width, justify='left')
        self._entry.pack(fill='x')
        self._entry.bind('<Return>', self.commit)
        self._entry.bind('<FocusOut>', self.commit)

    # ── Public API ────────────────────────────────────────────

    def set_value(self, value):
        self._shown = format_display(value, self.decimals)
        self._var.set(self._shown)

    def set_enabled(self, enabled):
        self._entry.state(['!disabled'] if enabled else ['disabled'])

    def commit(self, _event=None):
        """Send the text to on_commit if the user changed it."""
        text = self._var.get()
        if text == self._shown or 'disabled' in self._entry.state():
            return
        self._shown = text
        self._on_commit(text)


class Toast:
    """
    Transient notice in the bottom-right corner of ``root`` that closes itself.

    Args:
        root: Parent Tk window.
        title: Bold first line.
        description: Optional second line.
        duration_ms: Time before the notice is destroyed.
    """

    def __init__(self, root, title, description="", duration_ms=3000):
        self._win = tk.Toplevel(root)
        self._win.overrideredirect(True)
        self._win.configure(bg="#0f172a")

        tk.Label(self._win, text=title, font=("Arial", 11, "bold"),
                 fg="white", bg="#0f172a", anchor='e').pack(fill='x', padx=14, pady=(10, 2))
        if description:
            tk.Label(self._win, text=description, fg="white", bg="#0f172a",
                     anchor='e').pack(fill='x', padx=14, pady=(0, 10))

        root.update_idletasks()
        self._win.update_idletasks()
        x = root.winfo_rootx() + root.winfo_width() - self._win.winfo_reqwidth() - 20
        y = root.winfo_rooty() + root.winfo_height() - self._win.winfo_reqheight() - 20
        self._win.geometry(f"+{max(x, 0)}+{max(y, 0)}")

        self._win.after(duration_ms, self.close)

    def close(self):
        if self._win.winfo_exists():
            self._win.destroy()
