"""
history_dialog.py - Modal list of recently generated passwords.

Newest first. Clicking a row selects it, "Use Selected" (or a
double-click) hands the row index back to the caller, which then asks
the HistoryStore for that entry.
"""

import customtkinter as ctk
from typing import Callable, List

from gui.theme import get_colors, PASSWORD_FONT


class HistoryDialog(ctk.CTkToplevel):
    """
    Args:
        parent: Parent widget
        entries: History snapshot, newest first
        on_select: Called with the chosen index
    """

    def __init__(self, parent, entries: List[str], on_select: Callable[[int], None]):
        C = get_colors()
        super().__init__(parent)
        self.on_select = on_select
        self.selected_index = 0 if entries else None
        self._rows = []

        self.title("Password History")
        self.geometry("420x420")
        self.configure(fg_color=C["bg_primary"])
        self.resizable(False, True)

        # Modal
        self.transient(parent)
        self.grab_set()

        self._build_ui(entries)
        self.bind("<Return>", lambda e: self._accept())
        self.bind("<Escape>", lambda e: self.destroy())

    def _build_ui(self, entries: List[str]):
        C = get_colors()

        container = ctk.CTkFrame(self, fg_color="transparent")
        container.pack(fill="both", expand=True, padx=16, pady=16)

        ctk.CTkLabel(
            container, text="Recent passwords",
            font=ctk.CTkFont(size=16, weight="bold"),
            text_color=C["text_primary"], anchor="w",
        ).pack(fill="x", pady=(0, 8))

        rows = ctk.CTkScrollableFrame(
            container, fg_color=C["bg_card"],
            border_width=1, border_color=C["border"], corner_radius=10,
        )
        rows.pack(fill="both", expand=True, pady=(0, 12))

        for index, password in enumerate(entries):
            row = ctk.CTkButton(
                rows, text=password, anchor="w",
                font=ctk.CTkFont(family=PASSWORD_FONT[0], size=13),
                fg_color="transparent", hover_color=C["bg_hover"],
                text_color=C["text_primary"], corner_radius=6,
                command=lambda i=index: self._highlight(i),
            )
            row.bind("<Double-Button-1>", lambda e, i=index: self._accept(i))
            row.pack(fill="x", pady=1)
            self._rows.append(row)

        btn_frame = ctk.CTkFrame(container, fg_color="transparent")
        btn_frame.pack(fill="x")

        ctk.CTkButton(
            btn_frame, text="Cancel", height=36,
            fg_color=C["bg_card"], hover_color=C["bg_hover"],
            border_width=1, border_color=C["border"],
            text_color=C["text_primary"],
            command=self.destroy,
        ).pack(side="left", fill="x", expand=True, padx=(0, 8))

        ctk.CTkButton(
            btn_frame, text="Use Selected", height=36,
            font=ctk.CTkFont(size=13, weight="bold"),
            fg_color=C["accent"], hover_color=C["accent_hover"],
            command=self._accept,
        ).pack(side="right", fill="x", expand=True)

        if self._rows:
            self._highlight(0)

    def _highlight(self, index: int):
        C = get_colors()
        self.selected_index = index
        for i, row in enumerate(self._rows):
            row.configure(fg_color=C["bg_input"] if i == index else "transparent")

    def _accept(self, index=None):
        if index is not None:
            self.selected_index = index
        if self.selected_index is not None:
            self.on_select(self.selected_index)
        self.destroy()
