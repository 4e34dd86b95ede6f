"""
generator_window.py - The password generator's main view.

Wires the widgets to the core objects. Each user action maps onto one
history and/or clipboard call:

    Generate         push current -> generate -> copy -> cursor idle
    Remove Special   push current -> strip     -> copy -> cursor idle
    Undo             history.undo_step()        -> copy
    Mouse wheel      history.scroll(up = older) -> copy
    Middle click     history dialog -> history.select_direct(i) -> copy

"Copy" means arm an auto-clear when that option is ticked, or a plain
clipboard write when it isn't.
"""

import logging
from typing import Optional

import customtkinter as ctk

from core.clipboard import ClipboardRetentionController
from core.config import (
    AUTO_CLEAR_CLIPBOARD, CLIPBOARD_TIMEOUT, DEFAULT_LENGTH,
    ERASE_SENTINEL, MAX_SLIDER_LENGTH, MIN_SLIDER_LENGTH,
)
from core.history import HistoryStore
from core.password_gen import CharsetPolicy, PasswordGenerator, normalize_policy, strip_special
from core.strength import score_password
from gui.history_dialog import HistoryDialog
from gui.theme import PASSWORD_FONT, get_colors, get_strength_color, toggle_mode
from gui.tk_bridge import wheel_forward


logger = logging.getLogger(__name__)


class GeneratorWindow(ctk.CTkFrame):
    """Main generator view."""

    def __init__(
        self,
        parent: ctk.CTk,
        generator: PasswordGenerator,
        history: HistoryStore,
        clipboard: ClipboardRetentionController,
        on_theme_change=None,
        password: str = "",
        policy: Optional[CharsetPolicy] = None,
        auto_clear: bool = AUTO_CLEAR_CLIPBOARD,
    ):
        C = get_colors()
        super().__init__(parent, fg_color=C["bg_primary"])
        self.generator = generator
        self.history = history
        self.clipboard = clipboard
        self.on_theme_change = on_theme_change

        self._build_ui()
        if policy is not None:
            self._apply_policy(policy)
        self._set_checked(self.auto_clear, auto_clear)
        self._bind_shortcuts()
        self._show(password)
        self._refresh_undo()

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def _build_ui(self):
        C = get_colors()

        container = ctk.CTkFrame(self, fg_color="transparent")
        container.pack(fill="both", expand=True, padx=20, pady=20)

        header = ctk.CTkFrame(container, fg_color="transparent")
        header.pack(fill="x", pady=(0, 12))

        ctk.CTkLabel(
            header, text="Password Generator",
            font=ctk.CTkFont(size=20, weight="bold"),
            text_color=C["text_primary"],
        ).pack(side="left")

        ctk.CTkButton(
            header, text="◐", width=32, height=32,
            fg_color="transparent", hover_color=C["bg_hover"],
            text_color=C["text_secondary"],
            command=self._toggle_theme,
        ).pack(side="right")

        # --- Password field + strength meter ---
        self.password_entry = ctk.CTkEntry(
            container, height=44,
            font=ctk.CTkFont(family=PASSWORD_FONT[0], size=PASSWORD_FONT[1], weight="bold"),
            fg_color=C["bg_input"], border_color=C["border"],
            text_color=C["success"],
        )
        self.password_entry.pack(fill="x", pady=(0, 6))
        self.password_entry.bind("<KeyRelease>", lambda e: self._update_strength())
        self.password_entry.bind("<MouseWheel>", self._on_wheel)
        self.password_entry.bind("<Button-4>", self._on_wheel)
        self.password_entry.bind("<Button-5>", self._on_wheel)
        self.password_entry.bind("<Button-2>", lambda e: self._show_history())

        self.strength_bar = ctk.CTkProgressBar(
            container, height=8, corner_radius=4,
            fg_color=C["border"], progress_color=C["text_muted"],
        )
        self.strength_bar.pack(fill="x", pady=(0, 2))
        self.strength_bar.set(0)

        self.strength_label = ctk.CTkLabel(
            container, text="", font=ctk.CTkFont(size=11),
            text_color=C["text_muted"], anchor="w",
        )
        self.strength_label.pack(fill="x", pady=(0, 12))

        # --- Options card ---
        card = ctk.CTkFrame(
            container, fg_color=C["bg_card"], corner_radius=10,
            border_width=1, border_color=C["border"],
        )
        card.pack(fill="x", pady=(0, 12))
        inner = ctk.CTkFrame(card, fg_color="transparent")
        inner.pack(padx=16, pady=16, fill="x")

        length_row = ctk.CTkFrame(inner, fg_color="transparent")
        length_row.pack(fill="x", pady=(0, 6))
        ctk.CTkLabel(
            length_row, text="Length", font=ctk.CTkFont(size=12),
            text_color=C["text_secondary"],
        ).pack(side="left")
        self.length_value_label = ctk.CTkLabel(
            length_row, text=str(DEFAULT_LENGTH),
            font=ctk.CTkFont(size=12, weight="bold"), text_color=C["text_primary"],
        )
        self.length_value_label.pack(side="right")

        self.length_slider = ctk.CTkSlider(
            inner, from_=MIN_SLIDER_LENGTH, to=MAX_SLIDER_LENGTH,
            number_of_steps=MAX_SLIDER_LENGTH - MIN_SLIDER_LENGTH,
            fg_color=C["border"], progress_color=C["accent"],
            button_color=C["accent"], button_hover_color=C["accent_hover"],
            command=self._on_length_change,
        )
        self.length_slider.set(DEFAULT_LENGTH)
        self.length_slider.pack(fill="x", pady=(0, 12))

        self.use_upper = self._checkbox(inner, "Uppercase (A-Z)", True)
        self.use_lower = self._checkbox(inner, "Lowercase (a-z)", True)
        self.use_digits = self._checkbox(inner, "Digits (0-9)", True)
        self.use_special = self._checkbox(inner, "Special (!@#$%...)", True)
        self.enforce_minimum = self._checkbox(inner, "Enforce minimum of each character type", True)
        self.avoid_similar = self._checkbox(inner, "Avoid similar characters (1, l, I, 0, O)", False)
        self.auto_clear = self._checkbox(
            inner, f"Auto-clear clipboard ({CLIPBOARD_TIMEOUT}s)", AUTO_CLEAR_CLIPBOARD,
        )

        # --- Buttons ---
        btn_frame = ctk.CTkFrame(container, fg_color="transparent")
        btn_frame.pack(fill="x")

        self.generate_btn = ctk.CTkButton(
            btn_frame, text="Generate", height=40,
            font=ctk.CTkFont(size=13, weight="bold"),
            fg_color=C["accent"], hover_color=C["accent_hover"],
            command=self._generate,
        )
        self.generate_btn.pack(side="left", fill="x", expand=True, padx=(0, 6))

        self.strip_btn = self._secondary_button(btn_frame, "Remove Special", self._remove_special)
        self.undo_btn = self._secondary_button(btn_frame, "Undo", self._undo)
        self.history_btn = self._secondary_button(btn_frame, "History", self._show_history)
        self.undo_btn.configure(state="disabled")

        self.status_label = ctk.CTkLabel(
            container, text="", font=ctk.CTkFont(size=11),
            text_color=C["warning"], anchor="w", wraplength=440,
        )
        self.status_label.pack(fill="x", pady=(8, 0))

    def _checkbox(self, parent, text: str, checked: bool) -> ctk.CTkCheckBox:
        C = get_colors()
        box = ctk.CTkCheckBox(
            parent, text=text, font=ctk.CTkFont(size=12),
            text_color=C["text_secondary"],
            fg_color=C["accent"], hover_color=C["accent_hover"],
        )
        if checked:
            box.select()
        box.pack(anchor="w", pady=2)
        return box

    def _secondary_button(self, parent, text: str, command) -> ctk.CTkButton:
        C = get_colors()
        btn = ctk.CTkButton(
            parent, text=text, height=40, width=90,
            font=ctk.CTkFont(size=13),
            fg_color=C["bg_card"], hover_color=C["bg_hover"],
            border_width=1, border_color=C["border"],
            text_color=C["text_primary"],
            command=command,
        )
        btn.pack(side="left", padx=(0, 6))
        return btn

    def _bind_shortcuts(self):
        top = self.winfo_toplevel()
        top.bind("<Control-g>", lambda e: self._generate())
        top.bind("<Control-z>", lambda e: self._undo())
        top.bind("<Control-h>", lambda e: self._show_history())

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def current_policy(self) -> CharsetPolicy:
        """The policy the options card currently describes."""
        return CharsetPolicy(
            length=round(self.length_slider.get()),
            use_upper=bool(self.use_upper.get()),
            use_lower=bool(self.use_lower.get()),
            use_digits=bool(self.use_digits.get()),
            use_special=bool(self.use_special.get()),
            enforce_minimum=bool(self.enforce_minimum.get()),
            avoid_similar=bool(self.avoid_similar.get()),
        )

    @property
    def auto_clear_enabled(self) -> bool:
        return bool(self.auto_clear.get())

    def _apply_policy(self, policy: CharsetPolicy):
        self.length_slider.set(policy.length)
        self.length_value_label.configure(text=str(policy.length))
        self._set_checked(self.use_upper, policy.use_upper)
        self._set_checked(self.use_lower, policy.use_lower)
        self._set_checked(self.use_digits, policy.use_digits)
        self._set_checked(self.use_special, policy.use_special)
        self._set_checked(self.enforce_minimum, policy.enforce_minimum)
        self._set_checked(self.avoid_similar, policy.avoid_similar)

    @staticmethod
    def _set_checked(box: ctk.CTkCheckBox, checked: bool):
        if checked:
            box.select()
        else:
            box.deselect()

    def _generate(self):
        self.history.push(self.password_entry.get())

        policy, notes = normalize_policy(self.current_policy())
        if policy.length != round(self.length_slider.get()):
            self.length_slider.set(policy.length)
            self.length_value_label.configure(text=str(policy.length))
        self.status_label.configure(text="\n".join(notes))

        password = self.generator.generate(policy)
        self._show(password)
        self._copy(password)

        self.history.reset_cursor()
        self._refresh_undo()

    def _remove_special(self):
        current = self.password_entry.get()
        self.history.push(current)

        cleaned = strip_special(current)
        if cleaned:
            self._show(cleaned)
            self._copy(cleaned)

        self.history.reset_cursor()
        self._refresh_undo()

    def _undo(self):
        password = self.history.undo_step()
        if password is None:
            return
        self._show(password)
        self._copy(password)
        self._refresh_undo()

    def _on_wheel(self, event):
        password = self.history.scroll(wheel_forward(event))
        if password is not None:
            self._show(password)
            self._copy(password)
            self._refresh_undo()
        return "break"

    def _show_history(self):
        if not len(self.history):
            return
        HistoryDialog(self, self.history.entries(), on_select=self._select_from_history)

    def _select_from_history(self, index: int):
        password = self.history.select_direct(index)
        self._show(password)
        self._copy(password)
        self._refresh_undo()

    def _on_length_change(self, value):
        self.length_value_label.configure(text=str(round(value)))

    def _toggle_theme(self):
        new_mode = toggle_mode()
        ctk.set_appearance_mode(new_mode)
        if self.on_theme_change:
            self.on_theme_change()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _show(self, password: str):
        self.password_entry.delete(0, "end")
        self.password_entry.insert(0, password)
        self._update_strength()

    def _copy(self, password: str):
        if self.auto_clear_enabled:
            copied = self.clipboard.arm(password, CLIPBOARD_TIMEOUT)
        else:
            copied = self.clipboard.copy_plain(password)
        if not copied:
            self.status_label.configure(text="Could not copy to the clipboard.")

    def _refresh_undo(self):
        self.undo_btn.configure(state="normal" if self.history.can_undo else "disabled")

    def _update_strength(self):
        result = score_password(self.password_entry.get())
        color = get_strength_color(result.category) if not result.empty else get_colors()["text_muted"]
        self.strength_bar.set(result.score / 100)
        self.strength_bar.configure(progress_color=color)
        self.strength_label.configure(
            text=result.display_label if result.empty
            else f"{result.display_label}  •  {result.score}/100",
            text_color=color,
        )

    def wipe_display(self):
        """Overwrite the password field before the widget goes away."""
        current = self.password_entry.get()
        if current:
            self.password_entry.delete(0, "end")
            self.password_entry.insert(0, ERASE_SENTINEL * len(current))
            self.password_entry.delete(0, "end")
        logger.debug("Password field wiped")
