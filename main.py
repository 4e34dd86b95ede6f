"""
main.py - Desktop entry point for the password generator.

This is the orchestrator. It:
1. Sets up logging and the secure random source
2. Creates the main window, the history and the clipboard controller
3. Rebuilds the view when the theme changes (history survives)
4. Handles clean shutdown (wiping history and the clipboard)
"""

import sys
import customtkinter as ctk

from core.clipboard import ClipboardRetentionController
from core.history import HistoryStore
from core.logging_setup import configure_logging
from core.password_gen import PasswordGenerator
from core.random_source import EntropySourceError
from gui.generator_window import GeneratorWindow
from gui.theme import get_colors
from gui.tk_bridge import TkClipboard, TkScheduler


APP_VERSION = "1.0.0"


class PasswordGeneratorApp(ctk.CTk):
    """Main application window."""

    def __init__(self, generator: PasswordGenerator):
        super().__init__()
        self.generator = generator

        # Window setup
        self.title("Secure Password Generator")
        self.geometry("520x640")
        self.minsize(460, 600)

        # Make sure secrets are wiped when the window closes
        self.protocol("WM_DELETE_WINDOW", self._on_close)

        # These outlive the view, which is rebuilt on theme changes.
        # Clipboard and timer go through the root window so they stay on
        # the Tk thread and survive the view being destroyed.
        self.history = HistoryStore()
        self.clipboard = ClipboardRetentionController(
            TkClipboard(self), scheduler=TkScheduler(self),
        )

        self.view = None
        self._show_generator()

    def _show_generator(self):
        password = ""
        carried = {}
        if self.view:
            # Keep what the user typed and ticked across the rebuild
            password = self.view.password_entry.get()
            carried = {
                "policy": self.view.current_policy(),
                "auto_clear": self.view.auto_clear_enabled,
            }
            self.view.wipe_display()
            self.view.destroy()

        self.configure(fg_color=get_colors()["bg_primary"])
        self.view = GeneratorWindow(
            parent=self,
            generator=self.generator,
            history=self.history,
            clipboard=self.clipboard,
            on_theme_change=self._show_generator,
            password=password,
            **carried,
        )
        self.view.pack(fill="both", expand=True)

    def _on_close(self):
        """Clean shutdown: clear the clipboard, wipe history, destroy the window."""
        self.clipboard.flush()
        self.history.clear()
        if self.view:
            self.view.wipe_display()
        self.destroy()


def main():
    configure_logging()
    ctk.set_appearance_mode("dark")

    try:
        generator = PasswordGenerator()
    except EntropySourceError as e:
        print(f"Fatal error: {e}")
        sys.exit(1)

    try:
        app = PasswordGeneratorApp(generator)
        app.mainloop()
    except KeyboardInterrupt:
        print("\nShutting down...")
        sys.exit(0)


if __name__ == "__main__":
    main()
