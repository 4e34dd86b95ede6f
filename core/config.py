"""
config.py - Defaults and tunables for the password generator.

Everything that would otherwise be a magic number lives here so the
desktop window, the terminal tool and the core modules agree on the
same values. Nothing here is persisted; the app always starts from
these defaults.
"""

import os


# ------------------------------------------------------------------
# Password generation
# ------------------------------------------------------------------

# Length the desktop window starts with
DEFAULT_LENGTH = 20

# The terminal tool is a bit more conservative, and nudges anything
# shorter than 8 characters back up to 8
CLI_DEFAULT_LENGTH = 16
CLI_MIN_RECOMMENDED_LENGTH = 8

# Range of the length slider in the desktop window
MIN_SLIDER_LENGTH = 4
MAX_SLIDER_LENGTH = 64


# ------------------------------------------------------------------
# History
# ------------------------------------------------------------------

# How many previous passwords we remember for undo / browse
HISTORY_CAPACITY = 10

# Character written over a secret before it is dropped
ERASE_SENTINEL = "X"


# ------------------------------------------------------------------
# Clipboard
# ------------------------------------------------------------------

# Seconds a copied password is allowed to sit in the clipboard
CLIPBOARD_TIMEOUT = 30

# Whether the desktop window arms the auto-clear by default
AUTO_CLEAR_CLIPBOARD = True


# ------------------------------------------------------------------
# Logging
# ------------------------------------------------------------------

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
LOG_LEVEL = os.environ.get("PWGEN_LOG_LEVEL", "WARNING").upper()
