"""
cli.py - Terminal version of the password generator.

Prints one password and its strength score. With -p it also copies the
password to the clipboard and waits, clearing the clipboard once the
timeout is up (unless something else was copied in the meantime).

    pwgen                 16 chars, all character types
    pwgen -l 24 -S        24 chars, no look-alike characters
    pwgen -d -l 6         6-digit PIN (raised to 8, see below)
    pwgen -p 20           copy, then clear the clipboard after 20s

Lengths under 8 are not recommended, so they're raised to 8 with a
warning. Ctrl-C while waiting cancels the clear and exits.
"""

import argparse
import sys
from typing import List, Optional

from core.clipboard import ClipboardRetentionController, PyperclipClipboard
from core.config import CLI_DEFAULT_LENGTH, CLI_MIN_RECOMMENDED_LENGTH
from core.logging_setup import configure_logging
from core.password_gen import CharsetPolicy, PasswordGenerator, normalize_policy
from core.random_source import EntropySourceError
from core.strength import score_password


EXIT_SUCCESS = 0
EXIT_SYS_ERROR = 1
EXIT_ARG_ERROR = 2  # argparse uses 2 for usage errors too

# How often the wait loop wakes up to notice Ctrl-C
POLL_SECONDS = 0.1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pwgen",
        description="Secure Password Generator",
    )
    parser.add_argument("-l", "--length", type=int, default=CLI_DEFAULT_LENGTH,
                        help=f"Set password length (default: {CLI_DEFAULT_LENGTH})")
    parser.add_argument("-p", "--clipboard", type=int, default=0, metavar="SECONDS",
                        help="Copy to clipboard and clear after timeout")

    # -u and -d share a destination, so whichever comes last wins
    parser.add_argument("-u", "--upper-only", dest="only", action="store_const", const="upper",
                        help="Uppercase letters only")
    parser.add_argument("-d", "--digits-only", dest="only", action="store_const", const="digits",
                        help="Digits only")

    parser.add_argument("-s", "--no-special", action="store_true",
                        help="No special characters")
    parser.add_argument("-a", "--alphanumeric", action="store_true",
                        help="Alphanumeric only (same as -s)")
    parser.add_argument("-S", "--avoid-similar", action="store_true",
                        help="Avoid similar characters (I, l, 1, O, 0)")
    parser.add_argument("-m", "--no-minimum", action="store_true",
                        help="Don't enforce minimum character types")
    return parser


def policy_from_args(args: argparse.Namespace) -> CharsetPolicy:
    """Translate parsed flags into a CharsetPolicy, warning on short lengths."""
    length = args.length
    if length < CLI_MIN_RECOMMENDED_LENGTH:
        print(f"Warning: Password length less than {CLI_MIN_RECOMMENDED_LENGTH} "
              f"is not recommended.", file=sys.stderr)
        length = CLI_MIN_RECOMMENDED_LENGTH

    use_upper = use_lower = use_digits = use_special = True
    if args.only == "upper":
        use_lower = use_digits = use_special = False
    elif args.only == "digits":
        use_upper = use_lower = use_special = False
    if args.no_special or args.alphanumeric:
        use_special = False

    return CharsetPolicy(
        length=length,
        use_upper=use_upper,
        use_lower=use_lower,
        use_digits=use_digits,
        use_special=use_special,
        enforce_minimum=not args.no_minimum,
        avoid_similar=args.avoid_similar,
    )


def hold_in_clipboard(password: str, timeout: int, controller: ClipboardRetentionController) -> int:
    """Copy, wait for the wipe, report. Returns the exit code."""
    if not controller.arm(password, timeout):
        print("Could not copy to clipboard.", file=sys.stderr)
        return EXIT_SUCCESS

    print(f"Password copied to clipboard. Will clear in {timeout} seconds.")
    try:
        while not controller.wait(POLL_SECONDS):
            pass
    except KeyboardInterrupt:
        controller.cancel()
        print("\nInterrupted; clipboard left as is.")
        return EXIT_SUCCESS

    if controller.last_cleared:
        print("Clipboard cleared.")
    else:
        print("Clipboard changed since copying; left as is.")
    return EXIT_SUCCESS


def main(argv: Optional[List[str]] = None, controller: Optional[ClipboardRetentionController] = None) -> int:
    configure_logging()
    args = build_parser().parse_args(argv)

    policy, notes = normalize_policy(policy_from_args(args))
    for note in notes:
        print(f"Warning: {note}", file=sys.stderr)

    try:
        generator = PasswordGenerator()
    except EntropySourceError as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        return EXIT_SYS_ERROR

    password = generator.generate(policy)
    result = score_password(password)
    print(password)
    print(f"Strength: {result.score}/100 ({result.category})")

    timeout = max(0, args.clipboard)
    if timeout > 0:
        if controller is None:
            controller = ClipboardRetentionController(PyperclipClipboard())
        return hold_in_clipboard(password, timeout, controller)
    return EXIT_SUCCESS


def run():
    """Console-script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
