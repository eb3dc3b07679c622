"""fileviewer CLI entry point.

Allows running via `python -m fileviewer` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from .errors import DocumentLoadError
from .version import get_version_string

USAGE = "usage: fileviewer [--gutter N] [--textual] [--log FILE] FILE | --keytest | --version"


def _escape_bytes(s: str) -> str:
    """Return a printable representation of raw key string."""
    return s.encode('unicode_escape').decode('ascii')


def run_keyboard_test() -> None:
    """Run an interactive keyboard test using the viewer's input stack.

    Prints each parsed key event and the viewer event it maps to. Quit with ESC.
    """
    from .terminal import TerminalSurface
    from .keyboard import KeyboardHandler, KeyEvent, KeyType

    print("Keyboard test mode - press keys to see parsed events.")
    print("Quit with ESC.")

    term = TerminalSurface()
    term.setup()
    kb = KeyboardHandler(term)
    try:
        while True:
            ev: KeyEvent | None = kb.get_key_event(timeout=None)
            if not ev:
                continue
            if ev.key_type == KeyType.SPECIAL and ev.value == 'escape':
                print("Exiting keyboard test.\r")
                break
            kind, payload = ev.to_viewer_event()
            parts = [
                f"type={ev.key_type.value}",
                f"value={_escape_bytes(ev.value)}",
                f"raw='{_escape_bytes(ev.raw)}'",
                f"event=({kind}, {_escape_bytes(payload)})",
            ]
            print(' '.join(parts) + '\r')
    finally:
        term.cleanup()


class UsageError(Exception):
    pass


def parse_args(args: list[str]) -> dict:
    """Parse command line arguments into an options dict."""
    options: dict = {
        "filename": None,
        "gutter_width": None,
        "textual": False,
        "log_file": None,
    }
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--textual":
            options["textual"] = True
        elif arg in ("--gutter", "--log"):
            if i + 1 >= len(args):
                raise UsageError(f"{arg} needs a value")
            value = args[i + 1]
            i += 1
            if arg == "--log":
                options["log_file"] = value
            else:
                try:
                    options["gutter_width"] = int(value)
                except ValueError:
                    raise UsageError(f"--gutter needs a number, got {value!r}") from None
                if options["gutter_width"] < 0:
                    raise UsageError("--gutter must not be negative")
        elif arg.startswith("-") and arg != "-":
            raise UsageError(f"unknown option {arg}")
        elif options["filename"] is None:
            options["filename"] = arg
        else:
            raise UsageError("only one file can be viewed")
        i += 1
    if options["filename"] is None:
        raise UsageError("no file given")
    return options


def configure_logging(log_file: Optional[str]) -> None:
    """Send log records to ``log_file``; the terminal is busy with the UI."""
    if log_file is None:
        logging.getLogger().addHandler(logging.NullHandler())
        return
    logging.basicConfig(
        filename=log_file,
        level=logging.DEBUG,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: Optional[list[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return 0
    if args and args[0] in ('--keytest', '--keyboard-test'):
        run_keyboard_test()
        return 0

    try:
        options = parse_args(args)
    except UsageError as e:
        print(f"fileviewer: {e}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 2
    configure_logging(options["log_file"])

    try:
        # Lazy import to avoid importing UI deps for --version
        if options["textual"]:
            from .textual_app import run_textual
            run_textual(options["filename"], gutter_width=options["gutter_width"])
        else:
            from .app import run_viewer
            from .settings_persistence import get_persistence
            run_viewer(options["filename"], gutter_width=options["gutter_width"],
                       persistence=get_persistence())
    except DocumentLoadError as e:
        print(f"fileviewer: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
