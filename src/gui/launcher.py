"""Dedicated launcher module for `python -m gui` or the `epictodo` script.

Parses a few command line flags, delegates to ``create_app`` and shows the
main window.
"""

from __future__ import annotations

import argparse
import sys

from config import settings
from gui.app.bootstrap import BACKENDS, create_app


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="epictodo", description=settings.WINDOW_TITLE)
    parser.add_argument("--data-dir", default=settings.DATA_DIR, help="directory for stored tasks")
    parser.add_argument("--backend", choices=BACKENDS, default=settings.STORAGE_BACKEND)
    parser.add_argument("--log-level", default=settings.LOG_LEVEL)
    return parser


def main(argv: list[str] | None = None) -> int:  # pragma: no cover - runtime
    args = build_parser().parse_args(argv)
    ctx = create_app(
        headless=False, data_dir=args.data_dir, backend=args.backend, log_level=args.log_level
    )
    try:
        if ctx.qt_app is None:
            print("PyQt6 is not available; cannot start the GUI.", file=sys.stderr)  # noqa: T201
            return 1
        from gui.main_window import MainWindow

        win = MainWindow(ctx.viewmodel)
        win.show()
        return ctx.qt_app.exec()
    finally:
        ctx.close()


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
