"""``python -m mundt`` entry point.

Batch runs are often launched with stdout discarded, so the run log and any
unhandled traceback are also written under the user state directory
(``$XDG_STATE_HOME/mundt/logs`` or ``%LOCALAPPDATA%\\mundt\\logs``).
"""

from __future__ import annotations

import logging
import os
import sys
import traceback
from pathlib import Path

LOG_LEVEL_ENV = "MUNDT_LOG_LEVEL"


def state_log_dir() -> Path:
    if sys.platform == "win32":
        root = os.environ.get("LOCALAPPDATA") or os.environ.get("TEMP") or "."
    else:
        root = os.environ.get("XDG_STATE_HOME") or os.path.expanduser("~/.local/state")
    target = Path(root) / "mundt" / "logs"
    try:
        target.mkdir(parents=True, exist_ok=True)
    except OSError:
        target = Path(os.environ.get("TEMP", "/tmp")) / "mundt_logs"
        target.mkdir(parents=True, exist_ok=True)
    return target


def configure_logging(log_dir: Path) -> logging.Logger:
    """Attach a file handler and a console handler to the ``mundt`` logger.

    The console shows warnings and above (severe configuration messages);
    the file level follows ``MUNDT_LOG_LEVEL`` and defaults to INFO.
    """
    pkg = logging.getLogger("mundt")
    pkg.setLevel(logging.DEBUG)

    level_name = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
    try:
        handler = logging.FileHandler(log_dir / "mundt.log", encoding="utf-8")
    except OSError:
        handler = None
    if handler is not None:
        handler.setLevel(getattr(logging, level_name, logging.INFO))
        handler.setFormatter(
            logging.Formatter("%(asctime)s  %(name)s  %(levelname)s  %(message)s")
        )
        pkg.addHandler(handler)

    console = logging.StreamHandler()
    console.setLevel(logging.WARNING)
    console.setFormatter(logging.Formatter("** %(levelname)s ** %(message)s"))
    pkg.addHandler(console)
    return logging.getLogger("mundt.entry")


def _entry() -> None:
    log_dir = state_log_dir()
    log = configure_logging(log_dir)

    from mundt.cli import main
    from mundt.io import package_version

    log.info("mundt %s  argv=%s  cwd=%s", package_version(), sys.argv[1:], os.getcwd())
    try:
        main()
    except SystemExit as exc:
        log.info("exit code %s", exc.code)
        raise
    except Exception:
        tb = traceback.format_exc()
        (log_dir / "crash.log").write_text(tb, encoding="utf-8")
        log.critical("unhandled exception, traceback saved to %s", log_dir / "crash.log")
        raise SystemExit(1) from None


if __name__ == "__main__":
    _entry()
