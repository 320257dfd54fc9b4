"""Colored migration logger: ANSI-colored console output for data backfills.

Each backfill run moves through a fixed set of stages. Giving every stage
its own color makes a long run easy to follow in a terminal tail.

Color scheme:
    Cyan    : scanning the target collection
    Blue    : resolving owners to companies
    Yellow  : writing batches
    Magenta : dry run previews
    Green   : completion
    Red     : errors
    Gray    : details and statistics
"""

import logging
import time
from contextlib import contextmanager
from typing import Any


class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"
    GRAY = "\033[90m"


# ── Migration stages ────────────────────────────────────────────────

class MigrationStage:
    """Backfill stages as (label, color, icon) tuples."""

    SCAN = ("SCAN", _Colors.CYAN, "🔎")
    RESOLVE = ("RESOLVE", _Colors.BLUE, "🏢")
    UPDATE = ("UPDATE", _Colors.YELLOW, "✏️")
    DRY_RUN = ("DRY_RUN", _Colors.MAGENTA, "🧪")
    RUN = ("RUN", _Colors.WHITE, "⚙️")
    ERROR = ("ERROR", _Colors.RED, "❌")
    COMPLETE = ("COMPLETE", _Colors.GREEN, "✅")


def _format_kwargs(kwargs: dict[str, Any]) -> str:
    if not kwargs:
        return ""
    details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
    return f" {_Colors.GRAY}({details}){_Colors.RESET}"


class MigrationLogger:
    """Color-coded logger for backfill runs.

    Usage:
        log = MigrationLogger("ohshop_admin.migrations.company_backfill")
        log.step_start(MigrationStage.SCAN, "Scanning products")
        log.progress(50, 200)
        log.step_complete(MigrationStage.COMPLETE, "Backfill finished", updated=180)
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)
        self._component = component_name

    def step_start(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        self._logger.info(
            f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{color}{message}{_Colors.RESET}{_format_kwargs(kwargs)}"
        )

    def step_complete(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        self._logger.info(
            f"{color}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.GREEN}✓ {message}{_Colors.RESET}{_format_kwargs(kwargs)}"
        )

    def step_error(self, stage: tuple[str, str, str], message: str, error: Exception | None = None) -> None:
        label, _, _ = stage
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}❌ [{label}]{_Colors.RESET} "
            f"{_Colors.RED}{message}{_Colors.RESET}"
        )
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.error(formatted)

    def detail(self, message: str, **kwargs: Any) -> None:
        self._logger.info(f"   {_Colors.GRAY}├─ {message}{_Colors.RESET}{_format_kwargs(kwargs)}")

    def warning(self, message: str, **kwargs: Any) -> None:
        self._logger.warning(
            f"   {_Colors.YELLOW}⚠ {message}{_Colors.RESET}{_format_kwargs(kwargs)}"
        )

    def progress(self, processed: int, total: int) -> None:
        """Log how far through the run we are as a percentage bar."""
        percent = round(processed / total * 100) if total else 100
        filled = percent // 5
        bar = "█" * filled + "░" * (20 - filled)
        self._logger.info(
            f"   {_Colors.YELLOW}{bar}{_Colors.RESET} "
            f"{_Colors.GRAY}{processed}/{total} ({percent}%){_Colors.RESET}"
        )

    def separator(self, title: str = "") -> None:
        if title:
            self._logger.info(
                f"{_Colors.GRAY}{'─' * 10} {title} {'─' * max(0, 50 - len(title))}{_Colors.RESET}"
            )
        else:
            self._logger.info(f"{_Colors.GRAY}{'─' * 60}{_Colors.RESET}")

    def stats(self, **kwargs: Any) -> None:
        parts = [f"{k}: {v}" for k, v in kwargs.items()]
        self._logger.info(f"   {_Colors.GRAY}📈 {' | '.join(parts)}{_Colors.RESET}")

    @contextmanager
    def timed_step(self, stage: tuple[str, str, str], message: str, **kwargs: Any):
        """Log start and end of a block together with the elapsed time."""
        self.step_start(stage, message, **kwargs)
        start = time.perf_counter()
        try:
            yield
        except Exception as e:
            elapsed = time.perf_counter() - start
            self.step_error(stage, f"{message} failed after {elapsed:.2f}s", error=e)
            raise
        else:
            elapsed = time.perf_counter() - start
            self.step_complete(stage, f"{message} in {elapsed:.2f}s", **kwargs)
