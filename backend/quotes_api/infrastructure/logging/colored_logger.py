"""Colored stage logger — ANSI-colored console logging for quote pipelines.

Traces the random-quote flow (upstream refresh, prioritization) and the
recommendation flow (strategy runs, merge) in the terminal.

Color scheme:
    🟡 Yellow  — Upstream fetch
    🟣 Magenta — Prioritization
    ⚪ White   — Recommendation runs
    🟠 Cyan    — Merge
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
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"
    GRAY = "\033[90m"


# ── Stage Definitions ────────────────────────────────────────────────

class PipelineStage:
    """Predefined stages with colors and icons."""

    UPSTREAM = ("UPSTREAM", _Colors.YELLOW, "🌐")
    PRIORITIZE = ("PRIORITIZE", _Colors.MAGENTA, "⭐")
    MERGE = ("MERGE", _Colors.CYAN, "🔀")
    RECOMMEND = ("RECOMMEND", _Colors.WHITE, "💡")


def _format_kwargs(kwargs: dict[str, Any], color: str) -> str:
    if not kwargs:
        return ""
    details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
    return f" {color}({details}){_Colors.RESET}"


class PipelineLogger:
    """Color-coded logger for multi-step quote operations.

    Usage:
        log = PipelineLogger("RecommendationService")
        log.step_start(PipelineStage.RECOMMEND, "Hybrid recommendations", candidates=42)
        log.detail("3 favorite authors")
        log.step_complete(PipelineStage.RECOMMEND, "Scored 42 candidates")
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)
        self._component = component_name

    def step_start(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        formatted = (
            f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{color}{message}{_Colors.RESET}"
        )
        self._logger.debug(formatted + _format_kwargs(kwargs, _Colors.GRAY))

    def step_complete(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        formatted = (
            f"{color}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.GREEN}✓ {message}{_Colors.RESET}"
        )
        self._logger.info(formatted + _format_kwargs(kwargs, _Colors.GRAY))

    def step_error(self, stage: tuple[str, str, str], message: str, error: Exception | None = None) -> None:
        """Log a failed step in red. Uses WARNING since callers may recover."""
        label, _, icon = stage
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}❌ [{label}]{_Colors.RESET} "
            f"{_Colors.RED}{message}{_Colors.RESET}"
        )
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.warning(formatted)

    def detail(self, message: str, **kwargs: Any) -> None:
        formatted = f"   {_Colors.GRAY}├─ {message}{_Colors.RESET}"
        self._logger.debug(formatted + _format_kwargs(kwargs, _Colors.DIM))

    @contextmanager
    def timed_step(self, stage: tuple[str, str, str], message: str, **kwargs: Any):
        """Context manager that logs start/end with elapsed milliseconds.

        Usage:
            with log.timed_step(PipelineStage.MERGE, "Merging strategy results"):
                merged = merge(a, b)
        """
        self.step_start(stage, message, **kwargs)
        start = time.perf_counter()
        try:
            yield
        except Exception as e:
            elapsed_ms = (time.perf_counter() - start) * 1000
            self.step_error(stage, f"{message} — failed after {elapsed_ms:.1f}ms", error=e)
            raise
        else:
            elapsed_ms = (time.perf_counter() - start) * 1000
            self.step_complete(stage, f"{message} — {elapsed_ms:.1f}ms", **kwargs)
