"""
Base agent class that every pipeline stage inherits.

Design:
  - `process()` is called by the LangGraph node.
  - `_real_process()` is the single abstract method — override in each stage.
  - A stage that raises records an error audit entry and re-raises.
"""

from __future__ import annotations

import json
import logging
import time
from abc import ABC, abstractmethod
from typing import Any

from rfp_screening.models.enums import StageName
from rfp_screening.models.state import ScreeningState

logger = logging.getLogger(__name__)


class BaseAgent(ABC):
    """Abstract base for all pipeline stages."""

    name: StageName  # set in each subclass

    # ── Public entry point (called by LangGraph node) ────

    def process(self, state: dict[str, Any]) -> dict[str, Any]:
        """
        LangGraph calls this as the node function.
        Accepts and returns a dict so LangGraph can merge updates
        into the shared state automatically.
        """
        t0 = time.perf_counter()
        separator = "═" * 70
        logger.debug(separator)
        logger.info(f"▶ [{self.name.value}] STARTING")

        _log_state_summary("INPUT STATE", state)

        screening_state = ScreeningState(**state)
        screening_state.current_stage = self.name.value

        try:
            updated = self._real_process(screening_state)

            updated.add_audit(
                stage=self.name.value,
                action="completed",
                details="",
            )
            elapsed = time.perf_counter() - t0
            logger.info(f"✔ [{self.name.value}] COMPLETED in {elapsed:.3f}s")

            out_dict = updated.model_dump()
            _log_state_diff("STATE CHANGES", state, out_dict)
            logger.debug(separator)

        except Exception as exc:
            elapsed = time.perf_counter() - t0
            screening_state.error_message = f"[{self.name.value}] {exc}"
            screening_state.add_audit(
                stage=self.name.value,
                action="error",
                details=str(exc),
            )
            logger.exception(
                f"✘ [{self.name.value}] FAILED after {elapsed:.3f}s: {exc}"
            )
            raise

        return out_dict

    # ── Subclass hook ────────────────────────────────────

    @abstractmethod
    def _real_process(self, state: ScreeningState) -> ScreeningState:
        """Stage implementation. Must be overridden by each stage."""
        ...


# ── Debug helpers (module-level) ─────────────────────────

def _log_state_summary(label: str, state: dict[str, Any]) -> None:
    """Log key names, non-empty values, and approximate sizes."""
    if not logger.isEnabledFor(logging.DEBUG):
        return
    lines = [f"  ┌─ {label}"]
    for key in sorted(state.keys()):
        val = state[key]
        if val is None or val == "" or val == [] or val == {}:
            lines.append(f"  │  {key}: <empty>")
        elif isinstance(val, str):
            lines.append(f"  │  {key}: str({len(val)} chars)")
        elif isinstance(val, list):
            lines.append(f"  │  {key}: list({len(val)} items)")
        elif isinstance(val, dict):
            lines.append(f"  │  {key}: dict({len(val)} keys)")
        else:
            lines.append(f"  │  {key}: {type(val).__name__} = {_truncate(val)}")
    lines.append(f"  └─ ({len(state)} keys total)")
    logger.debug("\n".join(lines))


def _log_state_diff(label: str, before: dict[str, Any], after: dict[str, Any]) -> None:
    """Log which keys changed between input and output state."""
    if not logger.isEnabledFor(logging.DEBUG):
        return
    changes: list[str] = []
    for key in sorted(set(before.keys()) | set(after.keys())):
        old = before.get(key)
        new = after.get(key)
        if old != new:
            changes.append(f"  │  {key}: {_truncate(old)} → {_truncate(new)}")
    if changes:
        logger.debug(f"  ┌─ {label}\n" + "\n".join(changes) + f"\n  └─ ({len(changes)} fields changed)")
    else:
        logger.debug(f"  ── {label}: no changes")


def _truncate(val: Any, max_len: int = 120) -> str:
    """Produce a short repr for debug logging."""
    if val is None:
        return "<None>"
    if isinstance(val, str):
        if len(val) > max_len:
            return repr(val[:max_len]) + f"…({len(val)} chars)"
        return repr(val)
    if isinstance(val, list):
        return f"list({len(val)} items)"
    if isinstance(val, dict):
        s = json.dumps(val, default=str)
        if len(s) > max_len:
            return s[:max_len] + f"…({len(s)} chars)"
        return s
    s = str(val)
    if len(s) > max_len:
        return s[:max_len] + "…"
    return s
