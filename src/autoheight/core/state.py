"""Runtime state containers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ReversionPhase(Enum):
    IDLE = "idle"
    TIMER_ARMED = "timer-armed"
    KEY_ARMED = "key-armed"


@dataclass(slots=True)
class ManagerState:
    active: bool = False
    in_excluded_mode: bool = False
    processed_this_tick: bool = False
    deactivate_pending: bool = False
    baseline_height: int | None = None
    overridden_settings: dict[str, bool] | None = None
