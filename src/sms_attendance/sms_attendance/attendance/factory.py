from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import NormalizedAction
from .strategies.base import TransitionStrategy
from .strategies.break_strategy import BreakInStrategy, BreakOutStrategy, IgnoreStrategy
from .strategies.clock_strategy import ClockInStrategy, ClockOutStrategy


@dataclass
class TransitionStrategyFactory:
    """Factory Pattern: choose the transition rule for a normalized action."""

    def for_action(self, action: NormalizedAction) -> TransitionStrategy:
        if action == NormalizedAction.IN:
            return ClockInStrategy()
        if action == NormalizedAction.OUT:
            return ClockOutStrategy()
        if action == NormalizedAction.BREAK_IN:
            return BreakInStrategy()
        if action == NormalizedAction.BREAK_OUT:
            return BreakOutStrategy()
        return IgnoreStrategy()
