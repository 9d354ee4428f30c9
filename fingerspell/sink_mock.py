"""
Mock state sink for testing classifier notifications.
"""
import logging
from typing import List

from .types import GestureState

logger = logging.getLogger(__name__)


class MockStateSink:
    """Mock sink that records and logs notifications instead of acting on them."""

    def __init__(self):
        """Initialize the mock sink."""
        self.states: List[GestureState] = []

    def __call__(self, state: GestureState) -> None:
        """Record a state notification."""
        self.states.append(state)
        logger.debug("[MockStateSink] State: %s (call #%d)", state.value, len(self.states))

    @property
    def call_count(self) -> int:
        return len(self.states)

    @property
    def last_state(self):
        return self.states[-1] if self.states else None

    def reset_counters(self) -> None:
        """Forget recorded notifications."""
        self.states = []
