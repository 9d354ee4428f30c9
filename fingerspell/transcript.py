"""
Typing consumer for classifier state notifications.
"""
from typing import Optional

from .types import GestureState


class FingerspellingTranscript:
    """
    Accumulates committed letters into text.

    Typing starts disarmed: nothing is typed until the first APART or UNKNOWN,
    so a letter already held when the session starts is not added. A committed
    letter is typed once; APART or UNKNOWN re-arm typing so the next letter
    (even the same one) can be added. SPACEBAR types a space once and CLEAR
    empties the text without changing whether typing is armed.
    """

    def __init__(self, target_letter: Optional[str] = None):
        self.target_letter = target_letter.upper() if target_letter else None
        self.text = ""
        self.matched = False
        self._armed = False

    def __call__(self, state: GestureState) -> None:
        self.handle_state(state)

    @property
    def armed(self) -> bool:
        """Whether the next committed letter will be typed."""
        return self._armed

    def handle_state(self, state: GestureState) -> Optional[str]:
        """
        Apply one state notification.

        Args:
            state: State assigned by the classifier

        Returns:
            The character appended to the text, or None
        """
        if state in (GestureState.APART, GestureState.UNKNOWN):
            self._armed = True
            return None

        if state is GestureState.CLEAR:
            self.clear()
            return None

        if state is GestureState.SPACEBAR:
            return self._type(" ")

        if state.is_letter:
            return self._type(state.value)

        return None

    def _type(self, char: str) -> Optional[str]:
        if not self._armed:
            return None
        self._armed = False
        self.text += char
        self.matched = self.target_letter is not None and char == self.target_letter
        return char

    def clear(self) -> None:
        """Empty the text; arming is left as it is."""
        self.text = ""
        self.matched = False
