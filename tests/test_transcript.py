"""
Test cases for the typing transcript.
"""
import unittest

from fingerspell.gestures import GestureClassifier
from fingerspell.transcript import FingerspellingTranscript
from fingerspell.types import GestureState
from tests import hand_poses


class TestFingerspellingTranscript(unittest.TestCase):
    """Test how state notifications become text."""

    def setUp(self):
        self.transcript = FingerspellingTranscript()
        self.transcript.handle_state(GestureState.UNKNOWN)

    def test_starts_disarmed(self):
        transcript = FingerspellingTranscript()
        self.assertFalse(transcript.armed)
        self.assertIsNone(transcript.handle_state(GestureState.A))
        self.assertIsNone(transcript.handle_state(GestureState.SPACEBAR))
        self.assertEqual(transcript.text, "")

        transcript.handle_state(GestureState.APART)
        self.assertTrue(transcript.armed)
        self.assertEqual(transcript.handle_state(GestureState.A), "A")

    def test_letter_typed_once(self):
        for _ in range(5):
            self.transcript.handle_state(GestureState.A)
        self.assertEqual(self.transcript.text, "A")

    def test_apart_rearms(self):
        for state in (GestureState.A, GestureState.A, GestureState.POSSIBLE_APART,
                      GestureState.APART, GestureState.A):
            self.transcript.handle_state(state)
        self.assertEqual(self.transcript.text, "AA")

    def test_unknown_rearms(self):
        self.transcript.handle_state(GestureState.B)
        self.transcript.handle_state(GestureState.UNKNOWN)
        self.transcript.handle_state(GestureState.Y)
        self.assertEqual(self.transcript.text, "BY")

    def test_possible_states_do_nothing(self):
        self.transcript.handle_state(GestureState.A)
        for state in (GestureState.POSSIBLE_LETTER, GestureState.POSSIBLE_PINCH,
                      GestureState.POSSIBLE_APART):
            self.assertIsNone(self.transcript.handle_state(state))
        # Still not re-armed
        self.assertIsNone(self.transcript.handle_state(GestureState.B))
        self.assertEqual(self.transcript.text, "A")

    def test_spacebar_and_clear(self):
        self.transcript.handle_state(GestureState.H)
        self.transcript.handle_state(GestureState.APART)
        self.assertEqual(self.transcript.handle_state(GestureState.SPACEBAR), " ")
        self.assertEqual(self.transcript.text, "H ")

        self.transcript.handle_state(GestureState.CLEAR)
        self.assertEqual(self.transcript.text, "")

    def test_target_letter(self):
        transcript = FingerspellingTranscript(target_letter="l")
        self.assertEqual(transcript.target_letter, "L")

        transcript.handle_state(GestureState.APART)
        transcript.handle_state(GestureState.K)
        self.assertFalse(transcript.matched)
        transcript.handle_state(GestureState.APART)
        transcript.handle_state(GestureState.L)
        self.assertTrue(transcript.matched)

    def test_clear_keeps_arming(self):
        self.transcript.handle_state(GestureState.A)
        self.transcript.handle_state(GestureState.CLEAR)
        self.assertIsNone(self.transcript.handle_state(GestureState.A))
        self.assertEqual(self.transcript.text, "")

        self.transcript.handle_state(GestureState.APART)
        self.transcript.clear()
        self.assertTrue(self.transcript.armed)
        self.assertEqual(self.transcript.handle_state(GestureState.A), "A")

    def test_as_classifier_sink(self):
        transcript = FingerspellingTranscript()
        classifier = GestureClassifier(evidence_counter_state_trigger=3,
                                       on_state_change=transcript)
        for make_pose in [hand_poses.letter_a] * 5 + [hand_poses.open_hand] * 3 + [hand_poses.letter_b] * 3:
            classifier.process_points_set(make_pose())

        # A was held before the first apart, so only B is typed
        self.assertEqual(transcript.text, "B")

    def test_reset_arms_classifier_sink(self):
        transcript = FingerspellingTranscript()
        classifier = GestureClassifier(evidence_counter_state_trigger=3,
                                       on_state_change=transcript)
        classifier.reset()
        for _ in range(3):
            classifier.process_points_set(hand_poses.letter_a())

        self.assertEqual(transcript.text, "A")


if __name__ == "__main__":
    unittest.main()
