"""
Test cases for configuration loading.
"""
import os
import tempfile
import unittest

import yaml

from fingerspell.config import DEFAULT_CONFIG_PATH, THRESHOLDS, load_config


class TestLoadConfig(unittest.TestCase):
    """Test YAML configuration loading."""

    def _write_config(self, **overrides):
        with open(DEFAULT_CONFIG_PATH) as f:
            data = yaml.safe_load(f)
        for section, values in overrides.items():
            data[section].update(values)

        fd, path = tempfile.mkstemp(suffix=".yaml")
        with os.fdopen(fd, "w") as f:
            yaml.safe_dump(data, f)
        self.addCleanup(os.remove, path)
        return path

    def test_default_config(self):
        cfg = load_config()

        self.assertEqual(cfg.classifier.pinch_max_distance, 50.0)
        self.assertEqual(cfg.classifier.evidence_counter_state_trigger, 10)
        self.assertTrue(cfg.classifier.notify_on_every_assignment)
        self.assertEqual(cfg.session.hand_lost_reset_ms, 2000)
        self.assertEqual(cfg.mediapipe.max_num_hands, 1)
        self.assertIsNone(cfg.transcript.target_letter)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_config("/nonexistent/fingerspell.yaml")

    def test_custom_values(self):
        path = self._write_config(classifier={"evidence_counter_state_trigger": 5},
                                  transcript={"target_letter": "b"})
        cfg = load_config(path)

        self.assertEqual(cfg.classifier.evidence_counter_state_trigger, 5)
        self.assertEqual(cfg.transcript.target_letter, "B")

    def test_invalid_trigger(self):
        path = self._write_config(classifier={"evidence_counter_state_trigger": 0})
        with self.assertRaises(ValueError):
            load_config(path)

    def test_negative_timeout(self):
        path = self._write_config(session={"hand_lost_reset_ms": -5})
        with self.assertRaises(ValueError):
            load_config(path)

    def test_thresholds(self):
        self.assertEqual(THRESHOLDS.fingers_together_ratio, 1.2)
        self.assertEqual(THRESHOLDS.tip_min_confidence, 0.5)
        self.assertEqual(THRESHOLDS.joint_min_confidence, 0.3)


if __name__ == "__main__":
    unittest.main()
