"""
Main application for fingerspelling recognition from a webcam.
"""
import argparse
import logging
import time
from typing import List, Optional

import cv2

from .config import load_config
from .gestures import GestureClassifier
from .session import HandSession
from .sink_mock import MockStateSink
from .tracker import HandsTracker, draw_fingertips, draw_landmarks, state_color
from .transcript import FingerspellingTranscript
from .types import GestureState

logger = logging.getLogger(__name__)


class FingerspellApp:
    """Main application class for fingerspelling recognition."""

    def __init__(self, config_path: Optional[str] = None, target_letter: Optional[str] = None):
        """Initialize the application with configuration."""
        self.config = load_config(config_path)

        # Open the camera before starting MediaPipe
        self.cap = cv2.VideoCapture(self.config.camera.index)
        if not self.cap.isOpened():
            self.cap.release()
            raise RuntimeError(f"Failed to open camera {self.config.camera.index}")
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.config.camera.width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.config.camera.height)
        self.cap.set(cv2.CAP_PROP_FPS, self.config.camera.fps)

        try:
            self.tracker = HandsTracker(
                max_num_hands=self.config.mediapipe.max_num_hands,
                min_detection_conf=self.config.mediapipe.min_detection_confidence,
                min_tracking_conf=self.config.mediapipe.min_tracking_confidence
            )
        except Exception:
            self.cap.release()
            raise

        self.transcript = FingerspellingTranscript(
            target_letter=target_letter or self.config.transcript.target_letter
        )
        self.recorder = MockStateSink()
        self.classifier = GestureClassifier.from_config(self.config.classifier, self._on_state)
        self.session = HandSession.from_config(self.classifier, self.config.session)

    def _on_state(self, state: GestureState) -> None:
        self.recorder(state)
        typed = self.transcript.handle_state(state)
        if typed is not None:
            print(f"✍️  Typed {typed!r} -> {self.transcript.text!r}")
            if self.transcript.matched:
                print(f"✅ Matched target letter {self.transcript.target_letter}")

    def run(self) -> None:
        """Run the main application loop."""
        print(f"Starting {self.config.display.window_name}")
        if self.transcript.target_letter:
            print(f"🎯 Practise the letter {self.transcript.target_letter}")
        print("✋ Open your hand once to start typing")
        print("Press 'c' to clear the text, 'q' to quit")

        try:
            while True:
                ret, frame = self.cap.read()
                if not ret:
                    logger.error("Failed to read frame from camera")
                    break

                if self.config.camera.mirror:
                    frame = cv2.flip(frame, 1)

                points = self.tracker.process(frame)
                state = self.session.update(points, time.time())

                if points is not None:
                    if self.config.display.show_landmarks:
                        frame = draw_landmarks(frame, points)
                    if self.config.display.show_fingertips:
                        frame = draw_fingertips(frame, points, state)
                    status_text = f"State: {state.value}"
                else:
                    status_text = "No hand detected"

                # Draw status on frame
                cv2.putText(frame, status_text, (10, 30), cv2.FONT_HERSHEY_SIMPLEX, 0.7, state_color(state), 2)
                cv2.putText(frame, f"Text: {self.transcript.text}", (10, 60),
                            cv2.FONT_HERSHEY_SIMPLEX, 0.7, (255, 255, 255), 2)
                if self.transcript.target_letter:
                    target_text = f"Target: {self.transcript.target_letter}"
                    if self.transcript.matched:
                        target_text += " - matched"
                    cv2.putText(frame, target_text, (10, 90), cv2.FONT_HERSHEY_SIMPLEX, 0.6,
                                (0, 255, 0) if self.transcript.matched else (255, 255, 255), 2)

                cv2.putText(frame, "Press 'c' to clear, 'q' to quit", (10, frame.shape[0] - 20),
                            cv2.FONT_HERSHEY_SIMPLEX, 0.5, (255, 255, 255), 1)

                cv2.imshow(self.config.display.window_name, frame)

                key = cv2.waitKey(1) & 0xFF
                if key == ord('q'):
                    break
                if key == ord('c'):
                    self.transcript.clear()
        finally:
            logger.info("Stopping after %d state notifications", self.recorder.call_count)
            self.close()

    def close(self) -> None:
        """Cleanup resources."""
        if self.cap.isOpened():
            self.cap.release()
        self.tracker.close()
        cv2.destroyAllWindows()


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fingerspelling recognition from a webcam")
    parser.add_argument("--config", default=None, help="Path to a YAML config file (default: packaged config)")
    parser.add_argument("--target", default=None, help="Letter to practise, e.g. 'A'")
    parser.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        default="INFO",
        help="Logging verbosity.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the application."""
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        app = FingerspellApp(config_path=args.config, target_letter=args.target)
        app.run()
    except KeyboardInterrupt:
        print("\nApplication interrupted by user")
    except (RuntimeError, FileNotFoundError, ValueError) as e:
        logger.error("%s", e)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
