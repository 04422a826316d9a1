#!/usr/bin/env python3
"""
WAVECHECK - Webcam Wave Capture

Flow:
1. READINESS: hold the right wrist still inside the target box
2. CAPTURE: press SPACE once ready, wave for up to 5 seconds
3. RESULT: the session is exported as JSON, summary and score are printed;
   every capture after the first is compared against the previous one

Usage:
    python -m app.motion.main_capture --source webcam
    python -m app.motion.main_capture --source clip.mp4 --headless --auto-start

Controls:
    SPACE: Start capture (when READY)
    R: Abandon capture / reset gate
    Q, ESC: Quit

Author: WAVECHECK Team
Version: 1.0.0
"""

import argparse
import logging
import sys
import time
from typing import List, Optional

try:
    import cv2
except ImportError:
    print("OpenCV required. Install: pip install 'wavecheck[vision]'")
    sys.exit(1)

import numpy as np

from app.core.config import settings
from app.helpers.motion_settings import quality_scorer, readiness_config, wave_window_config
from app.helpers.session_io import export_session
from app.motion.core import ArmPose, ReadinessGate, Session, Summary, WaveCapture
from app.motion.core.detector import DetectorConfig, VisionDetector
from app.motion.modules import compare, summarize
from app.motion.utils import LogCategory, SessionLogger, create_session_logger

logger = logging.getLogger(__name__)

COLORS = {
    'green': (0, 200, 0),
    'yellow': (0, 220, 255),
    'white': (255, 255, 255),
    'panel': (30, 30, 30),
}


def draw_target_box(frame: np.ndarray, gate: ReadinessGate) -> None:
    h, w = frame.shape[:2]
    box = gate.config.target
    state = gate.state
    color = COLORS['green'] if state.ready else COLORS['yellow'] if state.aligned else COLORS['white']
    cv2.rectangle(frame, (int(box.x1 * w), int(box.y1 * h)), (int(box.x2 * w), int(box.y2 * h)), color, 2)


def draw_arm(frame: np.ndarray, pose: Optional[ArmPose]) -> None:
    if pose is None:
        return
    h, w = frame.shape[:2]
    # Camera coordinates onto the flipped view
    points = [(int((1.0 - j.x) * w), int(j.y * h)) for j in (pose.shoulder, pose.elbow, pose.raw_wrist())]
    cv2.line(frame, points[0], points[1], COLORS['white'], 2)
    cv2.line(frame, points[1], points[2], COLORS['white'], 2)
    for point in points:
        cv2.circle(frame, point, 6, COLORS['green'], -1)


def draw_status(frame: np.ndarray, lines: List[str], progress: Optional[float] = None) -> None:
    h, w = frame.shape[:2]
    cv2.rectangle(frame, (0, 0), (w, 30 + 25 * len(lines)), COLORS['panel'], -1)
    for i, text in enumerate(lines):
        cv2.putText(frame, text, (10, 25 + 25 * i), cv2.FONT_HERSHEY_SIMPLEX, 0.6, COLORS['white'], 1)
    if progress is not None:
        bar_w = int((w - 20) * max(0.0, min(1.0, progress)))
        cv2.rectangle(frame, (10, h - 20), (w - 10, h - 10), COLORS['white'], 1)
        cv2.rectangle(frame, (10, h - 20), (10 + bar_w, h - 10), COLORS['green'], -1)


def print_report(session: Session, previous: Optional[Session]) -> Summary:
    scorer = quality_scorer()
    summary = summarize(session, min_confidence=settings.MIN_JOINT_CONFIDENCE)

    print("\n" + "=" * 50)
    print(f"Session: {session.id}  frames: {len(session.frames)}")
    print(f"Wave window: {session.wave_start_ms} -> {session.wave_end_ms} ms")
    if not summary.ok:
        print(f"Summary: {summary.reason}")
    else:
        breakdown = scorer.breakdown(summary)
        print(f"Range: {summary.range:.3f}  Speed: {summary.avg_speed:.3f}/s  Jitter: {summary.smoothness:.5f}")
        print(f"Score: {breakdown.total}/100 "
              f"(speed {breakdown.speed_score:.0f}, range {breakdown.range_score:.0f}, "
              f"jitter {breakdown.jitter_score:.0f})")

    if previous is not None:
        baseline = summarize(previous, min_confidence=settings.MIN_JOINT_CONFIDENCE)
        comparison = compare(baseline, summary, scorer=scorer)
        if comparison.ok:
            print(f"vs {previous.id}: speed x{comparison.speed_ratio:.2f}, "
                  f"range {comparison.range_delta:+.1f}%, jitter {comparison.smoothness_delta:+.1f}%")
            print(comparison.describe())
        else:
            print(f"Comparison unavailable: session {comparison.side} - {comparison.reason}")
    print("=" * 50 + "\n")
    return summary


class WaveCaptureApp:
    WINDOW_NAME = "WAVECHECK"

    def __init__(self, detector: VisionDetector, export_dir: str, log_dir: str, auto_start: bool = False):
        self._detector = detector
        self._export_dir = export_dir
        self._log_dir = log_dir
        self._auto_start = auto_start

        self._gate = ReadinessGate(readiness_config())
        self._session_logger: SessionLogger = create_session_logger("wavecheck", log_dir)
        self._capture = WaveCapture(
            duration_ms=settings.CAPTURE_DURATION_MS,
            config=wave_window_config(),
            session_logger=self._session_logger,
        )
        self._capture_started_at = 0.0
        self._sessions: List[Session] = []
        self._running = False

    def _start_capture(self) -> None:
        if self._capture.start(ready=self._gate.state.ready):
            self._capture_started_at = time.monotonic()
            self._session_logger.info(LogCategory.GATE, "ready, capture requested")
        else:
            logger.info("Not ready yet (hold %d ms)", self._gate.state.hold_ms)

    def _on_session(self, session: Session) -> None:
        path = export_session(session, self._export_dir)
        print(f"[INFO] Session saved: {path}")
        self._session_logger.info(LogCategory.WINDOW, "session exported", {
            "sessionId": session.id,
            "waveStartMs": session.wave_start_ms,
            "waveEndMs": session.wave_end_ms,
        })
        summary = print_report(session, self._sessions[-1] if self._sessions else None)
        if summary.ok:
            self._session_logger.info(LogCategory.SCORE, "session scored", {
                "sessionId": session.id, "score": quality_scorer().score(summary),
            })
        else:
            self._session_logger.warning(LogCategory.SCORE, summary.reason, {"sessionId": session.id})
        self._sessions.append(session)
        self._gate.reset()

    def _process(self, pose: Optional[ArmPose]) -> List[str]:
        if self._capture.is_recording:
            elapsed_ms = (time.monotonic() - self._capture_started_at) * 1000
            session = self._capture.feed(pose, elapsed_ms)
            if session is not None:
                self._on_session(session)
                return ["Capture finished"]
            phase = self._capture.detector_state.phase.value
            remaining = self._capture.remaining_ms(elapsed_ms) / 1000
            return [f"RECORDING {remaining:.1f}s", f"Wave: {phase}  frames: {self._capture.frame_count}"]

        state = self._gate.update(pose)
        if state.ready and self._auto_start:
            self._start_capture()
        if pose is None:
            return ["No person detected"]
        if state.ready:
            return ["READY - press SPACE to capture"]
        if state.aligned:
            return [f"Hold still... {state.hold_ms} ms"]
        return ["Put your right wrist in the box"]

    def _handle_key(self, key: int) -> None:
        if key == ord('q') or key == 27:
            self._running = False
        elif key == ord(' '):
            if not self._capture.is_recording:
                self._start_capture()
        elif key == ord('r'):
            self._capture.abandon()
            self._gate.reset()

    def run(self, source: str = "webcam", display: bool = True) -> List[Session]:
        cap = cv2.VideoCapture(0 if source.lower() == "webcam" else source)
        if not cap.isOpened():
            print(f"[ERROR] Cannot open: {source}")
            return []

        self._session_logger.info(LogCategory.SYSTEM, "source opened", {"source": source})
        stream_start = time.monotonic()
        self._running = True
        try:
            while self._running:
                ret, frame = cap.read()
                if not ret:
                    if source.lower() != "webcam":
                        break
                    continue

                timestamp_ms = int((time.monotonic() - stream_start) * 1000)
                pose = self._detector.detect_arm(frame, timestamp_ms)
                lines = self._process(pose)

                if display:
                    # Target box and wrist are in mirrored coordinates
                    view = cv2.flip(frame, 1)
                    if not self._capture.is_recording:
                        draw_target_box(view, self._gate)
                    draw_arm(view, pose)
                    progress = None if self._capture.is_recording else self._gate.progress
                    draw_status(view, lines, progress)
                    cv2.imshow(self.WINDOW_NAME, view)
                    self._handle_key(cv2.waitKey(1) & 0xFF)
        finally:
            if self._capture.is_recording:
                self._on_session(self._capture.finalize())
            cap.release()
            if display:
                cv2.destroyAllWindows()
            print(f"[INFO] Capture log: {self._session_logger.save_session_log()}")

        return self._sessions


def main():
    parser = argparse.ArgumentParser(description="WAVECHECK wave capture")
    parser.add_argument("--source", type=str, default="webcam")
    parser.add_argument("--headless", action="store_true")
    parser.add_argument("--auto-start", action="store_true",
                        help="Start capturing as soon as the gate is ready")
    parser.add_argument("--model", type=str, default=settings.POSE_MODEL_PATH)
    parser.add_argument("--export-dir", type=str, default=settings.CAPTURE_EXPORT_DIR)
    parser.add_argument("--log-dir", type=str, default=settings.CAPTURE_LOG_DIR)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    config = DetectorConfig(
        pose_model_path=args.model,
        min_pose_detection_confidence=settings.MIN_JOINT_CONFIDENCE,
        min_pose_tracking_confidence=settings.MIN_JOINT_CONFIDENCE,
    )
    try:
        with VisionDetector(config) as detector:
            app = WaveCaptureApp(
                detector=detector,
                export_dir=args.export_dir,
                log_dir=args.log_dir,
                # Without a window there is no SPACE key
                auto_start=args.auto_start or args.headless,
            )
            sessions = app.run(source=args.source, display=not args.headless)
            print(f"[INFO] {len(sessions)} session(s) captured")
    except FileNotFoundError as e:
        print(f"[ERROR] {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
