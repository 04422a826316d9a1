"""
Capture Module for WAVECHECK.

Host loop for one fixed-duration recording. The capture owns the session
buffer exclusively until finalize(); what leaves it is an immutable
Session. Time is an explicit input (milliseconds since start) so the loop
can be driven by a camera clock or by a test.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from .data_types import ArmPose, Frame, Session, WAVE_TASK
from .gesture_window import DetectorState, WaveWindowConfig, process_frame
from ..utils.logger import LogCategory, SessionLogger

logger = logging.getLogger(__name__)


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class WaveCapture:
    """
    Records one capture and detects the wave window inside it.

    Example:
        >>> capture = WaveCapture(duration_ms=5000)
        >>> capture.start(ready=gate.state.ready)
        >>> for pose, elapsed in stream:
        ...     session = capture.feed(pose, elapsed)
        ...     if session is not None:
        ...         break
    """

    def __init__(
        self,
        duration_ms: int = 5000,
        task: str = WAVE_TASK,
        config: Optional[WaveWindowConfig] = None,
        session_logger: Optional[SessionLogger] = None,
    ):
        if duration_ms <= 0:
            raise ValueError(f"duration_ms must be positive, got {duration_ms}")
        self._duration_ms = int(duration_ms)
        self._task = task
        self._config = config or WaveWindowConfig()
        self._session_logger = session_logger

        self._recording = False
        self._session_id: Optional[str] = None
        self._created_at: Optional[str] = None
        self._frames: List[Frame] = []
        self._state = DetectorState()

    @property
    def is_recording(self) -> bool:
        return self._recording

    @property
    def duration_ms(self) -> int:
        return self._duration_ms

    @property
    def detector_state(self) -> DetectorState:
        return self._state

    @property
    def frame_count(self) -> int:
        return len(self._frames)

    def remaining_ms(self, elapsed_ms: float) -> float:
        return max(0.0, self._duration_ms - elapsed_ms)

    def _journal(self, message: str, data: Optional[dict] = None) -> None:
        if self._session_logger is not None:
            self._session_logger.info(LogCategory.CAPTURE, message, data)

    def start(
        self,
        ready: bool,
        session_id: Optional[str] = None,
        created_at: Optional[str] = None,
    ) -> bool:
        """
        Open a new capture.

        Args:
            ready: Readiness gate output; the capture refuses to start otherwise.
            session_id: Optional identifier, defaults to session_<ISO timestamp>.
            created_at: Optional ISO timestamp, defaults to now (UTC).

        Returns:
            True if recording started.
        """
        if not ready or self._recording:
            logger.debug("Capture start refused (ready=%s, recording=%s)", ready, self._recording)
            return False

        self._created_at = created_at or _utc_now_iso()
        self._session_id = session_id or f"session_{self._created_at}"
        self._frames = []
        self._state = DetectorState()
        self._recording = True

        logger.info("Capture %s started (%d ms)", self._session_id, self._duration_ms)
        self._journal("capture started", {"durationMs": self._duration_ms})
        return True

    def feed(self, pose: Optional[ArmPose], elapsed_ms: float) -> Optional[Session]:
        """
        Process one frame.

        Args:
            pose: Arm pose with mirrored wrist, None when no person is detected.
            elapsed_ms: Milliseconds since start().

        Returns:
            The finalized Session once the duration elapsed, otherwise None.
        """
        if not self._recording:
            return None

        if elapsed_ms >= self._duration_ms:
            return self.finalize()

        self._state, events = process_frame(self._state, pose, elapsed_ms, self._config)

        if events.started:
            self._journal("wave window opened", {"waveStartMs": self._state.start_ms})
        if events.frame is not None:
            self._frames.append(events.frame)
        if events.ended:
            self._journal("wave window closed", {"waveEndMs": self._state.end_ms})

        return None

    def finalize(self) -> Session:
        """
        Close the capture regardless of detector state.

        Returns:
            Immutable Session. An open window is persisted without waveEndMs.
        """
        if not self._recording:
            raise RuntimeError("No capture in progress")

        session = Session(
            id=self._session_id,
            task=self._task,
            created_at=self._created_at,
            duration_ms=self._duration_ms,
            wave_start_ms=self._state.start_ms,
            wave_end_ms=self._state.end_ms,
            frames=tuple(self._frames),
        )
        self._recording = False
        self._frames = []

        if session.wave_start_ms is None:
            logger.info("Capture %s finalized without a wave", session.id)
        else:
            logger.info(
                "Capture %s finalized: %d frames, window %s-%s ms",
                session.id, len(session.frames), session.wave_start_ms, session.wave_end_ms,
            )
        self._journal("capture finalized", {
            "frames": len(session.frames),
            "waveStartMs": session.wave_start_ms,
            "waveEndMs": session.wave_end_ms,
        })
        return session

    def abandon(self) -> None:
        """Drop the capture; nothing recorded becomes observable."""
        if not self._recording:
            return
        logger.info("Capture %s abandoned", self._session_id)
        self._journal("capture abandoned", {"frames": len(self._frames)})
        self._recording = False
        self._frames = []
        self._state = DetectorState()
