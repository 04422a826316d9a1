"""
Data Types Module for WAVECHECK.

Data classes shared by the readiness gate, the gesture window detector,
the capture loop and the analysis modules. Finalized sessions are frozen
so they can be handed to any number of readers.

Author: WAVECHECK Team
Version: 1.0.0
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple, Union
import numpy as np


WAVE_TASK = "right_arm_wave"


@dataclass(frozen=True)
class JointSample:
    """
    One tracked joint at one instant.

    Attributes:
        x: Horizontal coordinate, normalized 0-1.
        y: Vertical coordinate, normalized 0-1.
        confidence: Detection confidence 0-1 (MediaPipe visibility).
    """
    x: float
    y: float
    confidence: float = 0.0

    def to_2d(self) -> Tuple[float, float]:
        """Return (x, y)."""
        return (self.x, self.y)

    def mirrored(self) -> "JointSample":
        """Flip the horizontal coordinate (selfie view)."""
        return replace(self, x=1.0 - self.x)


@dataclass(frozen=True)
class ArmPose:
    """
    Right-arm joints reported by the pose source for one video frame.

    Only the wrist is ever mirrored, shoulder and elbow stay in camera
    coordinates. wrist_mirrored records which view the wrist is in.
    """
    shoulder: JointSample
    elbow: JointSample
    wrist: JointSample
    wrist_mirrored: bool = False

    def mirrored(self) -> "ArmPose":
        """Flip the wrist into (or back out of) the selfie view."""
        return replace(self, wrist=self.wrist.mirrored(), wrist_mirrored=not self.wrist_mirrored)

    def raw_wrist(self) -> JointSample:
        """Wrist in camera coordinates, same frame as shoulder and elbow."""
        return self.wrist.mirrored() if self.wrist_mirrored else self.wrist

    def min_confidence(self) -> float:
        return min(self.shoulder.confidence, self.elbow.confidence, self.wrist.confidence)


@dataclass(frozen=True)
class Frame:
    """
    A recorded frame of a capture.

    Attributes:
        timestamp_ms: Milliseconds since capture start.
        wrist: Wrist sample (primary signal).
        shoulder: Shoulder sample, may be absent in imported records.
        elbow: Elbow sample, may be absent in imported records.
        elbow_angle_deg: Angle at the elbow, only set while the
            gesture window is active.
    """
    timestamp_ms: float
    wrist: JointSample
    shoulder: Optional[JointSample] = None
    elbow: Optional[JointSample] = None
    elbow_angle_deg: Optional[float] = None


@dataclass(frozen=True)
class Session:
    """
    A finalized capture.

    Attributes:
        id: Opaque unique identifier.
        task: Gesture label, always WAVE_TASK for this system.
        created_at: ISO-8601 creation timestamp.
        duration_ms: Fixed capture duration.
        wave_start_ms: Gesture start relative to capture start, None if not detected.
        wave_end_ms: Gesture end relative to capture start, None if not detected.
        frames: Frames in insertion (temporal) order.
    """
    id: str
    created_at: str
    duration_ms: float = 5000
    task: str = WAVE_TASK
    wave_start_ms: Optional[float] = None
    wave_end_ms: Optional[float] = None
    frames: Tuple[Frame, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Accept any sequence but store an immutable tuple.
        if not isinstance(self.frames, tuple):
            object.__setattr__(self, "frames", tuple(self.frames))

    def __len__(self) -> int:
        return len(self.frames)

    @property
    def last_timestamp_ms(self) -> Optional[float]:
        return self.frames[-1].timestamp_ms if self.frames else None


@dataclass(frozen=True)
class AnalysisWindow:
    """
    Frames selected for analysis together with the window bounds used.
    """
    frames: Tuple[Frame, ...]
    start: float
    end: float

    def __len__(self) -> int:
        return len(self.frames)

    def wrist_positions(self) -> np.ndarray:
        """
        Wrist coordinates as a numpy array.

        Returns:
            np.ndarray: shape (N, 2).
        """
        if not self.frames:
            return np.zeros((0, 2), dtype=np.float64)
        return np.array([f.wrist.to_2d() for f in self.frames], dtype=np.float64)

    def timestamps(self) -> np.ndarray:
        return np.array([f.timestamp_ms for f in self.frames], dtype=np.float64)


@dataclass(frozen=True)
class InvalidSummary:
    """Summary that could not be computed; `reason` is user-facing."""
    reason: str

    @property
    def ok(self) -> bool:
        return False


@dataclass(frozen=True)
class ValidSummary:
    """
    Motion-quality metrics of one session.

    Attributes:
        range: Norm of the wrist bounding-box extents (normalized units).
        avg_speed: Path length per second (normalized units / s).
        smoothness: Mean jerk proxy, lower is smoother.
        tracked_frame_count: Frames used after filtering.
        wave_window_ms: Length of the analysis window.
    """
    range: float
    avg_speed: float
    smoothness: float
    tracked_frame_count: int
    wave_window_ms: float

    @property
    def ok(self) -> bool:
        return True


Summary = Union[ValidSummary, InvalidSummary]


class PoseLandmarkIndex:
    """
    MediaPipe Pose indices used by this system (33 landmarks total).
    """
    RIGHT_SHOULDER = 12
    RIGHT_ELBOW = 14
    RIGHT_WRIST = 16

    ARM_LANDMARKS = [RIGHT_SHOULDER, RIGHT_ELBOW, RIGHT_WRIST]

