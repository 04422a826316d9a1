"""
Gesture Window Module for WAVECHECK.

Hysteresis state machine that finds the start and end of the wave inside
a fixed-duration capture. The motion signal is the absolute horizontal
wrist displacement between consecutive frames.

FSM for one capture:

    IDLE ──(moved > start)──► ACTIVE ──(quiet_frames quiet frames)──► ENDED

    - IDLE: nothing is recorded
    - ACTIVE: every frame is recorded with its elbow angle; a frame with
      moved < end threshold is "quiet", any other frame resets the count
    - ENDED: terminal, the detector never re-arms within a capture

process_frame() is a pure reducer: (state, pose, elapsed) -> (state', events).
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

from .data_types import ArmPose, Frame
from .kinematics import calculate_elbow_angle


class WavePhase(Enum):
    """Detector phases within one capture."""
    IDLE = "idle"
    ACTIVE = "active"
    ENDED = "ended"


@dataclass(frozen=True)
class WaveWindowConfig:
    """
    Thresholds of the gesture window detector.

    Attributes:
        start_threshold: Displacement that opens the window.
        end_threshold: Displacement below which a frame is quiet.
        quiet_frames: Consecutive quiet frames that close the window.
    """
    start_threshold: float = 0.008
    end_threshold: float = 0.003
    quiet_frames: int = 18


@dataclass(frozen=True)
class DetectorState:
    """Explicit detector state threaded through process_frame()."""
    phase: WavePhase = WavePhase.IDLE
    previous_wrist_x: Optional[float] = None
    quiet_count: int = 0
    start_ms: Optional[int] = None
    end_ms: Optional[int] = None

    @property
    def active(self) -> bool:
        return self.phase == WavePhase.ACTIVE


@dataclass(frozen=True)
class FrameEvents:
    """
    Side effects of one frame for the host loop.

    Attributes:
        moved: Horizontal displacement used for this frame.
        started: The window opened on this frame.
        ended: The window closed on this frame.
        frame: Frame to append to the session, None outside the window.
    """
    moved: float = 0.0
    started: bool = False
    ended: bool = False
    frame: Optional[Frame] = None


def _round_ms(elapsed_ms: float) -> int:
    # Half-up, matches the timestamps written by the browser recorder.
    return int(elapsed_ms + 0.5) if elapsed_ms >= 0 else -int(-elapsed_ms + 0.5)


def build_frame(pose: ArmPose, elapsed_ms: float) -> Frame:
    """
    Snapshot the arm with its elbow angle (2 decimals).

    The angle is measured in camera coordinates, the stored wrist keeps
    whatever view the pose carries.
    """
    angle = calculate_elbow_angle(pose.shoulder, pose.elbow, pose.raw_wrist())
    return Frame(
        timestamp_ms=_round_ms(elapsed_ms),
        wrist=pose.wrist,
        shoulder=pose.shoulder,
        elbow=pose.elbow,
        elbow_angle_deg=round(angle, 2),
    )


def process_frame(
    state: DetectorState,
    pose: Optional[ArmPose],
    elapsed_ms: float,
    config: WaveWindowConfig = WaveWindowConfig(),
) -> Tuple[DetectorState, FrameEvents]:
    """
    Advance the detector by one frame.

    Args:
        state: State after the previous frame.
        pose: Arm pose with mirrored wrist, None when no person is detected.
        elapsed_ms: Milliseconds since capture start.
        config: Detector thresholds.

    Returns:
        Tuple of (new state, events for this frame).
    """
    if pose is None:
        return state, FrameEvents()

    wrist_x = pose.wrist.x
    previous_x = state.previous_wrist_x
    moved = abs(wrist_x - previous_x) if previous_x is not None else 0.0
    state = replace(state, previous_wrist_x=wrist_x)

    started = False
    if state.phase == WavePhase.IDLE and moved > config.start_threshold:
        state = replace(
            state,
            phase=WavePhase.ACTIVE,
            start_ms=_round_ms(elapsed_ms),
            quiet_count=0,
        )
        started = True

    if state.phase != WavePhase.ACTIVE:
        return state, FrameEvents(moved=moved)

    frame = build_frame(pose, elapsed_ms)

    quiet_count = state.quiet_count + 1 if moved < config.end_threshold else 0
    state = replace(state, quiet_count=quiet_count)

    ended = False
    if quiet_count >= config.quiet_frames:
        state = replace(state, phase=WavePhase.ENDED, end_ms=_round_ms(elapsed_ms))
        ended = True

    return state, FrameEvents(moved=moved, started=started, ended=ended, frame=frame)
