"""
Readiness Gate Module for WAVECHECK.

Decides, frame by frame, whether the subject holds the right wrist inside
the target box long enough for a capture to start.

Rules per frame:
    - aligned = all three joints above the confidence threshold
                AND wrist inside the target box
                AND wrist moved less than the stability threshold
    - hold_ms grows by one nominal frame interval while aligned,
      saturates at the hold target and drops to 0 on any break
    - ready = hold_ms reached the hold target

The gate only reads the wrist, in mirrored coordinates (selfie view).
"""

from dataclasses import dataclass, replace
from typing import Optional

from .data_types import ArmPose, JointSample
from .kinematics import planar_distance


@dataclass(frozen=True)
class TargetBox:
    """Normalized target rectangle (inclusive bounds)."""
    x1: float = 0.62
    y1: float = 0.3
    x2: float = 0.9
    y2: float = 0.75

    def contains(self, sample: JointSample) -> bool:
        return self.x1 <= sample.x <= self.x2 and self.y1 <= sample.y <= self.y2


@dataclass(frozen=True)
class ReadinessConfig:
    """
    Readiness gate configuration.

    Attributes:
        target: Box the wrist must stay in.
        min_confidence: Per-joint confidence that must be exceeded.
        stability_threshold: Max wrist movement between frames.
        frame_interval_ms: Hold increment per aligned frame.
        hold_target_ms: Hold needed before ready.
    """
    target: TargetBox = TargetBox()
    min_confidence: float = 0.5
    stability_threshold: float = 0.015
    frame_interval_ms: int = 16
    hold_target_ms: int = 2000


@dataclass(frozen=True)
class ReadinessState:
    """Output of the gate for the latest frame."""
    previous_wrist: Optional[JointSample] = None
    aligned: bool = False
    hold_ms: int = 0
    ready: bool = False

    def to_dict(self) -> dict:
        return {"aligned": self.aligned, "holdMs": self.hold_ms, "ready": self.ready}


def is_aligned(
    pose: ArmPose,
    previous_wrist: Optional[JointSample],
    config: ReadinessConfig,
) -> bool:
    """Check the three alignment conditions for one frame."""
    if pose.min_confidence() <= config.min_confidence:
        return False
    if not config.target.contains(pose.wrist):
        return False
    if previous_wrist is None:
        return False
    return planar_distance(pose.wrist, previous_wrist) < config.stability_threshold


def step_readiness(
    state: ReadinessState,
    pose: Optional[ArmPose],
    config: ReadinessConfig = ReadinessConfig(),
) -> ReadinessState:
    """
    Advance the gate by one frame.

    Args:
        state: Gate state after the previous frame.
        pose: Arm pose with mirrored wrist, None when no person is detected.
        config: Gate configuration.

    Returns:
        ReadinessState: New state.
    """
    if pose is None:
        return replace(state, aligned=False, hold_ms=0, ready=False)

    aligned = is_aligned(pose, state.previous_wrist, config)
    if aligned:
        hold_ms = min(config.hold_target_ms, state.hold_ms + config.frame_interval_ms)
    else:
        hold_ms = 0

    return ReadinessState(
        previous_wrist=pose.wrist,
        aligned=aligned,
        hold_ms=hold_ms,
        ready=hold_ms >= config.hold_target_ms,
    )


class ReadinessGate:
    """
    Stateful wrapper around step_readiness for the host loop.

    Example:
        >>> gate = ReadinessGate()
        >>> state = gate.update(pose)
        >>> if state.ready:
        ...     capture.start(ready=True)
    """

    def __init__(self, config: Optional[ReadinessConfig] = None):
        self._config = config or ReadinessConfig()
        self._state = ReadinessState()

    @property
    def config(self) -> ReadinessConfig:
        return self._config

    @property
    def state(self) -> ReadinessState:
        return self._state

    @property
    def progress(self) -> float:
        """Hold progress in [0, 1] for UI feedback."""
        return min(1.0, self._state.hold_ms / float(self._config.hold_target_ms))

    def update(self, pose: Optional[ArmPose]) -> ReadinessState:
        self._state = step_readiness(self._state, pose, self._config)
        return self._state

    def reset(self) -> None:
        self._state = ReadinessState()
