"""
Core Module for WAVECHECK.

Contains the data types, kinematics and the per-frame reducers.
The MediaPipe adapter (core.detector) is imported on demand because it
needs the optional vision dependencies.
"""

from .data_types import (
    WAVE_TASK, JointSample, ArmPose, Frame, Session, AnalysisWindow,
    InvalidSummary, ValidSummary, Summary, PoseLandmarkIndex,
)
from .kinematics import (
    mirror_x, planar_distance, calculate_elbow_angle, arm_pose_from_landmarks,
)
from .readiness import (
    TargetBox, ReadinessConfig, ReadinessState, ReadinessGate, step_readiness, is_aligned,
)
from .gesture_window import (
    WavePhase, WaveWindowConfig, DetectorState, FrameEvents, process_frame, build_frame,
)
from .capture import WaveCapture

__all__ = [
    # Data types
    'WAVE_TASK', 'JointSample', 'ArmPose', 'Frame', 'Session', 'AnalysisWindow',
    'InvalidSummary', 'ValidSummary', 'Summary', 'PoseLandmarkIndex',

    # Kinematics
    'mirror_x', 'planar_distance', 'calculate_elbow_angle', 'arm_pose_from_landmarks',

    # Readiness gate
    'TargetBox', 'ReadinessConfig', 'ReadinessState', 'ReadinessGate', 'step_readiness', 'is_aligned',

    # Gesture window
    'WavePhase', 'WaveWindowConfig', 'DetectorState', 'FrameEvents', 'process_frame', 'build_frame',

    # Capture
    'WaveCapture',
]
