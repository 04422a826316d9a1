"""
Kinematics Module for WAVECHECK.

Contains functions for the elbow angle, planar distances and for turning
raw pose landmarks into an ArmPose.
"""

import math
from typing import Optional, Sequence

import numpy as np

from .data_types import ArmPose, JointSample, PoseLandmarkIndex


def mirror_x(x: float) -> float:
    """Flip a normalized horizontal coordinate."""
    return 1.0 - x


def planar_distance(a: JointSample, b: JointSample) -> float:
    """Euclidean distance between two samples in x/y."""
    return math.hypot(a.x - b.x, a.y - b.y)


def calculate_elbow_angle(shoulder: JointSample, elbow: JointSample, wrist: JointSample) -> float:
    """
    Calculate angle at the elbow formed by shoulder-elbow-wrist.

    Args:
        shoulder: Shoulder sample
        elbow: Elbow sample (angle vertex)
        wrist: Wrist sample

    Returns:
        Angle in degrees, 0-180
    """
    upper_arm = np.array([shoulder.x - elbow.x, shoulder.y - elbow.y])
    forearm = np.array([wrist.x - elbow.x, wrist.y - elbow.y])

    magnitude = np.linalg.norm(upper_arm) * np.linalg.norm(forearm)
    cos_angle = np.dot(upper_arm, forearm) / max(1e-6, magnitude)
    cos_angle = np.clip(cos_angle, -1, 1)  # Handle floating point errors

    return float(np.degrees(np.arccos(cos_angle)))


def _joint_from_landmark(landmark) -> JointSample:
    visibility = getattr(landmark, "visibility", None)
    return JointSample(
        x=float(landmark.x),
        y=float(landmark.y),
        confidence=float(visibility) if visibility is not None else 0.0,
    )


def arm_pose_from_landmarks(landmarks: Optional[Sequence]) -> Optional[ArmPose]:
    """
    Build an ArmPose from a full-body landmark list.

    Args:
        landmarks: MediaPipe pose landmarks (objects with x, y, visibility)

    Returns:
        ArmPose in raw (unmirrored) coordinates, None if no person
    """
    if not landmarks or len(landmarks) <= max(PoseLandmarkIndex.ARM_LANDMARKS):
        return None

    return ArmPose(
        shoulder=_joint_from_landmark(landmarks[PoseLandmarkIndex.RIGHT_SHOULDER]),
        elbow=_joint_from_landmark(landmarks[PoseLandmarkIndex.RIGHT_ELBOW]),
        wrist=_joint_from_landmark(landmarks[PoseLandmarkIndex.RIGHT_WRIST]),
    )
