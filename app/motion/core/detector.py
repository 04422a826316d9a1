"""
Vision Detector Module for WAVECHECK.

Uses the MediaPipe Tasks API to turn webcam frames into right-arm poses
for the readiness gate and the capture loop.
"""

from dataclasses import dataclass
from pathlib import Path
import logging
from typing import Optional

import numpy as np

try:
    import mediapipe as mp
    from mediapipe.tasks import python as mp_tasks
    from mediapipe.tasks.python import vision as mp_vision
except ImportError as e:
    raise ImportError(
        "MediaPipe not found. Install with: pip install 'wavecheck[vision]'"
    ) from e

from .data_types import ArmPose
from .kinematics import arm_pose_from_landmarks

logger = logging.getLogger(__name__)


@dataclass
class DetectorConfig:
    """
    VisionDetector configuration.

    Attributes:
        pose_model_path: Path to pose_landmarker*.task.
        min_pose_detection_confidence: Pose detection threshold.
        min_pose_tracking_confidence: Pose tracking threshold.
        num_poses: Max people to detect (single-subject system).
        mirror: Flip wrist x so it matches the selfie view.
    """
    pose_model_path: str = "models/pose_landmarker_lite.task"
    min_pose_detection_confidence: float = 0.5
    min_pose_tracking_confidence: float = 0.5
    num_poses: int = 1
    mirror: bool = True


class VisionDetector:
    """
    Wrapper around MediaPipe PoseLandmarker in VIDEO mode.

    Example:
        >>> with VisionDetector(DetectorConfig(pose_model_path="pose_landmarker_lite.task")) as det:
        ...     pose = det.detect_arm(frame, timestamp_ms=0)
    """

    def __init__(self, config: DetectorConfig):
        """
        Args:
            config: Detector configuration.

        Raises:
            FileNotFoundError: If the model file does not exist.
        """
        self._config = config
        self._last_timestamp_ms = -1

        model_path = Path(config.pose_model_path)
        if not model_path.exists():
            raise FileNotFoundError(f"Pose model not found: {config.pose_model_path}")

        options = mp_vision.PoseLandmarkerOptions(
            base_options=mp_tasks.BaseOptions(model_asset_path=str(model_path)),
            running_mode=mp_vision.RunningMode.VIDEO,
            num_poses=config.num_poses,
            min_pose_detection_confidence=config.min_pose_detection_confidence,
            min_pose_presence_confidence=config.min_pose_tracking_confidence,
            min_tracking_confidence=config.min_pose_tracking_confidence,
            output_segmentation_masks=False,
        )
        self._pose_landmarker = mp_vision.PoseLandmarker.create_from_options(options)

    def detect_landmarks(self, image: np.ndarray, timestamp_ms: int):
        """
        Run the landmarker on a BGR frame.

        Returns:
            Landmark list of the first person, None if nobody is detected.
        """
        if image is None or image.size == 0 or self._pose_landmarker is None:
            return None

        # VIDEO mode requires strictly increasing timestamps
        timestamp_ms = max(int(timestamp_ms), self._last_timestamp_ms + 1)
        self._last_timestamp_ms = timestamp_ms

        image_rgb = image[:, :, ::-1].copy()
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=image_rgb)
        result = self._pose_landmarker.detect_for_video(mp_image, timestamp_ms)

        if not result.pose_landmarks:
            return None
        return result.pose_landmarks[0]

    def detect_arm(self, image: np.ndarray, timestamp_ms: int) -> Optional[ArmPose]:
        """
        Detect the right arm on a BGR frame.

        Returns:
            ArmPose with the wrist mirrored when configured, None if nobody
            is detected.
        """
        pose = arm_pose_from_landmarks(self.detect_landmarks(image, timestamp_ms))
        if pose is None:
            return None
        return pose.mirrored() if self._config.mirror else pose

    def close(self) -> None:
        """Release MediaPipe resources."""
        if self._pose_landmarker is not None:
            self._pose_landmarker.close()
            self._pose_landmarker = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
