from collections import namedtuple

import pytest

from app.core.config import Settings
from app.helpers.motion_settings import quality_scorer, readiness_config, wave_window_config
from app.motion.core.data_types import ArmPose, JointSample
from app.motion.core.kinematics import arm_pose_from_landmarks, calculate_elbow_angle, planar_distance

Landmark = namedtuple('Landmark', ['x', 'y', 'visibility'])


def test_elbow_angle():
    elbow = JointSample(0.5, 0.5)
    assert calculate_elbow_angle(JointSample(0.5, 0.3), elbow, JointSample(0.7, 0.5)) == pytest.approx(90)
    assert calculate_elbow_angle(JointSample(0.3, 0.5), elbow, JointSample(0.7, 0.5)) == pytest.approx(180)
    # Collapsed forearm does not divide by zero
    assert calculate_elbow_angle(JointSample(0.3, 0.5), elbow, elbow) == pytest.approx(90)


def test_elbow_angle_is_mirror_invariant():
    shoulder, elbow, wrist = JointSample(0.55, 0.41), JointSample(0.63, 0.52), JointSample(0.8, 0.4)
    assert calculate_elbow_angle(shoulder, elbow, wrist) == pytest.approx(
        calculate_elbow_angle(shoulder.mirrored(), elbow.mirrored(), wrist.mirrored())
    )


def test_planar_distance():
    assert planar_distance(JointSample(0, 0), JointSample(0.3, 0.4)) == pytest.approx(0.5)


def test_arm_pose_from_landmarks():
    landmarks = [Landmark(0.0, 0.0, 0.1)] * 33
    landmarks[12] = Landmark(0.4, 0.4, 0.99)
    landmarks[14] = Landmark(0.35, 0.5, 0.9)
    landmarks[16] = Landmark(0.25, 0.45, 0.8)

    pose = arm_pose_from_landmarks(landmarks)
    assert pose.wrist == JointSample(0.25, 0.45, 0.8)
    assert pose.min_confidence() == 0.8
    assert pose.wrist_mirrored is False


def test_mirroring_flips_only_the_wrist():
    pose = ArmPose(JointSample(0.4, 0.4, 0.99), JointSample(0.35, 0.5, 0.9), JointSample(0.25, 0.45, 0.8))
    selfie = pose.mirrored()
    assert selfie.wrist.x == pytest.approx(0.75)
    assert selfie.shoulder == pose.shoulder
    assert selfie.elbow == pose.elbow
    assert selfie.raw_wrist().x == pytest.approx(0.25)
    assert selfie.mirrored().wrist.x == pytest.approx(0.25)
    assert selfie.mirrored().wrist_mirrored is False


def test_arm_pose_needs_full_landmark_list():
    assert arm_pose_from_landmarks(None) is None
    assert arm_pose_from_landmarks([]) is None
    assert arm_pose_from_landmarks([Landmark(0.5, 0.5, 1.0)] * 16) is None


def test_configs_follow_settings():
    conf = Settings(
        READY_TARGET_BOX=[0.1, 0.2, 0.3, 0.4], READY_HOLD_MS=1000,
        WAVE_QUIET_FRAMES=10, SCORE_SPEED_CEILING=0.5,
    )
    readiness = readiness_config(conf)
    assert (readiness.target.x1, readiness.target.y2) == (0.1, 0.4)
    assert readiness.hold_target_ms == 1000
    assert wave_window_config(conf).quiet_frames == 10
    assert quality_scorer(conf).speed_ceiling == 0.5
