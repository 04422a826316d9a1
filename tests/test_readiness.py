from app.motion.core.data_types import JointSample
from app.motion.core.readiness import (
    ReadinessConfig, ReadinessGate, ReadinessState, TargetBox, is_aligned, step_readiness,
)

from conftest import make_pose

IN_BOX_X = 0.75
IN_BOX_Y = 0.5


def hold_frames(gate, count, x=IN_BOX_X, y=IN_BOX_Y, confidence=0.9):
    state = None
    for _ in range(count):
        state = gate.update(make_pose(x, y, confidence))
    return state


def test_target_box_bounds_are_inclusive():
    box = TargetBox()
    assert box.contains(JointSample(0.62, 0.3))
    assert box.contains(JointSample(0.9, 0.75))
    assert not box.contains(JointSample(0.61, 0.5))
    assert not box.contains(JointSample(0.75, 0.76))


def test_first_frame_is_never_aligned():
    state = step_readiness(ReadinessState(), make_pose(IN_BOX_X, IN_BOX_Y))
    assert not state.aligned
    assert state.hold_ms == 0
    assert state.previous_wrist is not None


def test_hold_accumulates_until_ready():
    gate = ReadinessGate()
    hold_frames(gate, 1)
    state = hold_frames(gate, 10)
    assert state.aligned
    assert state.hold_ms == 160
    assert not state.ready

    # 2000 / 16 = 125 aligned frames
    state = hold_frames(gate, 115)
    assert state.ready
    assert state.hold_ms == 2000
    assert gate.progress == 1.0


def test_hold_is_capped_at_target():
    gate = ReadinessGate()
    state = hold_frames(gate, 300)
    assert state.hold_ms == 2000
    assert state.ready


def test_low_confidence_is_not_aligned():
    config = ReadinessConfig()
    previous = JointSample(IN_BOX_X, IN_BOX_Y, 0.9)
    # Threshold must be exceeded, equality fails
    assert not is_aligned(make_pose(IN_BOX_X, IN_BOX_Y, 0.5), previous, config)
    assert is_aligned(make_pose(IN_BOX_X, IN_BOX_Y, 0.51), previous, config)


def test_movement_resets_hold():
    gate = ReadinessGate()
    hold_frames(gate, 50)
    state = gate.update(make_pose(IN_BOX_X + 0.05, IN_BOX_Y))
    assert not state.aligned
    assert state.hold_ms == 0
    assert not state.ready


def test_leaving_box_resets_hold():
    gate = ReadinessGate()
    hold_frames(gate, 200)
    state = hold_frames(gate, 2, x=0.3)
    assert state.hold_ms == 0
    assert not state.ready


def test_no_person_resets_but_keeps_previous_wrist():
    gate = ReadinessGate()
    hold_frames(gate, 20)
    state = gate.update(None)
    assert state == ReadinessState(previous_wrist=state.previous_wrist)
    assert state.previous_wrist == JointSample(IN_BOX_X, IN_BOX_Y, 0.9)

    # Still at the same spot, so alignment resumes immediately
    state = gate.update(make_pose(IN_BOX_X, IN_BOX_Y))
    assert state.aligned
    assert state.hold_ms == 16


def test_custom_config_and_reset():
    config = ReadinessConfig(hold_target_ms=32, frame_interval_ms=16)
    gate = ReadinessGate(config)
    state = hold_frames(gate, 3)
    assert state.ready
    assert state.to_dict() == {'aligned': True, 'holdMs': 32, 'ready': True}

    gate.reset()
    assert gate.state == ReadinessState()
    assert gate.progress == 0.0
