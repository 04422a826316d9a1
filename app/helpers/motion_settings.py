"""
Builds the plain motion configs from application settings.
"""
from app.core.config import Settings, settings as default_settings
from app.motion.core.readiness import ReadinessConfig, TargetBox
from app.motion.core.gesture_window import WaveWindowConfig
from app.motion.modules.scoring import QualityScorer


def readiness_config(conf: Settings = default_settings) -> ReadinessConfig:
    x1, y1, x2, y2 = conf.READY_TARGET_BOX
    return ReadinessConfig(
        target=TargetBox(x1=x1, y1=y1, x2=x2, y2=y2),
        min_confidence=conf.MIN_JOINT_CONFIDENCE,
        stability_threshold=conf.READY_STABILITY_THRESHOLD,
        frame_interval_ms=conf.READY_FRAME_INTERVAL_MS,
        hold_target_ms=conf.READY_HOLD_MS,
    )


def wave_window_config(conf: Settings = default_settings) -> WaveWindowConfig:
    return WaveWindowConfig(
        start_threshold=conf.WAVE_START_THRESHOLD,
        end_threshold=conf.WAVE_END_THRESHOLD,
        quiet_frames=conf.WAVE_QUIET_FRAMES,
    )


def quality_scorer(conf: Settings = default_settings) -> QualityScorer:
    return QualityScorer(
        speed_ceiling=conf.SCORE_SPEED_CEILING,
        range_ceiling=conf.SCORE_RANGE_CEILING,
        jitter_ceiling=conf.SCORE_JITTER_CEILING,
        speed_weight=conf.SCORE_SPEED_WEIGHT,
        range_weight=conf.SCORE_RANGE_WEIGHT,
        jitter_weight=conf.SCORE_JITTER_WEIGHT,
    )
