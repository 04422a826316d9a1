"""
Window Extraction Module for WAVECHECK.

Recovers the wave sub-window of a finalized session and drops frames the
pose source was not confident about.
"""

import logging

from ..core.data_types import AnalysisWindow, Session

logger = logging.getLogger(__name__)

MIN_WRIST_CONFIDENCE = 0.5


def extract_window(session: Session, min_confidence: float = MIN_WRIST_CONFIDENCE) -> AnalysisWindow:
    """
    Compute the analysis window of a session.

    Bounds:
        start = waveStartMs, else first frame, else 0
        end   = waveEndMs, else last frame, else durationMs
    A stored end before start is treated as missing (falls back to the
    last frame). The session is not modified.

    Args:
        session: Finalized session
        min_confidence: Wrist confidence that must be exceeded

    Returns:
        AnalysisWindow with frames sorted by timestamp
    """
    frames = session.frames
    last_t = frames[-1].timestamp_ms if frames else session.duration_ms

    if session.wave_start_ms is not None:
        start = session.wave_start_ms
    elif frames:
        start = frames[0].timestamp_ms
    else:
        start = 0

    end = session.wave_end_ms if session.wave_end_ms is not None else last_t

    if end < start:
        # TODO: reject sessions with inverted markers once older exports are migrated
        logger.warning(
            "Session %s has window end %s before start %s, using last frame %s",
            session.id, end, start, last_t,
        )
        end = last_t

    selected = [
        f for f in frames
        if start <= f.timestamp_ms <= end and f.wrist.confidence > min_confidence
    ]
    selected.sort(key=lambda f: f.timestamp_ms)

    return AnalysisWindow(frames=tuple(selected), start=start, end=end)
