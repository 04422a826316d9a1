"""
Motion Summarizer Module for WAVECHECK.

Reduces the wave window to three motion-quality metrics:

1. Range: norm of the wrist bounding-box extents
       range = sqrt((max x - min x)^2 + (max y - min y)^2)
2. Average speed: wrist path length per second of window
3. Smoothness: mean jerk proxy

Jerk proxy:
    For each step i (1..n-1) with dt_i = max(1, t_i - t_{i-1}) ms:
        v_i = (dx_i / dt_i, dy_i / dt_i),   v_0 = 0
        j_i = |v_i - v_{i-1}|
    smoothness = mean(j_i)

    - low value = steady velocity, smooth wave
    - high value = abrupt velocity changes, shaky wave
"""

from typing import Optional

import numpy as np

from ..core.data_types import AnalysisWindow, InvalidSummary, Session, Summary, ValidSummary
from .window import extract_window

MIN_TRACKED_FRAMES = 5
NOT_ENOUGH_FRAMES = "not enough tracked frames in wave segment"


def _jerk_proxy(positions: np.ndarray, timestamps: np.ndarray) -> np.ndarray:
    """Per-step velocity change magnitudes, shape (n-1,)."""
    deltas = np.diff(positions, axis=0)
    dt = np.maximum(1.0, np.diff(timestamps))
    velocity = deltas / dt[:, None]
    previous = np.vstack([np.zeros((1, 2)), velocity[:-1]])
    return np.linalg.norm(velocity - previous, axis=1)


def summarize_window(window: AnalysisWindow, min_frames: int = MIN_TRACKED_FRAMES) -> Summary:
    """
    Summarize an extracted window.

    Args:
        window: Output of extract_window()
        min_frames: Frames required for a valid summary

    Returns:
        ValidSummary, or InvalidSummary if too few frames survived filtering
    """
    n = len(window)
    if n < min_frames:
        return InvalidSummary(reason=NOT_ENOUGH_FRAMES)

    positions = window.wrist_positions()
    timestamps = window.timestamps()

    extents = positions.max(axis=0) - positions.min(axis=0)
    motion_range = float(np.linalg.norm(extents))

    step_lengths = np.linalg.norm(np.diff(positions, axis=0), axis=1)
    duration_sec = (timestamps[-1] - timestamps[0]) / 1000.0
    avg_speed = float(step_lengths.sum() / duration_sec) if duration_sec > 0 else 0.0

    jerks = _jerk_proxy(positions, timestamps)
    smoothness = float(jerks.mean()) if jerks.size > 0 else 0.0

    return ValidSummary(
        range=motion_range,
        avg_speed=avg_speed,
        smoothness=smoothness,
        tracked_frame_count=n,
        wave_window_ms=float(max(0, window.end - window.start)),
    )


def summarize(session: Session, min_confidence: Optional[float] = None) -> Summary:
    """
    Extract the wave window of a session and summarize it.

    Args:
        session: Finalized session
        min_confidence: Optional override of the wrist confidence filter

    Returns:
        Summary
    """
    if min_confidence is None:
        window = extract_window(session)
    else:
        window = extract_window(session, min_confidence=min_confidence)
    return summarize_window(window)
