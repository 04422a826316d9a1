"""
Modules Package for WAVECHECK.

Post-capture analysis: window extraction, summary, scoring, comparison
and plotting series.
"""

from .window import extract_window, MIN_WRIST_CONFIDENCE
from .summarizer import summarize, summarize_window, MIN_TRACKED_FRAMES, NOT_ENOUGH_FRAMES
from .scoring import QualityScorer, ScoreBreakdown, quality_score, clamp, round_half_up
from .comparator import (
    compare, ratio, pct_diff, ComparisonResult, ComparisonUnavailable, Comparison,
    SpeedVerdict, RangeVerdict, SmoothnessVerdict,
)
from .series import SeriesMetric, PairedSeries, window_series, paired_series

__all__ = [
    # Window
    'extract_window', 'MIN_WRIST_CONFIDENCE',

    # Summary
    'summarize', 'summarize_window', 'MIN_TRACKED_FRAMES', 'NOT_ENOUGH_FRAMES',

    # Scoring
    'QualityScorer', 'ScoreBreakdown', 'quality_score', 'clamp', 'round_half_up',

    # Comparison
    'compare', 'ratio', 'pct_diff', 'ComparisonResult', 'ComparisonUnavailable', 'Comparison',
    'SpeedVerdict', 'RangeVerdict', 'SmoothnessVerdict',

    # Series
    'SeriesMetric', 'PairedSeries', 'window_series', 'paired_series',
]
