"""
Scoring Module for WAVECHECK.

Maps a motion summary to a 0-100 quality score:

    speed_score  = clamp(avg_speed / speed_ceiling * 100, 0, 100)
    range_score  = clamp(range / range_ceiling * 100, 0, 100)
    jitter_score = clamp(100 - smoothness / jitter_ceiling * 100, 0, 100)

    score = round(w_speed * speed_score + w_range * range_score
                  + w_jitter * jitter_score)

Ceilings and weights are calibration constants, not derived values.
"""

from dataclasses import dataclass
from typing import Dict, Optional
import math

from ..core.data_types import Summary, ValidSummary


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """Round .5 upward (Python's round() is banker's rounding)."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class ScoreBreakdown:
    """Component scores, each 0-100."""
    speed_score: float
    range_score: float
    jitter_score: float
    total: int

    def to_dict(self) -> Dict[str, float]:
        return {
            'speedScore': self.speed_score,
            'rangeScore': self.range_score,
            'jitterScore': self.jitter_score,
            'score': self.total,
        }


@dataclass(frozen=True)
class QualityScorer:
    """
    Quality scorer for wave summaries.
    """

    # Reference ceilings
    speed_ceiling: float = 0.35
    range_ceiling: float = 0.55
    jitter_ceiling: float = 0.002

    # Scoring weights
    speed_weight: float = 0.4
    range_weight: float = 0.35
    jitter_weight: float = 0.25

    def breakdown(self, summary: ValidSummary) -> ScoreBreakdown:
        """
        Calculate component scores and the weighted total.

        Args:
            summary: Valid summary

        Returns:
            ScoreBreakdown
        """
        speed_score = clamp(summary.avg_speed / self.speed_ceiling * 100, 0, 100)
        range_score = clamp(summary.range / self.range_ceiling * 100, 0, 100)
        jitter_score = clamp(100 - summary.smoothness / self.jitter_ceiling * 100, 0, 100)

        total = round_half_up(
            speed_score * self.speed_weight +
            range_score * self.range_weight +
            jitter_score * self.jitter_weight
        )
        return ScoreBreakdown(
            speed_score=speed_score,
            range_score=range_score,
            jitter_score=jitter_score,
            total=int(clamp(total, 0, 100)),
        )

    def score(self, summary: Summary) -> Optional[int]:
        """
        Score a summary.

        Returns:
            Integer 0-100, None for an invalid summary
        """
        if not summary.ok:
            return None
        return self.breakdown(summary).total


DEFAULT_SCORER = QualityScorer()


def quality_score(summary: Summary) -> Optional[int]:
    """Score with the default calibration."""
    return DEFAULT_SCORER.score(summary)
