"""
Comparator Module for WAVECHECK.

Relative metrics between two sessions A (baseline) and B:

    speed_ratio     = clamp(B.avg_speed / A.avg_speed, 0, 3)
    range_delta     = clamp(pct_diff(A.range, B.range), -100, 100)
    smoothness_delta = clamp(pct_diff(A.smoothness, B.smoothness), -100, 100)

Degenerate baselines never raise: ratio() falls back to 1 and pct_diff()
to 0. Comparison only exists when both summaries are valid.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union

from ..core.data_types import Summary
from .scoring import DEFAULT_SCORER, QualityScorer, clamp

EPSILON = 1e-9
MAX_SPEED_RATIO = 3.0


class SpeedVerdict(Enum):
    FASTER = "faster"
    SLOWER = "slower"
    SIMILAR = "similar"


class RangeVerdict(Enum):
    LARGER = "larger"
    SMALLER = "smaller"
    SIMILAR = "similar"


class SmoothnessVerdict(Enum):
    SHAKIER = "shakier"
    SMOOTHER = "smoother"
    SIMILAR = "similar"


def ratio(a: float, b: float) -> float:
    """b / a, or 1 when the baseline is (near) zero."""
    if a <= EPSILON:
        return 1.0
    return b / a


def pct_diff(a: float, b: float) -> float:
    """Percent change from a to b, or 0 when the baseline is (near) zero."""
    if abs(a) < EPSILON:
        return 0.0
    return (b - a) / a * 100


def speed_verdict(speed_ratio: float) -> SpeedVerdict:
    if speed_ratio > 1.08:
        return SpeedVerdict.FASTER
    if speed_ratio < 0.92:
        return SpeedVerdict.SLOWER
    return SpeedVerdict.SIMILAR


def range_verdict(range_delta: float) -> RangeVerdict:
    if range_delta > 8:
        return RangeVerdict.LARGER
    if range_delta < -8:
        return RangeVerdict.SMALLER
    return RangeVerdict.SIMILAR


def smoothness_verdict(smoothness_delta: float) -> SmoothnessVerdict:
    if smoothness_delta > 10:
        return SmoothnessVerdict.SHAKIER
    if smoothness_delta < -10:
        return SmoothnessVerdict.SMOOTHER
    return SmoothnessVerdict.SIMILAR


_SPEED_TEXT = {
    SpeedVerdict.FASTER: "B looks faster.",
    SpeedVerdict.SLOWER: "B looks slower.",
    SpeedVerdict.SIMILAR: "Speed looks similar.",
}
_RANGE_TEXT = {
    RangeVerdict.LARGER: "B has larger movement range.",
    RangeVerdict.SMALLER: "B has smaller movement range.",
    RangeVerdict.SIMILAR: "Range looks similar.",
}
_SMOOTHNESS_TEXT = {
    SmoothnessVerdict.SHAKIER: "B looks more shaky.",
    SmoothnessVerdict.SMOOTHER: "B looks smoother.",
    SmoothnessVerdict.SIMILAR: "Smoothness looks similar.",
}


@dataclass(frozen=True)
class ComparisonResult:
    """
    Relative metrics of B against A.

    Attributes:
        speed_ratio: B speed / A speed, clamped to [0, 3].
        range_delta: Percent change in range, clamped to [-100, 100].
        smoothness_delta: Percent change in jerk proxy, clamped to [-100, 100].
        score_a: Quality score of A.
        score_b: Quality score of B.
    """
    speed_ratio: float
    range_delta: float
    smoothness_delta: float
    score_a: int
    score_b: int

    @property
    def ok(self) -> bool:
        return True

    @property
    def speed(self) -> SpeedVerdict:
        return speed_verdict(self.speed_ratio)

    @property
    def range(self) -> RangeVerdict:
        return range_verdict(self.range_delta)

    @property
    def smoothness(self) -> SmoothnessVerdict:
        return smoothness_verdict(self.smoothness_delta)

    def describe(self) -> str:
        """One-line feedback text for the user."""
        return " ".join([
            _SPEED_TEXT[self.speed],
            _RANGE_TEXT[self.range],
            _SMOOTHNESS_TEXT[self.smoothness],
        ])

    def to_dict(self) -> Dict[str, Union[float, int, str]]:
        return {
            'speedRatio': self.speed_ratio,
            'rangeDelta': self.range_delta,
            'smoothnessDelta': self.smoothness_delta,
            'scoreA': self.score_a,
            'scoreB': self.score_b,
            'speed': self.speed.value,
            'range': self.range.value,
            'smoothness': self.smoothness.value,
            'feedback': self.describe(),
        }


@dataclass(frozen=True)
class ComparisonUnavailable:
    """
    No comparison because one side is invalid.

    Attributes:
        side: "A" or "B", the first invalid side.
        reason: The invalid summary's reason.
    """
    side: str
    reason: str

    @property
    def ok(self) -> bool:
        return False


Comparison = Union[ComparisonResult, ComparisonUnavailable]


def compare(a: Summary, b: Summary, scorer: Optional[QualityScorer] = None) -> Comparison:
    """
    Compare session B against baseline A.

    Args:
        a: Summary of the baseline session
        b: Summary of the compared session
        scorer: Scorer used for the per-session scores

    Returns:
        ComparisonResult, or ComparisonUnavailable naming the invalid side
    """
    if not a.ok:
        return ComparisonUnavailable(side="A", reason=a.reason)
    if not b.ok:
        return ComparisonUnavailable(side="B", reason=b.reason)

    scorer = scorer or DEFAULT_SCORER

    return ComparisonResult(
        speed_ratio=clamp(ratio(a.avg_speed, b.avg_speed), 0, MAX_SPEED_RATIO),
        range_delta=clamp(pct_diff(a.range, b.range), -100, 100),
        smoothness_delta=clamp(pct_diff(a.smoothness, b.smoothness), -100, 100),
        score_a=scorer.score(a),
        score_b=scorer.score(b),
    )
