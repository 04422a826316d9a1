"""
Analysis Schemas for WAVECHECK Backend.

Pydantic models for summary, score and comparison responses.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from app.motion.core.data_types import Summary
from app.motion.modules.comparator import Comparison
from app.motion.modules.scoring import QualityScorer
from app.motion.modules.series import PairedSeries
from app.schemas.sche_session import SessionRecord


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SummaryResponse(CamelModel):
    """Motion summary of one session, either valid or invalid with a reason."""

    ok: bool = Field(..., description="False when the window had too few tracked frames")
    reason: Optional[str] = Field(default=None, description="Why the summary is invalid")
    range: Optional[float] = Field(default=None, description="Wrist bounding-box extent norm")
    avg_speed: Optional[float] = None
    smoothness: Optional[float] = Field(default=None, description="Mean jerk proxy, lower is smoother")
    tracked_frame_count: Optional[int] = None
    wave_window_ms: Optional[float] = None

    @classmethod
    def from_summary(cls, summary: Summary) -> "SummaryResponse":
        if not summary.ok:
            return cls(ok=False, reason=summary.reason)
        return cls(
            ok=True,
            range=summary.range,
            avg_speed=summary.avg_speed,
            smoothness=summary.smoothness,
            tracked_frame_count=summary.tracked_frame_count,
            wave_window_ms=summary.wave_window_ms,
        )


class ScoreResponse(CamelModel):
    """Quality score with its components."""

    score: int = Field(..., ge=0, le=100)
    speed_score: float
    range_score: float
    jitter_score: float


class SessionAnalysisResponse(CamelModel):
    """Summary and score of one session."""

    session_id: str
    summary: SummaryResponse
    score: Optional[ScoreResponse] = None

    @classmethod
    def build(cls, session_id: str, summary: Summary, scorer: QualityScorer) -> "SessionAnalysisResponse":
        score = None
        if summary.ok:
            breakdown = scorer.breakdown(summary)
            score = ScoreResponse(
                score=breakdown.total,
                speed_score=breakdown.speed_score,
                range_score=breakdown.range_score,
                jitter_score=breakdown.jitter_score,
            )
        return cls(session_id=session_id, summary=SummaryResponse.from_summary(summary), score=score)


class CompareRequest(CamelModel):
    """
    Two sessions to compare, A is the baseline.

    Either both inline records or both stored session ids.
    """

    session_a: Optional[SessionRecord] = None
    session_b: Optional[SessionRecord] = None
    session_a_id: Optional[str] = None
    session_b_id: Optional[str] = None

    @model_validator(mode='after')
    def check_sources(self):
        inline = self.session_a is not None and self.session_b is not None
        stored = self.session_a_id is not None and self.session_b_id is not None
        if inline == stored:
            raise ValueError('provide either sessionA and sessionB, or sessionAId and sessionBId')
        return self


class ComparisonResponse(CamelModel):
    """Comparison of B against A, or the reason it is unavailable."""

    ok: bool
    reason: Optional[str] = None
    invalid_side: Optional[str] = None
    speed_ratio: Optional[float] = None
    range_delta: Optional[float] = None
    smoothness_delta: Optional[float] = None
    score_a: Optional[int] = None
    score_b: Optional[int] = None
    speed: Optional[str] = None
    range: Optional[str] = None
    smoothness: Optional[str] = None
    feedback: Optional[str] = None
    summary_a: SummaryResponse
    summary_b: SummaryResponse

    @classmethod
    def build(cls, comparison: Comparison, summary_a: Summary, summary_b: Summary) -> "ComparisonResponse":
        summaries = dict(
            summary_a=SummaryResponse.from_summary(summary_a),
            summary_b=SummaryResponse.from_summary(summary_b),
        )
        if not comparison.ok:
            return cls(ok=False, reason=comparison.reason, invalid_side=comparison.side, **summaries)
        return cls(
            ok=True,
            speed_ratio=comparison.speed_ratio,
            range_delta=comparison.range_delta,
            smoothness_delta=comparison.smoothness_delta,
            score_a=comparison.score_a,
            score_b=comparison.score_b,
            speed=comparison.speed.value,
            range=comparison.range.value,
            smoothness=comparison.smoothness.value,
            feedback=comparison.describe(),
            **summaries,
        )


class SessionCreatedResponse(CamelModel):
    session_id: str
    frame_count: int


class RunResponse(CamelModel):
    """A two-clip comparison run."""

    run_id: str
    status: str
    clip_count: int
    clip_ids: List[str] = []


class SeriesResponse(CamelModel):
    """One metric of both clips on a shared frame axis, shorter side padded with null."""

    metric: str
    labels: List[int]
    series_a: List[Optional[float]]
    series_b: List[Optional[float]]

    @classmethod
    def from_paired(cls, paired: PairedSeries) -> "SeriesResponse":
        return cls(
            metric=paired.metric.value,
            labels=paired.labels,
            series_a=paired.series_a,
            series_b=paired.series_b,
        )
