"""
Session Record Schemas for WAVECHECK Backend.

Pydantic models for the session record exchanged with storage, file
export and the HTTP API. Canonical field names are camelCase
(timestampMs, wrist, shoulder, elbow, confidence); the legacy names
written by the browser recorder (tMs, rightWrist, rightShoulder,
rightElbow, v) are accepted on input.
"""

from typing import List, Optional, Union
import uuid
from datetime import datetime, timezone

from pydantic import (
    AliasChoices, BaseModel, ConfigDict, Field, NonNegativeFloat, NonNegativeInt, PositiveFloat, PositiveInt,
)

from app.motion.core.data_types import Frame, JointSample, Session, WAVE_TASK


def _default_session_id() -> str:
    return f"session_{uuid.uuid4().hex[:12]}"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class JointRecord(BaseModel):
    """One joint sample."""

    model_config = ConfigDict(populate_by_name=True)

    x: float
    y: float
    confidence: float = Field(
        default=0.0, ge=0.0, le=1.0,
        validation_alias=AliasChoices('confidence', 'v'),
    )

    @classmethod
    def from_domain(cls, sample: JointSample) -> "JointRecord":
        return cls(x=sample.x, y=sample.y, confidence=sample.confidence)

    def to_domain(self) -> JointSample:
        return JointSample(x=self.x, y=self.y, confidence=self.confidence)


class FrameRecord(BaseModel):
    """One recorded frame. The wrist is mirrored, shoulder and elbow are camera coordinates."""

    model_config = ConfigDict(populate_by_name=True)

    timestamp_ms: Union[NonNegativeInt, NonNegativeFloat] = Field(
        ...,
        validation_alias=AliasChoices('timestampMs', 'tMs', 'timestamp_ms'),
        serialization_alias='timestampMs',
    )
    wrist: JointRecord = Field(..., validation_alias=AliasChoices('wrist', 'rightWrist'))
    shoulder: Optional[JointRecord] = Field(
        default=None, validation_alias=AliasChoices('shoulder', 'rightShoulder'),
    )
    elbow: Optional[JointRecord] = Field(
        default=None, validation_alias=AliasChoices('elbow', 'rightElbow'),
    )
    elbow_angle_deg: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices('elbowAngleDeg', 'elbow_angle_deg'),
        serialization_alias='elbowAngleDeg',
    )

    @classmethod
    def from_domain(cls, frame: Frame) -> "FrameRecord":
        return cls(
            timestamp_ms=frame.timestamp_ms,
            wrist=JointRecord.from_domain(frame.wrist),
            shoulder=JointRecord.from_domain(frame.shoulder) if frame.shoulder else None,
            elbow=JointRecord.from_domain(frame.elbow) if frame.elbow else None,
            elbow_angle_deg=frame.elbow_angle_deg,
        )

    def to_domain(self) -> Frame:
        return Frame(
            timestamp_ms=self.timestamp_ms,
            wrist=self.wrist.to_domain(),
            shoulder=self.shoulder.to_domain() if self.shoulder else None,
            elbow=self.elbow.to_domain() if self.elbow else None,
            elbow_angle_deg=self.elbow_angle_deg,
        )


class SessionRecord(BaseModel):
    """Request/response model of a finalized session."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "session_2025-01-12T10:31:05.120Z",
                "task": "right_arm_wave",
                "createdAt": "2025-01-12T10:31:05.120Z",
                "durationMs": 5000,
                "waveStartMs": 812,
                "waveEndMs": 2410,
                "frames": [
                    {
                        "timestampMs": 812,
                        "wrist": {"x": 0.71, "y": 0.42, "confidence": 0.98},
                        "shoulder": {"x": 0.55, "y": 0.41, "confidence": 0.99},
                        "elbow": {"x": 0.63, "y": 0.52, "confidence": 0.97},
                        "elbowAngleDeg": 96.4
                    }
                ]
            }
        },
    )

    id: str = Field(default_factory=_default_session_id)
    task: str = WAVE_TASK
    created_at: str = Field(
        default_factory=_now_iso,
        validation_alias=AliasChoices('createdAt', 'created_at'),
        serialization_alias='createdAt',
    )
    duration_ms: Union[PositiveInt, PositiveFloat] = Field(
        default=5000,
        validation_alias=AliasChoices('durationMs', 'duration_ms'),
        serialization_alias='durationMs',
    )
    wave_start_ms: Optional[Union[int, float]] = Field(
        default=None,
        validation_alias=AliasChoices('waveStartMs', 'wave_start_ms'),
        serialization_alias='waveStartMs',
    )
    wave_end_ms: Optional[Union[int, float]] = Field(
        default=None,
        validation_alias=AliasChoices('waveEndMs', 'wave_end_ms'),
        serialization_alias='waveEndMs',
    )
    frames: List[FrameRecord] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, session: Session) -> "SessionRecord":
        return cls(
            id=session.id,
            task=session.task,
            created_at=session.created_at,
            duration_ms=session.duration_ms,
            wave_start_ms=session.wave_start_ms,
            wave_end_ms=session.wave_end_ms,
            frames=[FrameRecord.from_domain(f) for f in session.frames],
        )

    def to_domain(self) -> Session:
        return Session(
            id=self.id,
            task=self.task,
            created_at=self.created_at,
            duration_ms=self.duration_ms,
            wave_start_ms=self.wave_start_ms,
            wave_end_ms=self.wave_end_ms,
            frames=tuple(f.to_domain() for f in self.frames),
        )

    def to_json_dict(self) -> dict:
        """Canonical JSON-ready dict (camelCase, nulls kept for markers)."""
        return self.model_dump(mode='json', by_alias=True)
