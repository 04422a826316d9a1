"""
Session service: import, lookup, analysis and comparison of wave sessions.
"""
import logging
from typing import Tuple

from fastapi import Depends

from app.core.config import settings
from app.helpers.exception_handler import CustomException, MalformedSessionError
from app.helpers.motion_settings import quality_scorer
from app.helpers.session_io import ensure_frames
from app.motion.core.data_types import Session, Summary
from app.motion.modules.comparator import compare
from app.motion.modules.summarizer import summarize
from app.repository.repo_session import SessionRepository
from app.schemas.sche_analysis import (
    CompareRequest, ComparisonResponse, SessionAnalysisResponse, SessionCreatedResponse,
)
from app.schemas.sche_session import SessionRecord

logger = logging.getLogger(__name__)


def record_to_session(record: SessionRecord) -> Session:
    try:
        return record.to_domain()
    except (TypeError, ValueError) as e:
        raise MalformedSessionError(str(e)) from e


def summarize_record(record: SessionRecord) -> Summary:
    return summarize(record_to_session(record), min_confidence=settings.MIN_JOINT_CONFIDENCE)


def compare_records(record_a: SessionRecord, record_b: SessionRecord) -> ComparisonResponse:
    """Compare B against baseline A with the configured scorer."""
    summary_a = summarize_record(record_a)
    summary_b = summarize_record(record_b)
    comparison = compare(summary_a, summary_b, scorer=quality_scorer())
    if not comparison.ok:
        logger.info(f"Comparison unavailable: side {comparison.side} ({comparison.reason})")
    return ComparisonResponse.build(comparison, summary_a, summary_b)


class SessionService:
    def __init__(self, session_repo: SessionRepository = Depends()):
        self.session_repo = session_repo

    def import_session(self, record: SessionRecord) -> SessionCreatedResponse:
        """
        Store an externally recorded session.

        Raises:
            CustomException: 422 when the record has no frames, 409 when the id is taken.
        """
        try:
            ensure_frames(record)
        except MalformedSessionError as e:
            raise CustomException(http_code=422, code='422', message=str(e))
        if self.session_repo.exists(record.id):
            raise CustomException(http_code=409, code='409', message=f"Session {record.id} already exists")
        session = self.session_repo.create(record)
        return SessionCreatedResponse(session_id=session.session_id, frame_count=len(record.frames))

    def get_session(self, session_id: str) -> SessionRecord:
        session = self.session_repo.get_by_id(session_id)
        if session is None:
            raise CustomException(http_code=404, code='404', message=f"Session {session_id} not found")
        return self.session_repo.to_record(session)

    def analyze_record(self, record: SessionRecord, require_frames: bool = True) -> SessionAnalysisResponse:
        """
        Summarize and score a record without storing it.

        Inline records must carry frames. Stored run clips may be empty and
        are analyzed with require_frames=False.
        """
        if require_frames:
            ensure_frames(record)
        summary = summarize_record(record)
        if not summary.ok:
            logger.info(f"Session {record.id} has no valid summary: {summary.reason}")
        return SessionAnalysisResponse.build(record.id, summary, quality_scorer())

    def analyze_session(self, session_id: str) -> SessionAnalysisResponse:
        return self.analyze_record(self.get_session(session_id), require_frames=False)

    def compare_sessions(self, request: CompareRequest) -> ComparisonResponse:
        record_a, record_b = self._resolve(request)
        return compare_records(record_a, record_b)

    def _resolve(self, request: CompareRequest) -> Tuple[SessionRecord, SessionRecord]:
        if request.session_a is not None:
            ensure_frames(request.session_a)
            ensure_frames(request.session_b)
            return request.session_a, request.session_b
        return self.get_session(request.session_a_id), self.get_session(request.session_b_id)
