from typing import Any
from fastapi import APIRouter, Depends
import logging

from app.helpers.exception_handler import CustomException, MalformedSessionError
from app.schemas.sche_base import DataResponse
from app.schemas.sche_analysis import (
    CompareRequest, ComparisonResponse, SessionAnalysisResponse, SessionCreatedResponse,
)
from app.schemas.sche_session import SessionRecord
from app.services.srv_session import SessionService

router = APIRouter()

logger = logging.getLogger(__name__)


@router.post('', response_model=DataResponse[SessionCreatedResponse])
def import_session(
    record: SessionRecord,
    session_service: SessionService = Depends()
) -> Any:
    """
    Import a finalized session record.

    Accepts the canonical camelCase record as well as the legacy field names
    (tMs, rightWrist, rightShoulder, rightElbow, v).

    **Errors**: 422 when the record is malformed or has no frames, 409 when the id exists.
    """
    try:
        logger.info(f"import_session request: {record.id} ({len(record.frames)} frames)")
        created = session_service.import_session(record)
        return DataResponse().success_response(data=created)
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"import_session error: {str(e)}", exc_info=True)
        raise CustomException(http_code=400, code='400', message=str(e))


@router.post('/analyze', response_model=DataResponse[SessionAnalysisResponse])
def analyze_session(
    record: SessionRecord,
    session_service: SessionService = Depends()
) -> Any:
    """
    Summarize and score an inline session record without storing it.

    **Response**: summary metrics and quality score, or the reason the summary is invalid.
    """
    try:
        return DataResponse().success_response(data=session_service.analyze_record(record))
    except MalformedSessionError as e:
        raise CustomException(http_code=422, code='422', message=str(e))


@router.post('/compare', response_model=DataResponse[ComparisonResponse])
def compare_sessions(
    request: CompareRequest,
    session_service: SessionService = Depends()
) -> Any:
    """
    Compare session B against baseline A.

    Body holds either two inline records (sessionA, sessionB) or two stored
    ids (sessionAId, sessionBId). When either side has too few tracked frames
    the response carries ok=false with the invalid side and its reason.
    """
    try:
        comparison = session_service.compare_sessions(request)
        logger.info(f"compare_sessions: ok={comparison.ok}")
        return DataResponse().success_response(data=comparison)
    except MalformedSessionError as e:
        raise CustomException(http_code=422, code='422', message=str(e))


@router.get('/{session_id}', response_model=DataResponse[SessionRecord])
def get_session(
    session_id: str,
    session_service: SessionService = Depends()
) -> Any:
    return DataResponse().success_response(data=session_service.get_session(session_id))


@router.get('/{session_id}/summary', response_model=DataResponse[SessionAnalysisResponse])
def get_session_summary(
    session_id: str,
    session_service: SessionService = Depends()
) -> Any:
    """
    Summary and quality score of a stored session.
    """
    try:
        return DataResponse().success_response(data=session_service.analyze_session(session_id))
    except MalformedSessionError as e:
        raise CustomException(http_code=422, code='422', message=str(e))
