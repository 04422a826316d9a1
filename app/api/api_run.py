from typing import Any
from fastapi import APIRouter, Depends
import logging

from app.helpers.exception_handler import CustomException, MalformedSessionError
from app.schemas.sche_base import DataResponse
from app.motion.modules.series import SeriesMetric
from app.schemas.sche_analysis import ComparisonResponse, RunResponse, SeriesResponse
from app.schemas.sche_session import SessionRecord
from app.services.srv_run import RunService

router = APIRouter()

logger = logging.getLogger(__name__)


@router.post('', response_model=DataResponse[RunResponse])
def create_run(run_service: RunService = Depends()) -> Any:
    """
    Start a two-clip comparison run.

    **Process**:
    1. Create the run in_progress
    2. Attach clip 1 (baseline) and clip 2 with POST /runs/{run_id}/clips
    3. Fetch the comparison with GET /runs/{run_id}/comparison
    """
    run = run_service.create_run()
    logger.info(f"create_run: {run.run_id}")
    return DataResponse().success_response(data=run)


@router.get('/{run_id}', response_model=DataResponse[RunResponse])
def get_run(run_id: str, run_service: RunService = Depends()) -> Any:
    return DataResponse().success_response(data=run_service.get_run(run_id))


@router.post('/{run_id}/clips', response_model=DataResponse[RunResponse])
def attach_clip(
    run_id: str,
    record: SessionRecord,
    run_service: RunService = Depends()
) -> Any:
    """
    Attach the next clip to a run. A clip with no frames is accepted and
    simply yields an unavailable comparison.

    **Errors**: 404 unknown run, 409 when the run already has two clips.
    """
    run = run_service.attach_clip(run_id, record)
    return DataResponse().success_response(data=run)


@router.get('/{run_id}/comparison', response_model=DataResponse[ComparisonResponse])
def get_run_comparison(run_id: str, run_service: RunService = Depends()) -> Any:
    """
    Compare clip 2 against clip 1.

    **Errors**: 409 until both clips are attached.
    """
    try:
        return DataResponse().success_response(data=run_service.compare_run(run_id))
    except MalformedSessionError as e:
        raise CustomException(http_code=422, code='422', message=str(e))


@router.get('/{run_id}/series', response_model=DataResponse[SeriesResponse])
def get_run_series(
    run_id: str,
    metric: SeriesMetric = SeriesMetric.WRIST_X,
    run_service: RunService = Depends()
) -> Any:
    """
    Per-frame values of one metric for both clips, on a shared frame axis.

    **metric**: wristX, wristY or elbowAngle. The shorter clip is padded
    with null. Frames without an elbow angle report 0.

    **Errors**: 409 until both clips are attached, 422 for an unknown metric.
    """
    try:
        return DataResponse().success_response(data=run_service.run_series(run_id, metric))
    except MalformedSessionError as e:
        raise CustomException(http_code=422, code='422', message=str(e))
