"""
Comparison run service.

A run holds two clips recorded back to back. Clip 1 is the baseline (A),
clip 2 is compared against it (B). The run is ready to compare once both
clips are attached.
"""
import logging
from typing import Tuple

from fastapi import Depends

from app.core.config import settings
from app.helpers.enums import RunStatus
from app.helpers.exception_handler import CustomException
from app.models.model_comparison_run import ComparisonRun
from app.motion.modules.series import SeriesMetric, paired_series
from app.repository.repo_run import RunRepository
from app.repository.repo_session import SessionRepository
from app.schemas.sche_analysis import ComparisonResponse, RunResponse, SeriesResponse
from app.schemas.sche_session import SessionRecord
from app.services.srv_session import compare_records, record_to_session

logger = logging.getLogger(__name__)

CLIPS_PER_RUN = 2


class RunService:
    def __init__(
        self,
        run_repo: RunRepository = Depends(),
        session_repo: SessionRepository = Depends(),
    ):
        self.run_repo = run_repo
        self.session_repo = session_repo

    def create_run(self) -> RunResponse:
        return self._to_response(self.run_repo.create())

    def get_run(self, run_id: str) -> RunResponse:
        return self._to_response(self._get(run_id))

    def attach_clip(self, run_id: str, record: SessionRecord) -> RunResponse:
        """
        Attach the next clip to a run.

        Raises:
            CustomException: 404 for an unknown run, 409 when the run is full
                or the session id is already stored.
        """
        run = self._get(run_id)
        if len(run.clips) >= CLIPS_PER_RUN:
            raise CustomException(http_code=409, code='409', message=f"Run {run_id} already has {CLIPS_PER_RUN} clips")
        if self.session_repo.exists(record.id):
            raise CustomException(http_code=409, code='409', message=f"Session {record.id} already exists")

        clip_index = len(run.clips) + 1
        self.session_repo.create(record, run_id=run.run_id, clip_index=clip_index)
        if len(run.clips) >= CLIPS_PER_RUN:
            run = self.run_repo.set_status(run, RunStatus.READY_TO_COMPARE)
        logger.info(f"Attached clip {clip_index} ({record.id}) to run {run_id}")
        return self._to_response(run)

    def compare_run(self, run_id: str) -> ComparisonResponse:
        run = self._get_ready(run_id)
        record_a, record_b = self._clip_records(run)
        return compare_records(record_a, record_b)

    def run_series(self, run_id: str, metric: SeriesMetric) -> SeriesResponse:
        """Per-frame metric values of both clips, for plotting A against B."""
        record_a, record_b = self._clip_records(self._get_ready(run_id))
        paired = paired_series(
            record_to_session(record_a), record_to_session(record_b), metric,
            min_confidence=settings.MIN_JOINT_CONFIDENCE,
        )
        return SeriesResponse.from_paired(paired)

    def _clip_records(self, run: ComparisonRun) -> Tuple[SessionRecord, SessionRecord]:
        return self.session_repo.to_record(run.clips[0]), self.session_repo.to_record(run.clips[1])

    def _get(self, run_id: str) -> ComparisonRun:
        run = self.run_repo.get_by_id(run_id)
        if run is None:
            raise CustomException(http_code=404, code='404', message=f"Run {run_id} not found")
        return run

    def _get_ready(self, run_id: str) -> ComparisonRun:
        run = self._get(run_id)
        if run.status != RunStatus.READY_TO_COMPARE.value:
            raise CustomException(
                http_code=409, code='409',
                message=f"Run {run_id} has {len(run.clips)} of {CLIPS_PER_RUN} clips",
            )
        return run

    @staticmethod
    def _to_response(run: ComparisonRun) -> RunResponse:
        return RunResponse(
            run_id=run.run_id,
            status=run.status,
            clip_count=len(run.clips),
            clip_ids=[clip.session_id for clip in run.clips],
        )
