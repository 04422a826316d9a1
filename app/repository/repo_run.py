"""
Repository for two-clip comparison runs.
"""
import logging
from typing import Optional

from fastapi import Depends

from app.db.base import get_db
from app.helpers.enums import RunStatus
from app.models.model_comparison_run import ComparisonRun

logger = logging.getLogger(__name__)


class RunRepository:
    def __init__(self, db_session=Depends(get_db)):
        self.db = db_session

    def get_by_id(self, run_id: str) -> Optional[ComparisonRun]:
        return self.db.query(ComparisonRun).filter(ComparisonRun.run_id == run_id).first()

    def create(self) -> ComparisonRun:
        run = ComparisonRun(status=RunStatus.IN_PROGRESS.value)
        self.db.add(run)
        self.db.commit()
        self.db.refresh(run)
        logger.info(f"Created comparison run: {run.run_id}")
        return run

    def set_status(self, run: ComparisonRun, status: RunStatus) -> ComparisonRun:
        run.status = status.value
        self.db.commit()
        self.db.refresh(run)
        logger.info(f"Run {run.run_id} -> {status.value}")
        return run
