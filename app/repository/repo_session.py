"""
Repository for stored wave sessions.
Handles database queries for the wave_session table.
"""
import logging
from typing import List, Optional

from fastapi import Depends

from app.db.base import get_db
from app.models.model_wave_session import WaveSession
from app.schemas.sche_session import SessionRecord

logger = logging.getLogger(__name__)


class SessionRepository:
    """Repository for WaveSession entity."""

    def __init__(self, db_session=Depends(get_db)):
        self.db = db_session

    def get_by_id(self, session_id: str) -> Optional[WaveSession]:
        return self.db.query(WaveSession).filter(WaveSession.session_id == session_id).first()

    def exists(self, session_id: str) -> bool:
        return self.db.query(WaveSession).filter(WaveSession.session_id == session_id).count() > 0

    def get_all(self, limit: int = 50) -> List[WaveSession]:
        return (
            self.db.query(WaveSession)
            .order_by(WaveSession.stored_at.desc())
            .limit(limit)
            .all()
        )

    def create(self, record: SessionRecord, run_id: Optional[str] = None,
               clip_index: Optional[int] = None) -> WaveSession:
        """
        Store a session record.

        Args:
            record: Validated session record.
            run_id: Comparison run the session belongs to, if any.
            clip_index: 1 or 2 inside the run.

        Returns:
            Created WaveSession.
        """
        payload = record.to_json_dict()
        session = WaveSession(
            session_id=record.id,
            task=record.task,
            created_at=record.created_at,
            duration_ms=record.duration_ms,
            wave_start_ms=record.wave_start_ms,
            wave_end_ms=record.wave_end_ms,
            frames=payload['frames'],
            run_id=run_id,
            clip_index=clip_index,
        )
        self.db.add(session)
        self.db.commit()
        self.db.refresh(session)
        logger.info(f"Stored session: {session.session_id} ({len(record.frames)} frames)")
        return session

    def delete(self, session_id: str) -> bool:
        session = self.get_by_id(session_id)
        if session:
            self.db.delete(session)
            self.db.commit()
            logger.info(f"Deleted session: {session_id}")
            return True
        return False

    @staticmethod
    def to_record(session: WaveSession) -> SessionRecord:
        """Rebuild the session record from a stored row."""
        return SessionRecord.model_validate({
            'id': session.session_id,
            'task': session.task,
            'createdAt': session.created_at,
            'durationMs': session.duration_ms,
            'waveStartMs': session.wave_start_ms,
            'waveEndMs': session.wave_end_ms,
            'frames': session.frames or [],
        })
