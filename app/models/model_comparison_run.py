from sqlalchemy import Column, String, DateTime, func
from sqlalchemy.orm import relationship
from app.models.model_base import Base
import uuid


class ComparisonRun(Base):
    __tablename__ = "comparison_run"

    run_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    status = Column(String(20), nullable=False, default='in_progress')
    created_at = Column(DateTime, default=func.now())

    clips = relationship(
        "WaveSession",
        back_populates="run",
        order_by="WaveSession.clip_index",
        lazy="selectin",
    )
