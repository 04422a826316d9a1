from sqlalchemy import Column, String, Integer, Float, DateTime, ForeignKey, JSON, func
from sqlalchemy.orm import relationship
from app.models.model_base import Base


class WaveSession(Base):
    __tablename__ = "wave_session"

    session_id = Column(String(128), primary_key=True)
    task = Column(String(50), nullable=False)
    created_at = Column(String(64), nullable=False)
    duration_ms = Column(Float, nullable=False)
    wave_start_ms = Column(Float)
    wave_end_ms = Column(Float)
    frames = Column(JSON, nullable=False, default=list)
    run_id = Column(String(36), ForeignKey("comparison_run.run_id", ondelete="CASCADE"))
    clip_index = Column(Integer)
    stored_at = Column(DateTime, default=func.now())

    run = relationship("ComparisonRun", back_populates="clips")
