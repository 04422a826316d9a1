import os

# Keep the app module from creating a database file next to the sources.
os.environ.setdefault('SQL_DATABASE_URL', 'sqlite://')

from typing import List, Optional, Sequence

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.motion.core.data_types import ArmPose, Frame, JointSample, Session

SHOULDER = JointSample(0.55, 0.41, 0.99)
ELBOW = JointSample(0.63, 0.52, 0.97)


def make_pose(wrist_x: float, wrist_y: float = 0.5, confidence: float = 0.9) -> ArmPose:
    return ArmPose(
        shoulder=JointSample(SHOULDER.x, SHOULDER.y, confidence),
        elbow=JointSample(ELBOW.x, ELBOW.y, confidence),
        wrist=JointSample(wrist_x, wrist_y, confidence),
    )


def make_frame(t: float, x: float, y: float = 0.5, confidence: float = 1.0) -> Frame:
    return Frame(timestamp_ms=t, wrist=JointSample(x, y, confidence), shoulder=SHOULDER, elbow=ELBOW)


def linear_frames(n: int = 20, dt: float = 33, x0: float = 0.3, x1: float = 0.8,
                  confidence: float = 1.0) -> List[Frame]:
    """Wrist moving at constant velocity along y = 0.5."""
    step = (x1 - x0) / (n - 1)
    return [make_frame(i * dt, x0 + i * step, confidence=confidence) for i in range(n)]


def make_session(frames: Sequence[Frame], wave_start_ms: Optional[float] = None,
                 wave_end_ms: Optional[float] = None, session_id: str = 'session_test',
                 duration_ms: float = 5000) -> Session:
    return Session(
        id=session_id,
        created_at='2025-01-12T10:31:05.120Z',
        duration_ms=duration_ms,
        wave_start_ms=wave_start_ms,
        wave_end_ms=wave_end_ms,
        frames=tuple(frames),
    )


def session_payload(session_id: str = 'session_a', n: int = 20, x1: float = 0.8,
                    confidence: float = 1.0, legacy: bool = False) -> dict:
    """JSON session record as written by a recorder."""
    frames = []
    for f in linear_frames(n=n, x1=x1, confidence=confidence):
        if legacy:
            frames.append({
                'tMs': f.timestamp_ms,
                'rightWrist': {'x': f.wrist.x, 'y': f.wrist.y, 'v': f.wrist.confidence},
            })
        else:
            frames.append({
                'timestampMs': f.timestamp_ms,
                'wrist': {'x': f.wrist.x, 'y': f.wrist.y, 'confidence': f.wrist.confidence},
                'shoulder': {'x': SHOULDER.x, 'y': SHOULDER.y, 'confidence': SHOULDER.confidence},
                'elbow': {'x': ELBOW.x, 'y': ELBOW.y, 'confidence': ELBOW.confidence},
            })
    return {
        'id': session_id,
        'task': 'right_arm_wave',
        'createdAt': '2025-01-12T10:31:05.120Z',
        'durationMs': 5000,
        'waveStartMs': 0,
        'waveEndMs': (n - 1) * 33,
        'frames': frames,
    }


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from app.db.base import get_db
    from app.main import app
    from app.models import Base

    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    def override_get_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    Base.metadata.drop_all(bind=engine)
