import os
from typing import List

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '../../'))
load_dotenv(os.path.join(BASE_DIR, '.env'))


class Settings(BaseSettings):
    PROJECT_NAME: str = os.getenv('PROJECT_NAME', 'WAVECHECK')
    API_PREFIX: str = '/api'
    BACKEND_CORS_ORIGINS: List[str] = ['*']
    DATABASE_URL: str = os.getenv('SQL_DATABASE_URL', 'sqlite:///' + os.path.join(BASE_DIR, 'wavecheck.db'))
    LOGGING_CONFIG_FILE: str = os.path.join(BASE_DIR, 'logging.ini')

    # Capture
    CAPTURE_DURATION_MS: int = int(os.getenv('CAPTURE_DURATION_MS', '5000'))
    CAPTURE_LOG_DIR: str = os.getenv('CAPTURE_LOG_DIR', os.path.join(BASE_DIR, 'data', 'logs'))
    CAPTURE_EXPORT_DIR: str = os.getenv('CAPTURE_EXPORT_DIR', os.path.join(BASE_DIR, 'data', 'sessions'))
    POSE_MODEL_PATH: str = os.getenv(
        'POSE_MODEL_PATH',
        os.path.join(BASE_DIR, 'models', 'pose_landmarker_lite.task')
    )

    # Readiness gate
    READY_TARGET_BOX: List[float] = [0.62, 0.3, 0.9, 0.75]  # x1, y1, x2, y2
    MIN_JOINT_CONFIDENCE: float = 0.5
    READY_STABILITY_THRESHOLD: float = 0.015
    READY_FRAME_INTERVAL_MS: int = 16
    READY_HOLD_MS: int = 2000

    # Gesture window
    WAVE_START_THRESHOLD: float = 0.008
    WAVE_END_THRESHOLD: float = 0.003
    WAVE_QUIET_FRAMES: int = 18

    # Quality score calibration
    SCORE_SPEED_CEILING: float = 0.35
    SCORE_RANGE_CEILING: float = 0.55
    SCORE_JITTER_CEILING: float = 0.002
    SCORE_SPEED_WEIGHT: float = 0.4
    SCORE_RANGE_WEIGHT: float = 0.35
    SCORE_JITTER_WEIGHT: float = 0.25

    model_config = {'env_file': os.path.join(BASE_DIR, '.env'), 'extra': 'ignore'}


settings = Settings()
