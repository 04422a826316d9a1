from app.models.model_base import Base
from app.models.model_comparison_run import ComparisonRun
from app.models.model_wave_session import WaveSession
