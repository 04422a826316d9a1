# Wave Motion Package
# Contains the readiness gate, gesture window detector and motion analysis

from .core import ReadinessGate, WaveCapture, process_frame, step_readiness
from .modules import QualityScorer, compare, extract_window, summarize
from .utils import SessionLogger

__all__ = [
    'ReadinessGate',
    'WaveCapture',
    'process_frame',
    'step_readiness',
    'QualityScorer',
    'compare',
    'extract_window',
    'summarize',
    'SessionLogger',
]
