from .config import AnalysisConfig, load_config
from .pipeline import AnalysisResult, run_from_config, run_pipeline

__all__ = [
    "AnalysisConfig",
    "AnalysisResult",
    "load_config",
    "run_from_config",
    "run_pipeline",
]
