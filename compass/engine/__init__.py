from .analyzer import DecisionAnalyzer
from .result import AnalysisInsights, AnalysisMetadata, AnalysisResult, BiasFlag

__all__ = [
    "AnalysisInsights",
    "AnalysisMetadata",
    "AnalysisResult",
    "BiasFlag",
    "DecisionAnalyzer",
]
