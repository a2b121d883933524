"""Classification and aggregation of registry entries."""

from .aggregator import AnalysisResult, analyze, summarize
from .classifier import Category, Classification, classify

__all__ = [
    "AnalysisResult",
    "analyze",
    "summarize",
    "Category",
    "Classification",
    "classify",
]
