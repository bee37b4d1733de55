from .correlation import CorrelationAnalyzer, classify_strength, pearson

__all__ = ["CorrelationAnalyzer", "classify_strength", "pearson"]
