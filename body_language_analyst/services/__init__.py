from .analyzer import AnalyzerService

__all__ = ["AnalyzerService"]
