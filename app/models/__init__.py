from app.models.string import StringAnalysis

__all__ = ["StringAnalysis"]
