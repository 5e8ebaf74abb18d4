from .summary import summarize_facility

__all__ = ["summarize_facility"]
