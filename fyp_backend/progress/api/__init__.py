"""
Progress API controllers.
"""

from fyp_backend.progress.api.progress import ProgressController

__all__ = ["ProgressController"]
