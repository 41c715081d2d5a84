"""Utilities package: logging."""

from movie_tracker.utils.logger import set_log_level, setup_logger

__all__ = ["set_log_level", "setup_logger"]
