"""Utility modules for the usecase runner."""

from .logger import get_logger, reset_logging, setup_logging

__all__ = ["get_logger", "reset_logging", "setup_logging"]
