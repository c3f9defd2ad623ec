"""Core utilities and shared components for bucket-summary."""

from .config import settings
from .exceptions import BucketSummaryError, ValidationError
from .observability import get_logger, get_tracer

__all__ = ["settings", "BucketSummaryError", "ValidationError", "get_logger", "get_tracer"]
