"""Error kinds raised by the windowing, signal and feature code."""

from __future__ import annotations

from typing import Optional


class FeatureExtractionError(ValueError):
    """Base class for recoverable, window- or feature-local failures."""


class InsufficientData(FeatureExtractionError):
    """Fewer samples than the requested windows need; the collector should keep buffering."""

    def __init__(self, required: int, available: int, message: Optional[str] = None):
        self.required = int(required)
        self.available = int(available)
        super().__init__(message or f"need {self.required} samples, got {self.available}")


class DegenerateTimestamp(FeatureExtractionError):
    """Two consecutive samples share a timestamp, so the derivative is undefined."""

    def __init__(self, index: int, timestamp: float):
        self.index = int(index)
        self.timestamp = timestamp
        super().__init__(f"zero time delta between samples {self.index - 1} and {self.index} (t={timestamp})")


class ZeroVector(FeatureExtractionError):
    """An angle operand has zero magnitude."""


class DegenerateRange(FeatureExtractionError):
    """A statistic's range or denominator is zero."""
