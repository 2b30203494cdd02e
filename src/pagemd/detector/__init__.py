"""Main content detection and clutter removal."""

from pagemd.detector.detector import (
    ContentDetector,
    DetectedContent,
    DetectionOptions,
    detect_content,
)
from pagemd.detector.metadata import MetadataExtractor, PageMetadata
from pagemd.detector.protocols import CleaningFilter

__all__ = [
    "CleaningFilter",
    "ContentDetector",
    "DetectedContent",
    "DetectionOptions",
    "MetadataExtractor",
    "PageMetadata",
    "detect_content",
]
