"""pagemd - web page to Markdown conversion.

Converts page markup to Markdown under named conversion profiles, with
optional main content detection, and serves it as MCP tools.
"""

from pagemd.config import Settings, settings
from pagemd.converter import ConversionResult, MarkdownConverter, convert
from pagemd.detector import ContentDetector, DetectedContent, detect_content
from pagemd.pipeline import PageConversion, Pipeline
from pagemd.profiles import ConversionProfile, ProfileMatcher

__version__ = "0.1.0"

__all__ = [
    "ContentDetector",
    "ConversionProfile",
    "ConversionResult",
    "DetectedContent",
    "MarkdownConverter",
    "PageConversion",
    "Pipeline",
    "ProfileMatcher",
    "Settings",
    "__version__",
    "convert",
    "detect_content",
    "settings",
]
