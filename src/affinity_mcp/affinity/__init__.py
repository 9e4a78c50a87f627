"""Affinity Photo / Designer / Publisher tools and their AppleScript capability."""

from .applescript import AppleScriptActions
from .capability import build_capability
from .detection import DEFAULT_APP, detect_app_from_path
from .models import AffinityApp, ExportFormat
from .tools import AffinityTools

__all__ = [
    "AppleScriptActions",
    "build_capability",
    "DEFAULT_APP",
    "detect_app_from_path",
    "AffinityApp",
    "ExportFormat",
    "AffinityTools",
]
