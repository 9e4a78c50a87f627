"""Infer the target application of a file from its extension."""

from pathlib import PurePath

from .models import AffinityApp

DEFAULT_APP = AffinityApp.PHOTO

_EXTENSIONS = {
    ".afphoto": AffinityApp.PHOTO,
    ".afdesign": AffinityApp.DESIGNER,
    ".afpub": AffinityApp.PUBLISHER,
}


def detect_app_from_path(path: str) -> AffinityApp:
    """Return the Affinity app owning ``path``'s extension.

    Unknown or missing extensions fall back to ``DEFAULT_APP``; this never fails.
    """
    return _EXTENSIONS.get(PurePath(path).suffix.lower(), DEFAULT_APP)
