"""Version preview helpers"""

from .preview import PREVIEW_PLACEHOLDER, preview_version, build_increment_options

__all__ = [
    "PREVIEW_PLACEHOLDER",
    "preview_version",
    "build_increment_options",
]
