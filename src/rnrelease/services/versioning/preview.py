"""
Version preview for the increment selection list

Patch, minor and major previews come from the semver library. The
pre-release kinds are offered in the list but not predicted; npm decides the
pre-release identifier, so they always show PREVIEW_PLACEHOLDER.
"""

from typing import Callable, Dict, Iterable, List

import semver

from rnrelease.models.session import IncrementKind
from rnrelease.models.widgets import IncrementOption

PREVIEW_PLACEHOLDER = "Couldn't Predict"

# TODO: predict prepatch/preminor/premajor/prerelease once the preview mirrors npm's preid handling
_BUMPERS: Dict[IncrementKind, Callable[[semver.Version], semver.Version]] = {
    IncrementKind.PATCH: lambda v: v.bump_patch(),
    IncrementKind.MINOR: lambda v: v.bump_minor(),
    IncrementKind.MAJOR: lambda v: v.bump_major(),
}


def preview_version(current_version: str, kind: IncrementKind) -> str:
    """
    Predict the version `npm version <kind>` would produce

    Args:
        current_version: Version string from the manifest
        kind: Increment kind

    Returns:
        The bumped version for patch/minor/major, PREVIEW_PLACEHOLDER otherwise

    Raises:
        ValueError: If current_version is not valid semver and kind is predictable
    """
    bump = _BUMPERS.get(IncrementKind(kind))
    if bump is None:
        return PREVIEW_PLACEHOLDER

    return str(bump(semver.Version.parse(current_version)))


def build_increment_options(current_version: str, kinds: Iterable[str]) -> List[IncrementOption]:
    """
    Build selection list items, one per increment kind, in the given order

    The manifest step has already checked the version; an unparsable one
    raises ValueError here.
    """
    options = []
    for kind in kinds:
        preview = preview_version(current_version, IncrementKind(kind))
        options.append(IncrementOption(kind=kind, preview=preview))
    return options
