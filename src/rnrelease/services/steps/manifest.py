"""
Manifest step

Locate the project manifest and extract its version string. Only
package.json is recognized; its `version` key is matched case-insensitively.
"""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict

import semver

from rnrelease.errors import ManifestError
from rnrelease.models.messages import StateReached
from rnrelease.models.session import FlowState, Session
from .base import StepContext, pause

logger = logging.getLogger(__name__)


def _lookup_version(data: Dict[str, Any], source: Path) -> str:
    if not isinstance(data, dict):
        raise ManifestError(f"{source.name} does not hold a JSON object")

    for key, value in data.items():
        if key.lower() == "version":
            if not isinstance(value, str) or not value.strip():
                raise ManifestError(f"{source.name} has an invalid version: {value!r}")
            return value.strip()

    raise ManifestError(f"{source.name} has no version field")


def read_package_json(path: Path) -> str:
    """
    Read the version from a package.json file

    Raises:
        ManifestError: If the file cannot be read or parsed
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ManifestError(f"Cannot parse {path.name}: {e}") from e
    except OSError as e:
        raise ManifestError(f"Cannot read {path}: {e}") from e

    return _lookup_version(data, path)


MANIFEST_READERS: Dict[str, Callable[[Path], str]] = {
    "package.json": read_package_json,
}


def find_manifest(ctx: StepContext) -> Path:
    """
    Return the first recognized manifest present in the project root

    Raises:
        ManifestError: If none of the versioning files exists
    """
    for file_name in ctx.versioning_files:
        candidate = ctx.project_dir / file_name
        if candidate.is_file():
            return candidate

    raise ManifestError(
        f"no versioning file found, please add one of the following {list(ctx.versioning_files)}"
    )


async def read_manifest_version(session: Session, ctx: StepContext) -> StateReached:
    """
    Read the current version and move on to increment selection

    Returns:
        SELECTING_INCREMENT with manifest_version in updates

    Raises:
        ManifestError: No manifest found, it is unreadable, or its version is not semver
    """
    manifest = find_manifest(ctx)
    reader = MANIFEST_READERS.get(manifest.name)
    if reader is None:
        raise ManifestError(f"No reader registered for {manifest.name}")

    version = reader(manifest)
    if not semver.Version.is_valid(version):
        raise ManifestError(f"{manifest.name} version {version!r} is not valid semver")
    logger.info(f"Current version {version} from {manifest.name}")

    await pause(ctx)
    return StateReached(FlowState.SELECTING_INCREMENT, {"manifest_version": version})
