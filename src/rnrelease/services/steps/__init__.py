"""
Step Functions Module

One async function per unit of work in the release flow. Each performs a
single side effect and returns the StateReached message for the next state.

    create_config_dir       -> INITIALIZED
    begin_file_check        -> CHECKING_FILES
    check_existing_files    -> FILES_CHECKED | FILES_NOT_FOUND
    request_platform_paths  -> COLLECT_IOS_PATH
    create_script_files     -> CREATED_SCRIPTS
    read_manifest_version   -> SELECTING_INCREMENT
    run_version_bump        -> SYNCING_PLATFORM
    sync_with_platform      -> DONE
"""

from .base import StepContext, Step, pause, emit_state
from .filesystem import (
    create_config_dir,
    begin_file_check,
    check_existing_files,
    request_platform_paths,
)
from .manifest import read_manifest_version, find_manifest, read_package_json
from .scripts import create_script_files
from .process import run_process, run_version_bump, sync_with_platform

__all__ = [
    "StepContext",
    "Step",
    "pause",
    "emit_state",
    "create_config_dir",
    "begin_file_check",
    "check_existing_files",
    "request_platform_paths",
    "read_manifest_version",
    "find_manifest",
    "read_package_json",
    "create_script_files",
    "run_process",
    "run_version_bump",
    "sync_with_platform",
]
