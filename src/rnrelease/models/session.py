"""
Session model for the release flow

One Session exists for the lifetime of the process. It is owned by the event
loop runner and written only by the flow controller; step functions receive a
deep copy.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from .widgets import SelectionList, TextInput


class FlowState(str, Enum):
    """States of the release flow, in the order they are normally visited"""

    INIT = "init"
    INITIALIZED = "initialized"
    CHECKING_FILES = "checking_files"
    FILES_CHECKED = "files_checked"
    FILES_NOT_FOUND = "files_not_found"
    COLLECT_IOS_PATH = "collect_ios_path"
    COLLECT_ANDROID_PATH = "collect_android_path"
    CREATING_SCRIPTS = "creating_scripts"
    CREATED_SCRIPTS = "created_scripts"
    SELECTING_INCREMENT = "selecting_increment"
    INCREMENT_APPLIED = "increment_applied"
    SYNCING_PLATFORM = "syncing_platform"
    DONE = "done"


class IncrementKind(str, Enum):
    """Semver increment categories understood by `npm version`"""

    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"
    PREPATCH = "prepatch"
    PREMINOR = "preminor"
    PREMAJOR = "premajor"
    PRERELEASE = "prerelease"


class FieldTarget(str, Enum):
    """Which platform file location the text input is collecting"""

    IOS = "ios"
    ANDROID = "android"


FIELD_PROMPTS = {
    FieldTarget.IOS: "Location of your Info.plist",
    FieldTarget.ANDROID: "Location of your build.gradle",
}


class Session(BaseModel):
    """
    Mutable view-state of the release flow

    Invariants:
    - pending_field_target is set only while scripts_needed is True and the
      matching path is still empty
    - selected_increment is set at most once, while in SELECTING_INCREMENT
    - manifest_version never changes once populated
    """

    state: FlowState = FlowState.INIT
    process_label: str = ""
    manifest_version: Optional[str] = None
    selected_increment: Optional[IncrementKind] = None
    scripts_needed: bool = False
    pending_field_target: Optional[FieldTarget] = None
    ios_config_path: str = ""
    android_config_path: str = ""
    selection_list: Optional[SelectionList] = None
    text_field: TextInput = Field(default_factory=TextInput)
    terminal_width: Optional[int] = None
    terminal_height: Optional[int] = None

    step_in_flight: bool = False
    quitting: bool = False
    error: Optional[str] = None

    def is_collecting_path(self) -> bool:
        return self.scripts_needed and self.pending_field_target is not None

    def is_selecting(self) -> bool:
        """True while the increment list is shown and nothing has been picked yet"""
        return (
            self.state == FlowState.SELECTING_INCREMENT
            and self.selection_list is not None
            and self.selected_increment is None
        )

    def snapshot(self) -> "Session":
        """Read-only view handed to step functions"""
        return self.model_copy(deep=True)
