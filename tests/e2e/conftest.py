"""
End-to-end test fixtures

Full flows run the real controller, steps and files on disk. Only the
external commands are replaced: every launch is recorded and succeeds.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from rnrelease.models.session import FieldTarget
from rnrelease.models.messages import KeyPressed


class ScriptedUser:
    """
    Render callback that types like a user would

    Enters the given platform paths when prompted and picks an increment
    kind from the list, each exactly once.
    """

    def __init__(self, ios_path=None, android_path=None, increment="patch"):
        self.runner = None
        self.paths = {FieldTarget.IOS: ios_path, FieldTarget.ANDROID: android_path}
        self.increment = increment
        self.prompts_seen = []
        self.previews = {}
        self._selected = False

    def __call__(self, session):
        target = session.pending_field_target
        if session.is_collecting_path() and target not in self.prompts_seen:
            self.prompts_seen.append(target)
            for key in self.paths[target]:
                self.runner.post(KeyPressed(key))
            self.runner.post(KeyPressed("enter"))

        if session.is_selecting() and not self._selected:
            self._selected = True
            items = session.selection_list.items
            self.previews = {item.kind: item.preview for item in items}
            position = [item.kind for item in items].index(self.increment)
            for _ in range(position):
                self.runner.post(KeyPressed("down"))
            self.runner.post(KeyPressed("enter"))


@pytest.fixture
def launched_commands():
    """
    Patch subprocess launches; yields the list of argv tuples launched
    """
    launched = []

    async def create_subprocess_exec(*argv, **kwargs):
        launched.append(argv)
        process = MagicMock()
        process.returncode = 0
        process.communicate = AsyncMock(return_value=(b"", b""))
        return process

    with patch(
        "rnrelease.services.steps.process.asyncio.create_subprocess_exec",
        side_effect=create_subprocess_exec,
    ):
        yield launched


@pytest.fixture
def scripted_user():
    """Factory for ScriptedUser render callbacks"""
    return ScriptedUser
