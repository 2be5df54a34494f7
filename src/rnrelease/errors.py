"""
Error taxonomy for the release flow

Every failure raised by a step function derives from RnReleaseError.
The event loop turns these into a StepFailed message; the flow stops and the
process exits non-zero. Nothing is retried.
"""

from typing import Optional, Sequence


class RnReleaseError(Exception):
    """Base class for all fatal flow errors"""

    kind = "error"


class SetupError(RnReleaseError):
    """Config directory could not be created or listed"""

    kind = "setup"


class ManifestError(RnReleaseError):
    """No recognized manifest, or the manifest could not be parsed"""

    kind = "data"


class ExternalProcessError(RnReleaseError):
    """
    An external command failed to launch or exited non-zero

    Attributes:
        command: argv that was executed
        returncode: exit status, None if the process never started
        stderr: captured standard error (decoded)
    """

    kind = "process"

    def __init__(
        self,
        message: str,
        command: Sequence[str],
        returncode: Optional[int] = None,
        stderr: str = "",
    ):
        super().__init__(message)
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr


class ScriptTemplateError(RnReleaseError):
    """Sync script template could not be loaded, rendered or written"""

    kind = "template"
