"""
Flow Controller - state machine of the release flow

The controller is a pure function of (session, message) returning the next
session and at most one command to schedule. Apart from logging it touches
no shared state; the runner binds the state to the log context. It is the only writer of the
Session: step functions report field changes through StateReached.updates
and the controller applies them together with the new state.

Flow:
    INIT -> INITIALIZED -> CHECKING_FILES
      -> FILES_NOT_FOUND -> COLLECT_IOS_PATH -> COLLECT_ANDROID_PATH
         -> CREATING_SCRIPTS -> CREATED_SCRIPTS -> (read manifest)
      -> FILES_CHECKED -> (read manifest)
    -> SELECTING_INCREMENT -> INCREMENT_APPLIED -> SYNCING_PLATFORM -> DONE

Each transition performs exactly one side effect. While a step is in flight
the confirm key is ignored, so a second command is never issued before the
prior completion has been consumed.
"""

import logging
from typing import Callable, Dict, Optional

from rnrelease.models.messages import (
    Interrupt,
    KeyPressed,
    Message,
    Resized,
    StateReached,
    StepFailed,
    Tick,
)
from rnrelease.models.session import FieldTarget, FlowState, IncrementKind, Session
from rnrelease.models.widgets import SelectionList
from rnrelease.services.steps import (
    StepContext,
    Step,
    emit_state,
    create_config_dir,
    begin_file_check,
    check_existing_files,
    request_platform_paths,
    create_script_files,
    read_manifest_version,
    run_version_bump,
    sync_with_platform,
)
from rnrelease.services.versioning.preview import build_increment_options
from .commands import Command, QUIT, Transition

logger = logging.getLogger(__name__)

CONFIRM_KEY = "enter"
FORCE_QUIT_KEY = "ctrl+c"

# Fields a step may set through StateReached.updates
STEP_UPDATABLE_FIELDS = frozenset({"manifest_version"})


class FlowController:
    """
    State machine driving a Session through the release flow

    Responsibilities:
    - Apply step completions (state + field updates) to the session
    - Pick the step to run for each state
    - Interpret key presses for the text input and the increment list
    - Stop the flow on interrupt, completion or fatal step error
    """

    def __init__(self, context: StepContext):
        """
        Initialize controller

        Args:
            context: Fixed inputs handed to every step
        """
        self.context = context

        self._state_handlers: Dict[FlowState, Callable[[Session], Transition]] = {
            FlowState.INIT: self._on_init,
            FlowState.INITIALIZED: self._on_initialized,
            FlowState.CHECKING_FILES: self._on_checking_files,
            FlowState.FILES_CHECKED: self._on_files_checked,
            FlowState.FILES_NOT_FOUND: self._on_files_not_found,
            FlowState.COLLECT_IOS_PATH: self._on_collect_ios_path,
            FlowState.COLLECT_ANDROID_PATH: self._on_collect_android_path,
            FlowState.CREATING_SCRIPTS: self._on_creating_scripts,
            FlowState.CREATED_SCRIPTS: self._on_created_scripts,
            FlowState.SELECTING_INCREMENT: self._on_selecting_increment,
            FlowState.INCREMENT_APPLIED: self._on_increment_applied,
            FlowState.SYNCING_PLATFORM: self._on_syncing_platform,
            FlowState.DONE: self._on_done,
        }
        self._message_handlers: Dict[type, Callable[[Session, Message], Transition]] = {
            StateReached: self._on_state_reached,
            StepFailed: self._on_step_failed,
            KeyPressed: self._on_key,
            Resized: self._on_resized,
            Interrupt: self._on_interrupt,
            Tick: self._on_tick,
        }

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def start(self, session: Session) -> Transition:
        """First transition: schedule the message that enters INIT"""
        return self._issue(session, "app_init", emit_state(FlowState.INIT))

    def update(self, session: Session, message: Message) -> Transition:
        """
        Compute the next session and follow-up command for one message

        Raises:
            TypeError: For an object that is not a known message kind
        """
        handler = self._message_handlers.get(type(message))
        if handler is None:
            raise TypeError(f"Unknown message kind: {type(message).__name__}")

        if session.quitting:
            return Transition(session)

        return handler(session, message)

    # ------------------------------------------------------------------
    # Message handlers
    # ------------------------------------------------------------------

    def _on_state_reached(self, session: Session, message: StateReached) -> Transition:
        updates = {}
        for field_name, value in message.updates.items():
            if field_name not in STEP_UPDATABLE_FIELDS:
                raise ValueError(f"Step attempted to set {field_name!r}")
            if field_name == "manifest_version" and session.manifest_version is not None:
                logger.warning("Ignoring manifest_version update, already populated")
                continue
            updates[field_name] = value

        previous_state = session.state
        session = session.model_copy(update={
            **updates,
            "state": message.state,
            "step_in_flight": False,
        })

        logger.info(f"State transition: {previous_state.value} -> {message.state.value}")

        return self._state_handlers[message.state](session)

    def _on_step_failed(self, session: Session, message: StepFailed) -> Transition:
        logger.error(f"Flow aborted in {session.state.value} by {message.step}: {message.error}")
        session = session.model_copy(update={
            "error": str(message.error),
            "step_in_flight": False,
            "quitting": True,
        })
        return Transition(session, QUIT)

    def _on_interrupt(self, session: Session, message: Message) -> Transition:
        logger.info(f"Interrupted in {session.state.value}")
        return Transition(session.model_copy(update={"quitting": True}), QUIT)

    def _on_tick(self, session: Session, message: Tick) -> Transition:
        return Transition(session)

    def _on_resized(self, session: Session, message: Resized) -> Transition:
        updates = {"terminal_width": message.width, "terminal_height": message.height}
        if session.selection_list is not None:
            updates["selection_list"] = session.selection_list.set_size(message.width, message.height)
        return Transition(session.model_copy(update=updates))

    def _on_key(self, session: Session, message: KeyPressed) -> Transition:
        key = message.key

        if key == FORCE_QUIT_KEY:
            return self._on_interrupt(session, message)

        if key == CONFIRM_KEY:
            if session.step_in_flight:
                return Transition(session)
            if session.is_collecting_path():
                return self._submit_path(session)
            if session.is_selecting():
                return self._submit_increment(session)
            return Transition(session)

        if session.is_collecting_path():
            return Transition(session.model_copy(update={"text_field": session.text_field.update(key)}))

        if session.is_selecting():
            return Transition(session.model_copy(update={"selection_list": session.selection_list.update(key)}))

        return Transition(session)

    def _submit_path(self, session: Session) -> Transition:
        value = session.text_field.value.strip()
        if not value:
            return Transition(session)

        if session.pending_field_target == FieldTarget.IOS:
            session = session.model_copy(update={
                "ios_config_path": value,
                "text_field": session.text_field.clear(),
                "pending_field_target": None,
            })
            return self._issue(session, "request_android_path", emit_state(FlowState.COLLECT_ANDROID_PATH))

        session = session.model_copy(update={
            "android_config_path": value,
            "text_field": session.text_field.clear(),
            "pending_field_target": None,
        })
        return self._issue(session, "start_creating_scripts", emit_state(FlowState.CREATING_SCRIPTS))

    def _submit_increment(self, session: Session) -> Transition:
        item = session.selection_list.selected_item()
        if item is None:
            return Transition(session)

        session = session.model_copy(update={"selected_increment": IncrementKind(item.kind)})
        logger.info(f"Selected increment {item.kind} (preview {item.preview})")
        return self._issue(session, "apply_increment", emit_state(FlowState.INCREMENT_APPLIED))

    # ------------------------------------------------------------------
    # State handlers
    # ------------------------------------------------------------------

    def _on_init(self, session: Session) -> Transition:
        session = session.model_copy(update={"process_label": "Initializing"})
        return self._issue(session, "create_config_dir", create_config_dir)

    def _on_initialized(self, session: Session) -> Transition:
        session = session.model_copy(update={"process_label": "Initialized"})
        return self._issue(session, "begin_file_check", begin_file_check)

    def _on_checking_files(self, session: Session) -> Transition:
        session = session.model_copy(update={"process_label": "Check if script exists"})
        return self._issue(session, "check_existing_files", check_existing_files)

    def _on_files_checked(self, session: Session) -> Transition:
        session = session.model_copy(update={"process_label": "Looking for versioning data"})
        return self._issue(session, "read_manifest_version", read_manifest_version)

    def _on_files_not_found(self, session: Session) -> Transition:
        session = session.model_copy(update={"scripts_needed": True})
        return self._issue(session, "request_platform_paths", request_platform_paths)

    def _on_collect_ios_path(self, session: Session) -> Transition:
        return self._await_path(session, FieldTarget.IOS, session.ios_config_path)

    def _on_collect_android_path(self, session: Session) -> Transition:
        return self._await_path(session, FieldTarget.ANDROID, session.android_config_path)

    def _await_path(self, session: Session, target: FieldTarget, current_value: str) -> Transition:
        if not session.scripts_needed or current_value:
            logger.warning(f"Not collecting {target.value} path (scripts_needed={session.scripts_needed})")
            return Transition(session)
        return Transition(session.model_copy(update={"pending_field_target": target}))

    def _on_creating_scripts(self, session: Session) -> Transition:
        session = session.model_copy(update={"process_label": "Creating Scripts"})
        return self._issue(session, "create_script_files", create_script_files)

    def _on_created_scripts(self, session: Session) -> Transition:
        session = session.model_copy(update={
            "scripts_needed": False,
            "process_label": "Looking for versioning data",
        })
        return self._issue(session, "read_manifest_version", read_manifest_version)

    def _on_selecting_increment(self, session: Session) -> Transition:
        kinds = self.context.increment_kinds or tuple(kind.value for kind in IncrementKind)
        selection_list = SelectionList(items=build_increment_options(session.manifest_version, kinds))
        if session.terminal_width and session.terminal_height:
            selection_list = selection_list.set_size(session.terminal_width, session.terminal_height)

        session = session.model_copy(update={
            "selection_list": selection_list,
            "process_label": f"Current version {session.manifest_version}",
        })
        return Transition(session)

    def _on_increment_applied(self, session: Session) -> Transition:
        session = session.model_copy(update={
            "process_label": f"Running {' '.join(self.context.bump_command)} {session.selected_increment.value}",
        })
        return self._issue(session, "run_version_bump", run_version_bump)

    def _on_syncing_platform(self, session: Session) -> Transition:
        session = session.model_copy(update={"process_label": "Syncing version with platform files"})
        return self._issue(session, "sync_with_platform", sync_with_platform)

    def _on_done(self, session: Session) -> Transition:
        session = session.model_copy(update={"process_label": "Done", "quitting": True})
        return Transition(session, QUIT)

    # ------------------------------------------------------------------

    def _issue(self, session: Session, name: str, step: Step) -> Transition:
        """Mark a step in flight and build its command against a session snapshot"""
        if session.step_in_flight:
            raise RuntimeError(f"Cannot start {name}: a step is already in flight")

        session = session.model_copy(update={"step_in_flight": True})
        command = Command(name=name, step=step, session=session.snapshot(), context=self.context)
        logger.debug(f"Scheduling step {name} in {session.state.value}")
        return Transition(session, command)
