"""
Unit tests for FlowView

Renders to an in-memory Rich console and checks the visible text.
"""

import io

import pytest
from rich.console import Console

from rnrelease.models.session import FieldTarget, FlowState, Session
from rnrelease.models.widgets import IncrementOption, SelectionList, TextInput
from rnrelease.ui.view import FlowView


def render_text(renderable, width=80):
    console = Console(file=io.StringIO(), width=width, color_system=None)
    console.print(renderable)
    return console.file.getvalue()


@pytest.fixture
def view():
    return FlowView()


@pytest.fixture
def options():
    return [
        IncrementOption(kind="patch", preview="1.0.1"),
        IncrementOption(kind="minor", preview="1.1.0"),
        IncrementOption(kind="major", preview="2.0.0"),
    ]


@pytest.mark.unit
class TestFlowView:

    def test_spinner_shows_process_label(self, view):
        output = render_text(view.render(Session(process_label="Check if script exists")))

        assert "Check if script exists" in output

    def test_path_prompt(self, view):
        session = Session(
            scripts_needed=True,
            pending_field_target=FieldTarget.IOS,
            text_field=TextInput(value="/a/Info"),
        )

        output = render_text(view.render(session))

        assert "Location of your Info.plist" in output
        assert "> /a/Info" in output

    def test_empty_prompt_shows_placeholder(self, view):
        session = Session(scripts_needed=True, pending_field_target=FieldTarget.ANDROID)

        output = render_text(view.render(session))

        assert "Location of your build.gradle" in output
        assert "> ..." in output

    def test_increment_list(self, view, options):
        session = Session(
            state=FlowState.SELECTING_INCREMENT,
            manifest_version="1.0.0",
            selection_list=SelectionList(items=options, cursor=1),
        )

        output = render_text(view.render(session))

        assert "What semver increment do you want to do?" in output
        assert "1. patch - 1.0.1" in output
        assert "> 2. minor - 1.1.0" in output
        assert "3. major - 2.0.0" in output
        assert "enter select" in output

    def test_list_rows_fit_width(self, view, options):
        selection_list = SelectionList(items=options).set_size(20, 14)

        output = render_text(view.render_list(selection_list), width=80)

        for line in output.splitlines():
            assert len(line.rstrip()) <= 20

    def test_error_takes_precedence(self, view):
        session = Session(error="no versioning file found", process_label="Looking for versioning data")

        output = render_text(view.render(session))

        assert "no versioning file found" in output
        assert "Looking for versioning data" not in output
