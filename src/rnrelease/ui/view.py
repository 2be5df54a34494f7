"""
Rich rendering of the session

The view is recomputed from the session after every message: a path prompt
while collecting platform file locations, the increment list while
selecting, otherwise a spinner with the current process label.
"""

from rich.console import Group, RenderableType
from rich.padding import Padding
from rich.spinner import Spinner
from rich.style import Style
from rich.text import Text

from rnrelease.models.session import FIELD_PROMPTS, Session
from rnrelease.models.widgets import SelectionList, TextInput

DEFAULT_PRIMARY_COLOR = "#D19A66"
HELP_TEXT = "↑/k up • ↓/j down • enter select • ctrl+c quit"


class FlowView:
    """Renders a Session into a Rich renderable"""

    def __init__(self, primary_color: str = DEFAULT_PRIMARY_COLOR):
        self.primary = Style(color=primary_color)
        self.spinner = Spinner("line", style=self.primary)

    def render(self, session: Session) -> RenderableType:
        if session.error:
            return Padding(Text(session.error, style="bold red"), (1, 3))

        if session.is_collecting_path():
            return self.render_prompt(FIELD_PROMPTS[session.pending_field_target], session.text_field)

        if session.is_selecting():
            return self.render_list(session.selection_list)

        self.spinner.update(text=Text(session.process_label, style=self.primary))
        return Padding(self.spinner, (1, 3))

    def render_prompt(self, prompt: str, text_field: TextInput) -> RenderableType:
        if text_field.value:
            field_text = Text(text_field.value, style=self.primary)
        else:
            field_text = Text(text_field.placeholder, style="dim")

        return Group(
            Padding(Text(prompt, style=self.primary), (1, 3, 0, 3)),
            Text.assemble("> ", field_text, ("█", "blink")),
        )

    def render_list(self, selection_list: SelectionList) -> RenderableType:
        lines = [Text(selection_list.title, style=self.primary), Text("")]

        for index in selection_list.visible_range():
            item = selection_list.items[index]
            label = f"{index + 1}. {item.title} - {item.description}"
            if index == selection_list.cursor:
                lines.append(Text("  > " + label, style=self.primary + Style(bold=True)))
            else:
                lines.append(Text("    " + label, style=self.primary))

        lines.append(Text(""))
        lines.append(Text("    " + HELP_TEXT, style="dim"))

        for line in lines:
            line.truncate(selection_list.width, overflow="ellipsis")

        return Padding(Group(*lines), (1, 2))
