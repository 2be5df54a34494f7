"""
Widget state models for the interactive prompt

Plain data records for the single-line text input and the increment
selection list. Each widget reports its current value and applies a key,
returning an updated copy. Rendering lives in rnrelease.ui.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

# Margin around the list view: (vertical, horizontal) cells on each side
LIST_MARGIN = (1, 2)
DEFAULT_LIST_WIDTH = 60
DEFAULT_LIST_HEIGHT = 14
LIST_TITLE = "What semver increment do you want to do?"

UP_KEYS = ("up", "k")
DOWN_KEYS = ("down", "j")


class IncrementOption(BaseModel):
    """Selection list item: an increment kind and its predicted version"""

    model_config = ConfigDict(frozen=True)

    kind: str
    preview: str

    @property
    def title(self) -> str:
        return self.kind

    @property
    def description(self) -> str:
        return self.preview


class TextInput(BaseModel):
    """Single-line text input"""

    value: str = ""
    placeholder: str = "..."
    char_limit: int = 156

    def update(self, key: str) -> "TextInput":
        """Apply one key press and return the updated input"""
        if key == "backspace":
            return self.model_copy(update={"value": self.value[:-1]})

        if key == "space":
            key = " "

        if len(key) == 1 and key.isprintable() and len(self.value) < self.char_limit:
            return self.model_copy(update={"value": self.value + key})

        return self

    def clear(self) -> "TextInput":
        return self.model_copy(update={"value": ""})


class SelectionList(BaseModel):
    """
    Vertical list with a cursor

    Only cursor movement is handled here; the confirm key is interpreted by
    the flow controller, which reads selected_item().
    """

    title: str = LIST_TITLE
    items: List[IncrementOption] = Field(default_factory=list)
    cursor: int = 0
    width: int = DEFAULT_LIST_WIDTH
    height: int = DEFAULT_LIST_HEIGHT

    def update(self, key: str) -> "SelectionList":
        """Apply one key press and return the updated list"""
        if not self.items:
            return self

        if key in UP_KEYS:
            cursor = max(0, self.cursor - 1)
        elif key in DOWN_KEYS:
            cursor = min(len(self.items) - 1, self.cursor + 1)
        elif key in ("home", "g"):
            cursor = 0
        elif key in ("end", "G"):
            cursor = len(self.items) - 1
        else:
            return self

        return self.model_copy(update={"cursor": cursor})

    def selected_item(self) -> Optional[IncrementOption]:
        if 0 <= self.cursor < len(self.items):
            return self.items[self.cursor]
        return None

    def set_size(self, width: int, height: int) -> "SelectionList":
        """Fit the list into a terminal of the given size, minus the view margin"""
        top_bottom, left_right = LIST_MARGIN
        return self.model_copy(update={
            "width": max(1, width - 2 * left_right),
            "height": max(1, height - 2 * top_bottom),
        })

    def page_size(self) -> int:
        # title line, blank line and help line are not items
        return max(1, self.height - 3)

    def visible_range(self) -> range:
        """Indexes of the items on the page holding the cursor"""
        size = self.page_size()
        start = (self.cursor // size) * size
        return range(start, min(start + size, len(self.items)))
