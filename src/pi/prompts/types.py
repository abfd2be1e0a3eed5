"""Prompt snapshot types consumed by the render templates.

The prompt engines that own keystroke handling and validation live outside
this package.  Each one exposes a read-only snapshot matching one of the
protocols below and asks a template for a frame on every state change.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Literal, Protocol, Sequence, TypeVar

PromptState = Literal["initial", "active", "error", "cancel", "submit"]

V = TypeVar("V")


@dataclass
class Option(Generic[V]):
    """A selectable value.  Identity is by ``value``; label and hint are display-only.

    ``group`` is ``True`` for a group header and the group's name for an item
    belonging to a group.
    """

    value: V
    label: str | None = None
    hint: str | None = None
    group: str | bool | None = None

    @property
    def display_label(self) -> str:
        return self.label if self.label is not None else str(self.value)

    @property
    def is_group_header(self) -> bool:
        return self.group is True

    @property
    def is_group_item(self) -> bool:
        return isinstance(self.group, str)


class PromptView(Protocol):
    state: PromptState
    error: str


class TextPromptView(PromptView, Protocol):
    value: str | None
    value_with_cursor: str


class PasswordPromptView(PromptView, Protocol):
    value: str | None
    value_with_cursor: str
    masked: str


class ConfirmPromptView(PromptView, Protocol):
    value: bool


class SelectPromptView(PromptView, Protocol):
    options: Sequence[Option[Any]]
    cursor: int
    value: Any


class MultiSelectPromptView(PromptView, Protocol):
    options: Sequence[Option[Any]]
    cursor: int
    value: Sequence[Any]


class GroupMultiSelectPromptView(MultiSelectPromptView, Protocol):
    def is_group_selected(self, group: str) -> bool: ...
