"""Data model for the question pipeline.

A ``QuestionSpec`` describes one prompt: its kind, choices, default and the
optional validation and visibility rules. Default and visibility callables
receive an ``AnswerView`` limited to the keys the question declares in
``depends_on``; every such key must belong to an earlier question.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Union

AnswerValue = Union[str, bool, frozenset]


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class QuestionConfigError(Exception):
    """Raised when a question catalog is internally inconsistent."""


class AnswerValidationError(Exception):
    """Raised when a pre-supplied answer fails its question's rules."""

    def __init__(self, key: str, value: Any, reason: str = "invalid value") -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Answer for '{key}' rejected ({reason}): {value!r}")


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class QuestionKind(str, Enum):
    """How a question is asked and how its answer is typed."""

    CHOICE = "choice"
    TEXT = "text"
    BOOLEAN = "boolean"
    MULTI_SELECT = "multi_select"


# ---------------------------------------------------------------------------
# Question definitions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Choice:
    """One option of a multi-select question."""

    value: str
    selected: bool = False


@dataclass(frozen=True)
class QuestionSpec:
    """A single entry of the question pipeline."""

    key: str
    kind: QuestionKind
    prompt: str
    choices: tuple[Any, ...] = ()
    default: Any = None
    validate: Callable[[Any], bool] | None = None
    visible: Callable[["AnswerView"], bool] | None = None
    depends_on: tuple[str, ...] = field(default=())

    @property
    def choice_values(self) -> tuple[str, ...]:
        """Plain option values, whatever the choice representation."""
        return tuple(c.value if isinstance(c, Choice) else str(c) for c in self.choices)

    def resolve_default(self, answers: "AnswerView") -> Any:
        """Return the default value, calling it when it is a function of answers."""
        if self.kind is QuestionKind.MULTI_SELECT and self.default is None:
            return frozenset(c.value for c in self.choices if isinstance(c, Choice) and c.selected)
        if callable(self.default):
            return self.default(answers)
        return self.default

    def is_visible(self, answers: "AnswerView") -> bool:
        if self.visible is None:
            return True
        return bool(self.visible(answers))


# ---------------------------------------------------------------------------
# Answer containers
# ---------------------------------------------------------------------------


class AnswerView(Mapping[str, AnswerValue]):
    """Read-only window onto the answers a question is allowed to see.

    Reading a key outside ``allowed`` is a catalog defect and raises
    ``QuestionConfigError``. Allowed keys whose question was skipped read as
    absent (``get`` returns the fallback, ``[]`` raises ``KeyError``).
    """

    def __init__(self, answers: Mapping[str, AnswerValue], allowed: tuple[str, ...]) -> None:
        self._answers = answers
        self._allowed = frozenset(allowed)

    def _check(self, key: str) -> None:
        if key not in self._allowed:
            raise QuestionConfigError(f"undeclared dependency on '{key}'")

    def __getitem__(self, key: str) -> AnswerValue:
        self._check(key)
        return self._answers[key]

    def get(self, key: str, default: Any = None) -> Any:  # type: ignore[override]
        self._check(key)
        return self._answers.get(key, default)

    def __contains__(self, key: object) -> bool:
        if isinstance(key, str):
            self._check(key)
        return key in self._answers

    def __iter__(self) -> Iterator[str]:
        return (key for key in self._answers if key in self._allowed)

    def __len__(self) -> int:
        return sum(1 for _ in self)


def freeze_answers(answers: Mapping[str, AnswerValue]) -> Mapping[str, AnswerValue]:
    """Return an immutable snapshot of *answers*."""
    return MappingProxyType(dict(answers))
