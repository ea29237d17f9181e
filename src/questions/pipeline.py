"""Ordered, conditional question pipeline.

Questions are evaluated strictly top to bottom. For each one the pipeline
checks visibility, resolves the default, obtains raw input (from a prompter or
a pre-supplied answer map), coerces it to the question's type and validates
it. Catalog inconsistencies are detected when the pipeline is built, never
halfway through a run.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from src.utils import print_warning

from .models import (
    AnswerValidationError,
    AnswerValue,
    AnswerView,
    QuestionConfigError,
    QuestionKind,
    QuestionSpec,
    freeze_answers,
)
from .prompter import Prompter
from .validators import coerce_bool, split_selection


class QuestionPipeline:
    """Resolves an ordered list of ``QuestionSpec`` into an answer set.

    Interactive runs re-prompt until the input is valid, with no retry
    limit. Non-interactive runs (``resolve``) raise ``AnswerValidationError``
    on the first rejected answer.
    """

    def __init__(self, questions: Iterable[QuestionSpec]) -> None:
        self.questions: tuple[QuestionSpec, ...] = tuple(questions)
        self._check_catalog()

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(q.key for q in self.questions)

    # -- Construction-time checks -------------------------------------------

    def _check_catalog(self) -> None:
        seen: set[str] = set()
        for question in self.questions:
            if question.key in seen:
                raise QuestionConfigError(f"duplicate question key '{question.key}'")

            for dependency in question.depends_on:
                if dependency == question.key:
                    raise QuestionConfigError(f"'{question.key}' depends on itself")
                if dependency not in seen:
                    raise QuestionConfigError(
                        f"'{question.key}' depends on '{dependency}', which is not "
                        "declared before it"
                    )

            if question.kind in (QuestionKind.CHOICE, QuestionKind.MULTI_SELECT):
                if not question.choices:
                    raise QuestionConfigError(f"'{question.key}' has no choices")
            if question.kind is QuestionKind.CHOICE and not callable(question.default):
                if question.default not in question.choice_values:
                    raise QuestionConfigError(
                        f"default {question.default!r} of '{question.key}' is not one of "
                        f"{list(question.choice_values)}"
                    )
            self._dry_run(question)
            seen.add(question.key)

    @staticmethod
    def _dry_run(question: QuestionSpec) -> None:
        # Undeclared reads raise QuestionConfigError here; declared-but-unanswered
        # keys surface as KeyError and are fine.
        empty = AnswerView({}, question.depends_on)
        for func in (question.visible, question.default):
            if callable(func):
                try:
                    func(empty)
                except KeyError:
                    pass

    # -- Typing ---------------------------------------------------------------

    def _coerce(self, question: QuestionSpec, raw: Any) -> AnswerValue | None:
        """Turn raw input into the question's value type, or ``None`` if impossible."""
        if question.kind is QuestionKind.BOOLEAN:
            return coerce_bool(raw)
        if question.kind is QuestionKind.MULTI_SELECT:
            if not isinstance(raw, Iterable):
                return None
            return split_selection(raw)

        value = str(raw).strip()
        if question.kind is QuestionKind.CHOICE and value not in question.choice_values:
            return None
        return value

    def _accept(self, question: QuestionSpec, raw: Any) -> AnswerValue | None:
        value = self._coerce(question, raw)
        if value is None:
            return None
        if question.validate is not None and not question.validate(value):
            return None
        return value

    # -- Resolution -----------------------------------------------------------

    def ask(self, prompter: Prompter) -> Mapping[str, AnswerValue]:
        """Interactively resolve every visible question."""
        answers: dict[str, AnswerValue] = {}
        for question in self.questions:
            view = AnswerView(answers, question.depends_on)
            if not question.is_visible(view):
                continue

            default = question.resolve_default(view)
            while True:
                raw = prompter.ask(question, default)
                value = self._accept(question, raw)
                if value is not None:
                    break
                prompter.reject(question, raw)
            answers[question.key] = value

        return freeze_answers(answers)

    def resolve(self, supplied: Mapping[str, Any]) -> Mapping[str, AnswerValue]:
        """Resolve from a pre-supplied answer map, applying the same rules.

        Missing keys take their default. Answers supplied for questions that
        turn out to be invisible are dropped.

        Raises:
            AnswerValidationError: If a supplied or default value is rejected.
        """
        unknown = sorted(set(supplied) - set(self.keys))
        if unknown:
            print_warning(f"Ignoring unknown answers: {', '.join(unknown)}")

        answers: dict[str, AnswerValue] = {}
        for question in self.questions:
            view = AnswerView(answers, question.depends_on)
            if not question.is_visible(view):
                continue

            if question.key in supplied:
                raw = supplied[question.key]
            else:
                raw = question.resolve_default(view)

            value = self._accept(question, raw)
            if value is None:
                raise AnswerValidationError(question.key, raw)
            answers[question.key] = value

        return freeze_answers(answers)
