"""Question pipeline for the DrupalVM generator.

Key classes:
    QuestionSpec      - One prompt with its default, validation and visibility
    QuestionPipeline  - Ordered resolution into an immutable answer set
    RichPrompter      - Interactive prompting on a Rich console
"""

from .catalog import build_questions
from .models import (
    AnswerValidationError,
    AnswerView,
    Choice,
    QuestionConfigError,
    QuestionKind,
    QuestionSpec,
)
from .pipeline import QuestionPipeline
from .prompter import Prompter, RichPrompter
from .validators import valid_cpu_count, valid_php_memory_limit

__all__ = [
    # Model
    "QuestionSpec",
    "QuestionKind",
    "Choice",
    "AnswerView",
    "QuestionConfigError",
    "AnswerValidationError",
    # Resolution
    "QuestionPipeline",
    "Prompter",
    "RichPrompter",
    "build_questions",
    # Validators
    "valid_cpu_count",
    "valid_php_memory_limit",
]
