"""Exception taxonomy shared by the normalizer, grader and LLM flows."""

from __future__ import annotations

from typing import Optional


class SkillCheckError(Exception):
    """Base class for every error raised by skillcheck_core."""


class InvalidQuestionShape(SkillCheckError, ValueError):
    """A question violates the structural rules for its type."""

    def __init__(self, reason: str, question_id: Optional[str] = None) -> None:
        self.reason = reason
        self.question_id = question_id
        label = f"question {question_id}: " if question_id else ""
        super().__init__(f"{label}{reason}")


class MalformedTest(SkillCheckError):
    """Discovered while grading: a question cannot be scored as defined."""

    def __init__(self, question_id: str, reason: str) -> None:
        self.question_id = question_id
        self.reason = reason
        super().__init__(f"question {question_id}: {reason}")


class GenerationShapeMismatch(UserWarning):
    """The generator returned a different number of questions than requested.

    Reported, never raised: the generated set is used as-is.
    """

    def __init__(self, requested: int, generated: int) -> None:
        self.requested = requested
        self.generated = generated
        super().__init__(
            f"Requested {requested} questions but the generator returned {generated}."
        )


class CollaboratorFailure(SkillCheckError):
    """The generative backend failed or returned nothing usable."""

    def __init__(self, kind: str, reason: str) -> None:
        self.kind = kind
        self.reason = reason
        super().__init__(f"{kind}: {reason}")
