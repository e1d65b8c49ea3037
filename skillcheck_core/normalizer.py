# skillcheck_core/normalizer.py
"""Turns hand-authored or generated question drafts into a usable Test.

Ids are purely positional: ``q{n}`` for questions and ``q{n}o{m}`` for options,
both 1-based. Any insertion or removal therefore needs a full re-run of
``assign_canonical_ids``.
"""
from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Union
import logging, uuid

from . import config
from .errors import GenerationShapeMismatch, InvalidQuestionShape
from .types import DIFFICULTIES, QUESTION_TYPES, Question, QuestionOption, Test

log = logging.getLogger(__name__)

Draft = Union[Question, Mapping[str, Any]]


@dataclass(frozen=True)
class CountReconciliation:
    questions: tuple[Question, ...]
    requested: int
    generated: int
    warning: Optional[GenerationShapeMismatch] = None


def _pick(d: Mapping[str, Any], *keys: str) -> Any:
    for k in keys:
        if k in d and d[k] is not None:
            return d[k]
    return None


def _opt_str(v: Any) -> Optional[str]:
    if v is None:
        return None
    s = str(v).strip()
    return s or None


def _flag(v: Any) -> bool:
    # generators sometimes send "true"/"false" strings
    if v is None or isinstance(v, bool):
        return bool(v)
    if isinstance(v, str) and v.strip().lower() in ("true", "false"):
        return v.strip().lower() == "true"
    raise InvalidQuestionShape(f"isCorrect must be a boolean, got {v!r}")


def option_from_draft(raw: Any) -> QuestionOption:
    if isinstance(raw, QuestionOption):
        return raw
    if isinstance(raw, str):
        return QuestionOption(id="", text=raw)
    if not isinstance(raw, Mapping):
        raise InvalidQuestionShape(f"option must be an object, got {type(raw).__name__}")
    return QuestionOption(
        id=str(raw.get("id") or ""),
        text=str(raw.get("text") or ""),
        is_correct=_flag(_pick(raw, "isCorrect", "is_correct")),
    )


def question_from_draft(raw: Draft) -> Question:
    """Build a Question from a draft mapping (camelCase or snake_case keys)."""
    if isinstance(raw, Question):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidQuestionShape(f"question must be an object, got {type(raw).__name__}")
    qtype = str(raw.get("type") or "").strip().lower()
    qid = str(raw.get("id") or "")
    if qtype not in QUESTION_TYPES:
        raise InvalidQuestionShape(f"unknown question type {qtype!r}", qid or None)
    difficulty = _opt_str(raw.get("difficulty"))
    if difficulty is not None:
        difficulty = difficulty.lower()
        if difficulty not in DIFFICULTIES:
            raise InvalidQuestionShape(f"unknown difficulty {difficulty!r}", qid or None)
    raw_options = raw.get("options")
    if raw_options is None:
        raw_options = ()
    if not isinstance(raw_options, (list, tuple)):
        raise InvalidQuestionShape("options must be a list", qid or None)
    try:
        options = tuple(option_from_draft(o) for o in raw_options)
    except InvalidQuestionShape as e:
        raise InvalidQuestionShape(e.reason, qid or None) from e
    return Question(
        id=qid,
        type=qtype,  # type: ignore[arg-type]
        text=str(raw.get("text") or "").strip(),
        options=options,
        skill_category=_opt_str(_pick(raw, "skillCategory", "skill_category")),
        difficulty=difficulty,  # type: ignore[arg-type]
        explanation=_opt_str(raw.get("explanation")),
        language=_opt_str(raw.get("language")),
        starter_code=_pick(raw, "starterCode", "starter_code"),
        solution=raw.get("solution"),
    )


def assign_canonical_ids(questions: Iterable[Question]) -> tuple[Question, ...]:
    out: List[Question] = []
    for qi, q in enumerate(questions, start=1):
        qid = f"q{qi}"
        if q.type == "multiple-choice":
            opts = tuple(replace(o, id=f"{qid}o{oi}") for oi, o in enumerate(q.options, start=1))
        else:
            opts = q.options
        out.append(replace(q, id=qid, options=opts))
    return tuple(out)


def validate_structure(question: Question) -> Question:
    """Raise InvalidQuestionShape unless the question's shape matches its type."""
    qid = question.id or None
    if len((question.text or "").strip()) < config.QUESTION_TEXT_MIN:
        raise InvalidQuestionShape(
            f"question text must be at least {config.QUESTION_TEXT_MIN} characters", qid
        )
    n = len(question.options)
    if question.type == "multiple-choice":
        if not config.OPTIONS_MIN <= n <= config.OPTIONS_MAX:
            raise InvalidQuestionShape(
                f"multiple-choice needs {config.OPTIONS_MIN}-{config.OPTIONS_MAX} options, got {n}", qid
            )
        if any(not (o.text or "").strip() for o in question.options):
            raise InvalidQuestionShape("option text must not be empty", qid)
        correct = len(question.correct_options)
        if correct != 1:
            raise InvalidQuestionShape(
                f"multiple-choice needs exactly one correct option, got {correct}", qid
            )
    elif n:
        raise InvalidQuestionShape(f"{question.type} questions must not have options", qid)
    return question


def reconcile_count(generated: Sequence[Question], requested: int) -> CountReconciliation:
    qs = tuple(generated)
    warning = None
    if len(qs) != requested:
        warning = GenerationShapeMismatch(requested, len(qs))
        log.warning("generator count mismatch: requested=%d generated=%d", requested, len(qs))
    return CountReconciliation(questions=qs, requested=requested, generated=len(qs), warning=warning)


def normalize(
    drafts: Iterable[Draft],
    *,
    title: str = "Untitled Test",
    test_id: Optional[str] = None,
    requested: Optional[int] = None,
    strict: Optional[bool] = None,
    job_title: Optional[str] = None,
    job_requirements: Optional[str] = None,
    seniority: Optional[str] = None,
) -> Test:
    """Validate drafts and return a Test with canonical ids.

    Lenient mode drops a draft that fails validation and records why in
    ``Test.warnings``; strict mode lets the first InvalidQuestionShape escape.
    """
    strict = config.STRICT_NORMALIZE if strict is None else strict
    kept: List[Question] = []
    warnings: List[str] = []
    for pos, raw in enumerate(drafts, start=1):
        try:
            q = validate_structure(question_from_draft(raw))
        except InvalidQuestionShape as e:
            if strict:
                raise
            log.warning("dropping draft #%d: %s", pos, e.reason)
            warnings.append(f"Draft #{pos} dropped: {e.reason}")
            continue
        kept.append(q)

    if requested is not None:
        rec = reconcile_count(kept, requested)
        if rec.warning is not None:
            warnings.append(str(rec.warning))

    return Test(
        id=test_id or uuid.uuid4().hex,
        title=(title or "").strip() or "Untitled Test",
        questions=assign_canonical_ids(kept),
        job_title=job_title,
        job_requirements=job_requirements,
        seniority=seniority,
        warnings=tuple(warnings),
    )
