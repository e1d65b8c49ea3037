from __future__ import annotations
from typing import List, Mapping, Optional, Tuple
import logging

from .errors import MalformedTest
from .types import NON_GRADABLE, Question, Result, ResultDetail, Test

log = logging.getLogger(__name__)

FEEDBACK_CORRECT = "Correct!"
FEEDBACK_INCORRECT = "Incorrect. Review the correct answer highlighted above."
FEEDBACK_FREE_FORM = "Answer recorded. Free-form answers require manual review or AI analysis."
FEEDBACK_CODING = ("Code recorded. Compare it with the sample solution or request an AI "
                   "code-quality analysis.")
FEEDBACK_CODING_NO_SOLUTION = "Code recorded. Request an AI code-quality analysis for review."
FEEDBACK_MALFORMED = "This question could not be graded."


def _answer(submission: Mapping[str, object], qid: str) -> Optional[str]:
    raw = submission.get(qid)
    if raw is None:
        return None
    s = str(raw)
    return s if s.strip() else None


def _correct_option_id(q: Question) -> str:
    correct = q.correct_options
    if len(correct) != 1:
        raise MalformedTest(q.id, f"expected exactly one correct option, found {len(correct)}")
    return correct[0].id


def _grade_mcq(q: Question, selected: Optional[str]) -> Tuple[ResultDetail, bool]:
    try:
        correct_id = _correct_option_id(q)
    except MalformedTest as e:
        log.warning("malformed test: %s", e)
        detail = ResultDetail(
            question_id=q.id, question_type=q.type, feedback=FEEDBACK_MALFORMED,
            selected_option_id=selected, error=e.reason,
        )
        return detail, False
    ok = selected is not None and selected == correct_id
    detail = ResultDetail(
        question_id=q.id, question_type=q.type,
        feedback=FEEDBACK_CORRECT if ok else FEEDBACK_INCORRECT,
        is_correct=ok, selected_option_id=selected, correct_option_id=correct_id,
    )
    return detail, ok


def _grade_open(q: Question, text: Optional[str]) -> ResultDetail:
    if q.type == "coding-challenge":
        feedback = FEEDBACK_CODING if q.solution else FEEDBACK_CODING_NO_SOLUTION
    else:
        feedback = FEEDBACK_FREE_FORM
    return ResultDetail(question_id=q.id, question_type=q.type, feedback=feedback, user_answer=text)


def grade(test: Test, submission: Mapping[str, object]) -> Result:
    """
    Score a submission against a test.

    One detail per question, in test order, whether or not the submission has
    an entry for it. Only multiple-choice questions are scored; free-form and
    coding answers are stored verbatim with ``is_correct`` left as None.
    A question with no single correct option degrades to an error detail.
    """
    submission = submission or {}
    score = 0
    total_mc = 0
    details: List[ResultDetail] = []
    for q in test.questions:
        if q.type == "multiple-choice":
            total_mc += 1
            detail, ok = _grade_mcq(q, _answer(submission, q.id))
            score += int(ok)
        else:
            detail = _grade_open(q, _answer(submission, q.id))
        details.append(detail)
    has_open = any(q.type in NON_GRADABLE for q in test.questions)
    log.debug("graded test=%s score=%d/%d", test.id, score, total_mc)
    return Result(
        test_id=test.id,
        score=score,
        total_multiple_choice=total_mc,
        details=tuple(details),
        has_non_gradable=has_open,
    )


def percentage(result: Result) -> int:
    return result.percentage
