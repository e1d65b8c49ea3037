from __future__ import annotations

import pytest

from skillcheck_core import config
from skillcheck_core.types import Question, QuestionOption, Test

# the domain class is named Test; keep pytest from collecting it
Test.__test__ = False


def mcq(
    qid: str = "q1",
    text: str = "What does HTML stand for?",
    options: list[tuple[str, str, bool]] | None = None,
) -> Question:
    opts = options or [
        (f"{qid}o1", "HyperText Markup Language", True),
        (f"{qid}o2", "Hyperlinks and Text Markup Language", False),
    ]
    return Question(
        id=qid,
        type="multiple-choice",
        text=text,
        options=tuple(QuestionOption(id=i, text=t, is_correct=c) for i, t, c in opts),
    )


def free_form(qid: str = "q3", text: str = "Describe the difference between let, const and var.") -> Question:
    return Question(id=qid, type="free-form", text=text)


def coding(qid: str = "q5", solution: str | None = "def add(a, b):\n    return a + b") -> Question:
    return Question(
        id=qid,
        type="coding-challenge",
        text="Write a function add(a, b) that returns the sum.",
        language="python",
        starter_code="def add(a, b):\n    pass",
        solution=solution,
    )


def make_test(*questions: Question, test_id: str = "t1") -> Test:
    return Test(id=test_id, title="Unit Test", questions=tuple(questions))


def draft_mcq(n_options: int = 4, correct: int = 1, text: str = "Which keyword declares a constant in JavaScript?") -> dict:
    return {
        "type": "multiple-choice",
        "text": text,
        "options": [
            {"id": f"x{i}", "text": f"option {i}", "isCorrect": i <= correct}
            for i in range(1, n_options + 1)
        ],
    }


def draft_free_form(text: str = "Explain how event bubbling works in the DOM.") -> dict:
    return {"type": "free-form", "text": text, "skillCategory": "technical", "difficulty": "medium"}


@pytest.fixture(autouse=True)
def _llm_log_in_tmp(monkeypatch, tmp_path):
    monkeypatch.setattr(config, "LLM_LOG_PATH", str(tmp_path / "llm_calls.jsonl"))


@pytest.fixture
def html_test() -> Test:
    return make_test(mcq())
