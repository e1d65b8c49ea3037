from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Literal, Optional, Tuple

QuestionType = Literal["multiple-choice", "free-form", "coding-challenge"]
SkillCategory = Literal["technical", "soft", "domain-specific", "tooling", "other"]
Importance = Literal["critical", "important", "nice-to-have"]
Difficulty = Literal["easy", "medium", "hard"]
Seniority = Literal["junior", "mid-level", "senior", "lead"]
JDSeniority = Literal["junior", "mid-level", "senior", "lead", "staff", "principal"]
Focus = Literal["technical", "problem-solving", "domain-knowledge", "soft-skills"]

QUESTION_TYPES: Tuple[str, ...] = ("multiple-choice", "free-form", "coding-challenge")
NON_GRADABLE: Tuple[str, ...] = ("free-form", "coding-challenge")
SKILL_CATEGORIES: Tuple[str, ...] = ("technical", "soft", "domain-specific", "tooling", "other")
IMPORTANCE_LEVELS: Tuple[str, ...] = ("critical", "important", "nice-to-have")
DIFFICULTIES: Tuple[str, ...] = ("easy", "medium", "hard")
SENIORITIES: Tuple[str, ...] = ("junior", "mid-level", "senior", "lead")
JD_SENIORITIES: Tuple[str, ...] = SENIORITIES + ("staff", "principal")
FOCUS_AREAS: Tuple[str, ...] = ("technical", "problem-solving", "domain-knowledge", "soft-skills")

# question id -> option id (multiple-choice) or raw text (free-form / coding)
Submission = Dict[str, str]

@dataclass(frozen=True)
class Skill:
    name: str
    category: SkillCategory
    importance: Importance
    context: Optional[str] = None

@dataclass(frozen=True)
class QuestionOption:
    id: str; text: str
    is_correct: bool = False

@dataclass(frozen=True)
class Question:
    id: str; type: QuestionType; text: str
    options: Tuple[QuestionOption, ...] = ()
    skill_category: Optional[str] = None
    difficulty: Optional[Difficulty] = None
    explanation: Optional[str] = None
    language: Optional[str] = None
    starter_code: Optional[str] = None
    solution: Optional[str] = None

    @property
    def correct_options(self) -> Tuple[QuestionOption, ...]:
        return tuple(o for o in self.options if o.is_correct)

@dataclass(frozen=True)
class Test:
    id: str; title: str
    questions: Tuple[Question, ...] = ()
    job_title: Optional[str] = None
    job_requirements: Optional[str] = None
    seniority: Optional[str] = None
    warnings: Tuple[str, ...] = ()

    def question(self, question_id: str) -> Optional[Question]:
        return next((q for q in self.questions if q.id == question_id), None)

@dataclass(frozen=True)
class ResultDetail:
    question_id: str
    question_type: QuestionType
    feedback: str
    is_correct: Optional[bool] = None
    selected_option_id: Optional[str] = None
    correct_option_id: Optional[str] = None
    user_answer: Optional[str] = None
    error: Optional[str] = None

@dataclass(frozen=True)
class Result:
    test_id: str
    score: int
    total_multiple_choice: int
    details: Tuple[ResultDetail, ...] = field(default_factory=tuple)
    has_non_gradable: bool = False

    @property
    def percentage(self) -> int:
        if self.total_multiple_choice <= 0:
            return 0
        return int(round(100.0 * self.score / self.total_multiple_choice))
