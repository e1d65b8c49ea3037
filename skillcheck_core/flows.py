"""LLM-backed recruiter flows.

Each flow checks its inputs, renders a prompt through ``llm_bridge.generate``
and validates the reply against a pydantic schema. Bad input raises
``ValueError``; a reply that does not fit the schema raises
``CollaboratorFailure`` so callers can ask the user to resubmit.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, Field, ValidationError, field_validator

from . import config, llm_bridge
from .errors import CollaboratorFailure
from .normalizer import normalize
from .types import FOCUS_AREAS, JD_SENIORITIES, SENIORITIES, Skill, SkillCategory, Importance, Test

log = logging.getLogger(__name__)


class SkillOut(BaseModel):
    name: str = Field(min_length=1)
    category: SkillCategory
    importance: Importance
    context: Optional[str] = None

    @field_validator("category", "importance", mode="before")
    @classmethod
    def _lower(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v


class ExtractSkillsOut(BaseModel):
    extractedSkills: List[SkillOut]


class JobDescriptionOut(BaseModel):
    jobDescription: str = Field(min_length=config.GENERATED_JD_MIN)


class CreateTestOut(BaseModel):
    testTitle: str = "Generated Skill Assessment"
    questions: List[Any]  # each entry is checked by the normalizer


class ProblemSolvingAnalysis(BaseModel):
    problemSolvingApproach: str
    efficiencyAssessment: str
    areasForImprovement: str


class CodeQualityAnalysis(BaseModel):
    functionalityAssessment: str
    readabilityScore: float
    maintainabilityScore: float
    efficiencyAssessment: str
    bestPracticesAdherence: str
    securityVulnerabilities: List[str] = Field(default_factory=list)
    suggestionsForImprovement: List[str] = Field(default_factory=list)
    overallQualitySummary: str

    @field_validator("readabilityScore", "maintainabilityScore")
    @classmethod
    def _clamp(cls, v: float) -> float:
        return max(0.0, min(config.CODE_SCORE_MAX, float(v)))


def _parse(kind: str, model: type[BaseModel], data: Dict[str, Any]) -> Any:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise CollaboratorFailure(kind, f"reply did not match the expected shape: {e.error_count()} error(s)") from e


def extract_skills(job_description: str) -> List[Skill]:
    text = (job_description or "").strip()
    if len(text) < config.JOB_DESCRIPTION_MIN:
        raise ValueError(f"Job description must be at least {config.JOB_DESCRIPTION_MIN} characters.")
    data = llm_bridge.generate("extract-skills", {"job_description": text})
    out = _parse("extract-skills", ExtractSkillsOut, data)
    return [Skill(name=s.name.strip(), category=s.category, importance=s.importance, context=s.context)
            for s in out.extractedSkills]


def generate_job_description(job_title: str, seniority: Optional[str] = None) -> str:
    title = (job_title or "").strip()
    if len(title) < config.JOB_TITLE_MIN:
        raise ValueError("Job title must be specified.")
    if seniority is not None and seniority not in JD_SENIORITIES:
        raise ValueError(f"Unknown seniority {seniority!r}.")
    seniority_line = f"Seniority Level: {seniority}\n" if seniority else ""
    data = llm_bridge.generate(
        "generate-job-description", {"job_title": title, "seniority_line": seniority_line}
    )
    return _parse("generate-job-description", JobDescriptionOut, data).jobDescription


def _skill_lines(skills: Sequence[Skill]) -> str:
    lines = []
    for s in skills:
        ctx = f" Context: {s.context}" if s.context else ""
        lines.append(f"- {s.name} ({s.category}, Importance: {s.importance}){ctx}")
    return "\n".join(lines)


def create_test_from_skills(
    job_title: str,
    job_description: str,
    skills: Sequence[Skill],
    seniority: str,
    number_of_questions: int = config.DEFAULT_QUESTION_COUNT,
    assessment_focus: Optional[Sequence[str]] = None,
) -> Test:
    if not skills:
        raise ValueError("Cannot generate test without extracted skills.")
    if seniority not in SENIORITIES:
        raise ValueError(f"Unknown seniority {seniority!r}.")
    if not config.QUESTION_COUNT_MIN <= int(number_of_questions) <= config.QUESTION_COUNT_MAX:
        raise ValueError(
            f"Number of questions must be between {config.QUESTION_COUNT_MIN} and {config.QUESTION_COUNT_MAX}."
        )
    focus = list(assessment_focus or [])
    bad = [f for f in focus if f not in FOCUS_AREAS]
    if bad:
        raise ValueError(f"Unknown assessment focus: {', '.join(bad)}")
    focus_line = f"- Prioritize questions focusing on: {', '.join(focus)}.\n" if focus else ""

    data = llm_bridge.generate("create-test", {
        "job_title": job_title,
        "job_description": job_description,
        "seniority": seniority,
        "skills": _skill_lines(skills),
        "number_of_questions": int(number_of_questions),
        "focus_line": focus_line,
    })
    out = _parse("create-test", CreateTestOut, data)
    test = normalize(
        out.questions,
        title=out.testTitle,
        requested=int(number_of_questions),
        strict=False,
        job_title=job_title,
        job_requirements=job_description,
        seniority=seniority,
    )
    if not test.questions:
        raise CollaboratorFailure("create-test", "no usable questions were generated")
    log.info("generated test %s with %d questions", test.id, len(test.questions))
    return test


def analyze_problem_solving(answer: str, job_requirements: str) -> ProblemSolvingAnalysis:
    if not (answer or "").strip():
        raise ValueError("Answer must not be empty.")
    data = llm_bridge.generate(
        "analyze-problem-solving", {"answer": answer, "job_requirements": job_requirements or ""}
    )
    return _parse("analyze-problem-solving", ProblemSolvingAnalysis, data)


def analyze_code_quality(
    code_snippet: str,
    language: str,
    job_requirements: Optional[str] = None,
    problem_description: Optional[str] = None,
) -> CodeQualityAnalysis:
    if len((code_snippet or "").strip()) < config.CODE_SNIPPET_MIN:
        raise ValueError("Code snippet is too short for meaningful analysis.")
    if not (language or "").strip():
        raise ValueError("Programming language must be specified.")
    problem_block = f"\nProblem Description:\n{problem_description}\n" if problem_description else ""
    requirements_block = (f"\nRelevant Job Requirements/Standards:\n{job_requirements}\n"
                          if job_requirements else "")
    data = llm_bridge.generate("analyze-code-quality", {
        "code_snippet": code_snippet,
        "language": language.strip(),
        "problem_block": problem_block,
        "requirements_block": requirements_block,
    })
    return _parse("analyze-code-quality", CodeQualityAnalysis, data)
