from __future__ import annotations
from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel, Field
import os, typing as t

# ---- Core imports ----
from skillcheck_core import config, flows, llm_bridge
from skillcheck_core.errors import CollaboratorFailure, InvalidQuestionShape
from skillcheck_core.grading import grade
from skillcheck_core.llm_cfg import is_configured
from skillcheck_core.normalizer import normalize
from skillcheck_core.report_html import render_result_html
from skillcheck_core.reporting import serialize_result, serialize_test, to_basic
from skillcheck_core.samples import SAMPLE_TEST_ID, load_sample_test
from skillcheck_core.types import Skill, Test

# in-process only; nothing survives a restart
TESTS: dict[str, Test] = {SAMPLE_TEST_ID: load_sample_test()}

app = FastAPI(title="SkillCheck Pro API")

ALLOWED_ORIGINS = [o.strip() for o in os.getenv("ALLOWED_ORIGINS", "http://localhost:3000").split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=False,
)

@app.exception_handler(CollaboratorFailure)
def _collaborator_failure(_req: Request, exc: CollaboratorFailure):
    return JSONResponse(status_code=502, content={"detail": str(exc), "kind": exc.kind})

@app.exception_handler(InvalidQuestionShape)
def _invalid_question(_req: Request, exc: InvalidQuestionShape):
    return JSONResponse(status_code=422, content={"detail": str(exc), "questionId": exc.question_id})

# ---- Schemas ----
class SkillIn(BaseModel):
    name: str
    category: t.Literal["technical", "soft", "domain-specific", "tooling", "other"]
    importance: t.Literal["critical", "important", "nice-to-have"]
    context: str | None = None

class AuthorReq(BaseModel):
    title: str
    questions: list[dict[str, t.Any]]
    strict: bool = True
    jobTitle: str | None = None
    jobRequirements: str | None = None
    seniority: str | None = None

class GenerateTestReq(BaseModel):
    jobTitle: str
    jobDescription: str
    extractedSkills: list[SkillIn]
    seniority: t.Literal["junior", "mid-level", "senior", "lead"]
    numberOfQuestions: int = Field(default=config.DEFAULT_QUESTION_COUNT)
    assessmentFocus: list[str] | None = None

class SubmitReq(BaseModel):
    answers: dict[str, str] = Field(default_factory=dict)

class ExtractReq(BaseModel):
    jobDescription: str

class JobDescriptionReq(BaseModel):
    jobTitle: str
    seniority: str | None = None

class ProblemSolvingReq(BaseModel):
    answer: str
    jobRequirements: str

class CodeQualityReq(BaseModel):
    codeSnippet: str
    language: str
    jobRequirements: str | None = None
    problemDescription: str | None = None

# ---- Helpers ----
def _get_test(test_id: str) -> Test:
    test = TESTS.get(test_id)
    if test is None:
        raise HTTPException(404, f"test '{test_id}' not found")
    return test

def _store(test: Test) -> dict[str, t.Any]:
    TESTS[test.id] = test
    return serialize_test(test, reveal=True)

def _call(fn: t.Callable[..., t.Any], *args: t.Any, **kwargs: t.Any) -> t.Any:
    try:
        return fn(*args, **kwargs)
    except InvalidQuestionShape:
        raise
    except ValueError as e:
        raise HTTPException(422, str(e))

# ---- Health ----
@app.get("/")
def root():
    return {"status": "ok", "service": "skillcheck-pro-api"}

@app.get("/health")
def health():
    return {
        "llm_backend": llm_bridge.backend_in_use(),
        "llm_config_present": is_configured(),
        "tests_loaded": len(TESTS),
    }

# ---- Tests ----
@app.get("/tests/{test_id}")
def get_test(test_id: str, reveal: bool = Query(False, description="Include correct answers")):
    return serialize_test(_get_test(test_id), reveal=reveal)

@app.post("/tests")
def author_test(req: AuthorReq):
    test = _call(
        normalize, req.questions, title=req.title, strict=req.strict,
        job_title=req.jobTitle, job_requirements=req.jobRequirements, seniority=req.seniority,
    )
    if not test.questions:
        raise HTTPException(422, "test has no valid questions")
    return _store(test)

@app.post("/tests/generate")
def generate_test(req: GenerateTestReq):
    skills = [Skill(**s.model_dump()) for s in req.extractedSkills]
    test = _call(
        flows.create_test_from_skills,
        req.jobTitle, req.jobDescription, skills, req.seniority,
        number_of_questions=req.numberOfQuestions, assessment_focus=req.assessmentFocus,
    )
    return _store(test)

@app.post("/tests/{test_id}/submit")
def submit_test(test_id: str, req: SubmitReq):
    result = grade(_get_test(test_id), req.answers)
    return serialize_result(result)

@app.post("/tests/{test_id}/report", response_class=HTMLResponse)
def report_html(test_id: str, req: SubmitReq):
    test = _get_test(test_id)
    return HTMLResponse(render_result_html(test, grade(test, req.answers)))

# ---- Generative flows ----
@app.post("/skills/extract")
def extract_skills(req: ExtractReq):
    skills = _call(flows.extract_skills, req.jobDescription)
    return {"extractedSkills": to_basic(skills)}

@app.post("/job-descriptions/generate")
def generate_job_description(req: JobDescriptionReq):
    text = _call(flows.generate_job_description, req.jobTitle, req.seniority)
    return {"jobDescription": text}

@app.post("/analyze/problem-solving")
def analyze_problem_solving(req: ProblemSolvingReq):
    out = _call(flows.analyze_problem_solving, req.answer, req.jobRequirements)
    return out.model_dump()

@app.post("/analyze/code")
def analyze_code(req: CodeQualityReq):
    out = _call(
        flows.analyze_code_quality, req.codeSnippet, req.language,
        job_requirements=req.jobRequirements, problem_description=req.problemDescription,
    )
    return out.model_dump()
