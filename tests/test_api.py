from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from skillcheck_core import llm_bridge
from skillcheck_core.errors import CollaboratorFailure


@pytest.fixture
def client(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("LLM_BACKEND", raising=False)
    from api.app import app
    return TestClient(app)


def test_health_reports_no_backend(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["llm_backend"] == "none"
    assert body["llm_config_present"] is False


def test_health_reads_llm_config_file(client, monkeypatch, tmp_path):
    for key in ("OPENAI_API_KEY", "LLM_MODEL"):
        monkeypatch.delenv(key, raising=False)
    (tmp_path / ".llm_config.json").write_text(
        '{"LLM_BACKEND": "openai", "OPENAI_API_KEY": "sk-x"}', encoding="utf-8"
    )
    body = client.get("/health").json()
    assert body["llm_backend"] == "openai"
    assert body["llm_config_present"] is True


def test_sample_test_hides_answers(client):
    body = client.get("/tests/sample").json()

    assert body["title"] == "Sample Web Development Basics Test"
    assert [q["id"] for q in body["questions"]] == ["q1", "q2", "q3", "q4"]
    assert all("isCorrect" not in o for o in body["questions"][0]["options"])
    assert "options" not in body["questions"][2]

    revealed = client.get("/tests/sample", params={"reveal": True}).json()
    assert revealed["questions"][0]["options"][0]["isCorrect"] is True


def test_submit_sample(client):
    resp = client.post("/tests/sample/submit", json={"answers": {"q1": "q1o1", "q2": "q2o3", "q4": "q4o2"}})
    assert resp.status_code == 200
    body = resp.json()
    assert body["score"] == 3
    assert body["totalMultipleChoice"] == 3
    assert body["percentage"] == 100
    assert body["hasNonGradable"] is True
    assert len(body["details"]) == 4
    assert "isCorrect" not in body["details"][2]


def test_unknown_test_is_404(client):
    assert client.get("/tests/nope").status_code == 404
    assert client.post("/tests/nope/submit", json={"answers": {}}).status_code == 404


def test_author_and_take_test(client):
    payload = {
        "title": "Git Basics",
        "questions": [
            {"type": "multiple-choice", "text": "Which command creates a new branch?",
             "options": [{"text": "git branch feature", "isCorrect": True}, {"text": "git push"}]},
            {"type": "free-form", "text": "Explain the difference between merge and rebase."},
        ],
    }
    created = client.post("/tests", json=payload)
    assert created.status_code == 200
    test = created.json()
    assert [q["id"] for q in test["questions"]] == ["q1", "q2"]

    result = client.post(f"/tests/{test['id']}/submit", json={"answers": {"q1": "q1o1", "q2": "Rebase rewrites history."}})
    details = result.json()["details"]
    assert details[0]["isCorrect"] is True
    assert details[1]["userAnswer"] == "Rebase rewrites history."


def test_author_invalid_question_is_422(client):
    payload = {
        "title": "Broken",
        "questions": [{"type": "multiple-choice", "text": "Pick the right answer please.",
                       "options": [{"text": "a"}, {"text": "b"}]}],
    }
    resp = client.post("/tests", json=payload)
    assert resp.status_code == 422
    assert "exactly one correct" in resp.json()["detail"]


def test_report_html(client):
    resp = client.post("/tests/sample/report", json={"answers": {"q1": "q1o2"}})
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert "Score:</b> 0 / 3 (0%)" in resp.text


def test_generate_test_endpoint(client, monkeypatch):
    reply = {
        "testTitle": "Python Screen",
        "questions": [
            {"type": "multiple-choice", "text": "What does len([1, 2]) return?",
             "options": [{"text": "1"}, {"text": "2", "isCorrect": True}]},
            {"type": "free-form", "text": "Describe how the GIL affects threads."},
            {"type": "coding-challenge", "text": "Write a function that reverses a string.",
             "language": "python", "starterCode": "def rev(s):\n    pass", "solution": "def rev(s):\n    return s[::-1]"},
        ],
    }
    monkeypatch.setattr(llm_bridge, "generate", lambda kind, fields: reply)

    resp = client.post("/tests/generate", json={
        "jobTitle": "Python Developer",
        "jobDescription": "Build APIs in Python.",
        "extractedSkills": [{"name": "Python", "category": "technical", "importance": "critical"}],
        "seniority": "mid-level",
        "numberOfQuestions": 3,
    })
    assert resp.status_code == 200
    body = resp.json()
    assert body["title"] == "Python Screen"
    assert body["warnings"] == []
    assert body["questions"][2]["starterCode"].startswith("def rev")

    fetched = client.get(f"/tests/{body['id']}").json()
    assert "solution" not in fetched["questions"][2]


def test_generate_test_bad_count_is_422(client):
    resp = client.post("/tests/generate", json={
        "jobTitle": "Python Developer",
        "jobDescription": "Build APIs in Python.",
        "extractedSkills": [{"name": "Python", "category": "technical", "importance": "critical"}],
        "seniority": "mid-level",
        "numberOfQuestions": 50,
    })
    assert resp.status_code == 422


def test_collaborator_failure_is_502(client, monkeypatch):
    def _fail(kind, fields):
        raise CollaboratorFailure(kind, "model overloaded")

    monkeypatch.setattr(llm_bridge, "generate", _fail)
    resp = client.post("/skills/extract", json={"jobDescription": "x" * 80})
    assert resp.status_code == 502
    assert resp.json()["kind"] == "extract-skills"


def test_flow_endpoints(client, monkeypatch):
    replies = {
        "extract-skills": {"extractedSkills": [{"name": "SQL", "category": "technical", "importance": "important"}]},
        "generate-job-description": {"jobDescription": "A" * 150},
        "analyze-problem-solving": {"problemSolvingApproach": "a", "efficiencyAssessment": "b", "areasForImprovement": "c"},
        "analyze-code-quality": {
            "functionalityAssessment": "ok", "readabilityScore": 8, "maintainabilityScore": 7,
            "efficiencyAssessment": "ok", "bestPracticesAdherence": "ok",
            "securityVulnerabilities": ["none"], "suggestionsForImprovement": [], "overallQualitySummary": "fine",
        },
    }
    monkeypatch.setattr(llm_bridge, "generate", lambda kind, fields: replies[kind])

    skills = client.post("/skills/extract", json={"jobDescription": "x" * 80}).json()
    assert skills["extractedSkills"] == [{"name": "SQL", "category": "technical", "importance": "important"}]

    jd = client.post("/job-descriptions/generate", json={"jobTitle": "Analyst"}).json()
    assert len(jd["jobDescription"]) == 150

    ps = client.post("/analyze/problem-solving", json={"answer": "loop", "jobRequirements": "SQL"}).json()
    assert ps["efficiencyAssessment"] == "b"

    cq = client.post("/analyze/code", json={"codeSnippet": "SELECT * FROM users WHERE id = 1;", "language": "sql"})
    assert cq.status_code == 200
    assert cq.json()["readabilityScore"] == 8

    short = client.post("/analyze/code", json={"codeSnippet": "x", "language": "sql"})
    assert short.status_code == 422
