"""
Prompt templates for the generative backend.

Each template is rendered with ``str.format`` and asks the model for a single
JSON object so the reply can be validated against the matching schema in
``skillcheck_core.flows``.
"""

JSON_ONLY = "Return ONLY a valid JSON object. NO other text, NO explanations, NO markdown."

EXTRACT_SKILLS_SYSTEM = ("You are an expert recruitment consultant specializing in technical roles. "
                         + JSON_ONLY)

EXTRACT_SKILLS_USER = """Analyze the provided job description and extract the key skills, competencies, and knowledge areas required for the role.

Job Description:
{job_description}

Instructions:
1. Identify both explicit and implicit skill requirements.
2. Categorize each skill as 'technical', 'soft', 'domain-specific', 'tooling', or 'other'.
3. Assess the importance of each skill as 'critical', 'important', or 'nice-to-have' based on the emphasis in the description.
4. Provide a brief context or example for each skill if possible.
5. Focus on actionable skills relevant for assessment. Do not include generic requirements like "Bachelor's degree". Limit the list to the top 15-20 most relevant skills.

Output format:
{{
  "extractedSkills": [
    {{"name": "skill name", "category": "technical", "importance": "critical", "context": "short quote or example"}}
  ]
}}"""

JOB_DESCRIPTION_SYSTEM = ("You are an expert HR specialist crafting compelling job descriptions. "
                          + JSON_ONLY)

JOB_DESCRIPTION_USER = """Generate a detailed and realistic job description for the following role:

Job Title: {job_title}
{seniority_line}
Instructions:
1. Create a comprehensive job description suitable for posting on a job board.
2. Include sections for: Company Overview (a generic placeholder like "[Company Name] is a leading innovator..."), Role Summary, Key Responsibilities (bullet points), Required Qualifications (bullet points), Preferred Qualifications/Skills (bullet points), What We Offer (placeholder benefits).
3. Tailor responsibilities and qualifications to the job title and seniority level. A senior role emphasizes leadership, strategy and complex problem-solving; a junior role focuses on learning, execution and collaboration.
4. The description must be at least 100 words long and professionally written.

Output format:
{{"jobDescription": "full description text"}}"""

CREATE_TEST_SYSTEM = ("You are an expert assessment creator for technical and professional roles. "
                      + JSON_ONLY)

CREATE_TEST_USER = """Based on the provided job details and extracted skills, generate a tailored skill assessment test.

Job Title: {job_title}
Seniority: {seniority}
Job Description:
{job_description}

Extracted Skills:
{skills}

Assessment Parameters:
- Generate exactly {number_of_questions} questions.
{focus_line}- Ensure a mix of question types (multiple-choice, free-form, coding-challenge) relevant to the skills being assessed. Use free-form for problem-solving or conceptual understanding, coding-challenge for hands-on programming skills, multiple-choice for knowledge checks.
- Calibrate question difficulty according to the '{seniority}' seniority level.
- Use ids q1, q2, ... for questions and q1o1, q1o2, ... for options.
- For multiple-choice questions, provide 3-5 plausible, distinct options with exactly one marked as correct.
- Free-form and coding-challenge questions must not have options. Coding challenges include "language", "starterCode" and "solution".
- Keep question text concise and unambiguous (at least 10 characters).
- Assign a relevant skillCategory and a difficulty (easy, medium, hard) to each question.
- Generate a suitable overall test title.

Output format:
{{
  "testTitle": "title",
  "questions": [
    {{"id": "q1", "type": "multiple-choice", "text": "question text", "skillCategory": "technical", "difficulty": "medium",
      "options": [{{"id": "q1o1", "text": "option", "isCorrect": true}}, {{"id": "q1o2", "text": "option", "isCorrect": false}}]}},
    {{"id": "q2", "type": "free-form", "text": "question text", "skillCategory": "problem-solving", "difficulty": "hard"}}
  ]
}}"""

PROBLEM_SOLVING_SYSTEM = ("You are an expert technical recruiter analyzing a candidate's answer to assess "
                          "their problem-solving skills. " + JSON_ONLY)

PROBLEM_SOLVING_USER = """Job Requirements: {job_requirements}

Analyze the following answer, providing insights into the candidate's problem-solving approach, efficiency, and areas for improvement.

Answer: {answer}

Output format:
{{
  "problemSolvingApproach": "detailed analysis of the candidate's approach",
  "efficiencyAssessment": "assessment of the candidate's efficiency",
  "areasForImprovement": "suggestions for improvement"
}}"""

CODE_QUALITY_SYSTEM = ("You are an expert code reviewer and senior software engineer. "
                       "Be objective and constructive. " + JSON_ONLY)

CODE_QUALITY_USER = """Analyze the following code snippet written in {language}.
{problem_block}{requirements_block}
Code Snippet:
```{language}
{code_snippet}
```

Evaluate the code on:
1. Functionality: based on the problem description (if available), does the code appear to logically solve the problem?
2. Readability & Clarity: naming, comments, formatting. Score from 0 (unreadable) to 10 (excellent).
3. Maintainability: modularity, complexity, ease of change. Score from 0 (unmaintainable) to 10 (excellent).
4. Efficiency: obvious time and space complexity concerns.
5. Best Practices: adherence to language-specific conventions such as error handling.
6. Security: obvious vulnerabilities such as injection risks, hardcoded secrets, improper input validation.
7. Suggestions: specific, actionable improvements.
8. Summary: a concise overall summary.

Output format:
{{
  "functionalityAssessment": "text",
  "readabilityScore": 7,
  "maintainabilityScore": 6,
  "efficiencyAssessment": "text",
  "bestPracticesAdherence": "text",
  "securityVulnerabilities": ["issue"],
  "suggestionsForImprovement": ["suggestion"],
  "overallQualitySummary": "text"
}}"""

TEMPLATES = {
    "extract-skills": (EXTRACT_SKILLS_SYSTEM, EXTRACT_SKILLS_USER),
    "generate-job-description": (JOB_DESCRIPTION_SYSTEM, JOB_DESCRIPTION_USER),
    "create-test": (CREATE_TEST_SYSTEM, CREATE_TEST_USER),
    "analyze-problem-solving": (PROBLEM_SOLVING_SYSTEM, PROBLEM_SOLVING_USER),
    "analyze-code-quality": (CODE_QUALITY_SYSTEM, CODE_QUALITY_USER),
}
