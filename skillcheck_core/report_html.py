from __future__ import annotations
from html import escape
from typing import List, Optional

from .types import Question, Result, ResultDetail, Test

_CSS = """
 body{font-family:system-ui,-apple-system,Segoe UI,Roboto,Ubuntu,'Helvetica Neue',Arial}
 .wrap{max-width:960px;margin:40px auto;padding:0 16px}
 .q{border:1px solid #ddd;border-radius:8px;padding:12px 16px;margin:12px 0}
 .q.ok{border-color:#16a34a;background:#f0fdf4}
 .q.bad{border-color:#dc2626;background:#fef2f2}
 .q.err{border-color:#d97706;background:#fffbeb}
 .picked{font-weight:600}
 .correct{color:#16a34a}
 pre{background:#f6f8fa;padding:8px;white-space:pre-wrap}
 .banner{padding:8px 12px;border-radius:6px;background:#eff6ff;margin:12px 0}
"""

def _status_class(d: ResultDetail) -> str:
    if d.error:
        return "err"
    if d.is_correct is True:
        return "ok"
    if d.is_correct is False:
        return "bad"
    return ""

def _options_html(q: Question, d: ResultDetail) -> str:
    items: List[str] = []
    for opt in q.options:
        cls = []
        if opt.id == d.selected_option_id: cls.append("picked")
        if opt.id == d.correct_option_id: cls.append("correct")
        mark = " &#10003;" if opt.id == d.correct_option_id else ""
        items.append(f"<li class=\"{' '.join(cls)}\">{escape(opt.text)}{mark}</li>")
    return f"<ul>{''.join(items)}</ul>"

def _question_block(index: int, q: Question, d: ResultDetail) -> str:
    body = ""
    if q.type == "multiple-choice":
        body = _options_html(q, d)
    elif d.user_answer:
        tag = "pre" if q.type == "coding-challenge" else "p"
        body = f"<{tag}>{escape(d.user_answer)}</{tag}>"
    else:
        body = "<p><i>No answer submitted.</i></p>"
    if q.type == "coding-challenge" and q.solution:
        body += f"<details><summary>Sample solution</summary><pre>{escape(q.solution)}</pre></details>"
    if q.explanation:
        body += f"<p><i>{escape(q.explanation)}</i></p>"
    return (
        f"<div class=\"q {_status_class(d)}\">"
        f"<h3>Question {index}: {escape(q.text)}</h3>"
        f"{body}<p>{escape(d.feedback)}</p></div>"
    )

def render_result_html(test: Test, result: Result, title: Optional[str] = None) -> str:
    title = escape(title or test.title)
    blocks: List[str] = []
    for d in result.details:
        q = test.question(d.question_id)
        if q is not None:
            blocks.append(_question_block(len(blocks) + 1, q, d))
    note = ""
    if result.has_non_gradable:
        note = ("<div class=\"banner\">Free-form and coding answers require manual review "
                "or AI analysis.</div>")
    return f"""<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8"/>
<title>{title}</title>
<style>{_CSS}</style>
</head>
<body>
<div class="wrap">
  <h1>{title}</h1>
  <p><b>Score:</b> {result.score} / {result.total_multiple_choice} ({result.percentage}%)</p>
  {note}
  {''.join(blocks)}
</div>
</body>
</html>"""

def export_result_html(test: Test, result: Result, path: str, title: Optional[str] = None) -> str:
    with open(path, "w", encoding="utf-8") as f:
        f.write(render_result_html(test, result, title=title))
    return path
