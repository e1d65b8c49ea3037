# skillcheck_core/reporting.py
from __future__ import annotations
import json
from dataclasses import fields, is_dataclass
from pathlib import Path
from typing import Any, Dict

from .report_html import export_result_html
from .types import Question, Result, Test

# -------- utils: make any object JSON-safe ----------
def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(p.capitalize() for p in rest)

def to_basic(x: Any) -> Any:
    """Plain JSON data with camelCase keys; None-valued fields are dropped."""
    if x is None or isinstance(x, (bool, int, float, str)):
        return x
    if is_dataclass(x) and not isinstance(x, type):
        out = {}
        for f in fields(x):
            v = getattr(x, f.name)
            if v is None:
                continue
            out[_camel(f.name)] = to_basic(v)
        return out
    if isinstance(x, dict):
        return {str(k): to_basic(v) for k, v in x.items()}
    if isinstance(x, (list, tuple, set)):
        return [to_basic(v) for v in x]
    return str(x)

def serialize_question(q: Question, reveal: bool = False) -> Dict[str, Any]:
    d = to_basic(q)
    if not reveal:
        d.pop("solution", None)
        d.pop("explanation", None)
        for opt in d.get("options", []):
            opt.pop("isCorrect", None)
    if not d.get("options"):
        d.pop("options", None)
    return d

def serialize_test(test: Test, reveal: bool = False) -> Dict[str, Any]:
    """Serialize a test; the candidate view (reveal=False) hides answers."""
    d = to_basic(test)
    d["questions"] = [serialize_question(q, reveal) for q in test.questions]
    return d

def serialize_result(result: Result) -> Dict[str, Any]:
    d = to_basic(result)
    d["percentage"] = result.percentage
    return d

def write_report(test: Test, result: Result, out_path: str, title: str | None = None) -> str:
    """
    Writes the HTML report to out_path and a JSON sidecar next to it.
    Returns out_path.
    """
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    export_result_html(test, result, str(out), title=title)
    sidecar = out.with_suffix(".json")
    with sidecar.open("w", encoding="utf-8") as f:
        json.dump({"test": serialize_test(test, reveal=True), "result": serialize_result(result)},
                  f, ensure_ascii=False, indent=2)
    return str(out)
