from __future__ import annotations
import json, importlib.resources as ir
from pathlib import Path
from typing import Any, Dict
from .normalizer import normalize
from .types import Test
SAMPLE_TEST_ID = "sample"
def build_test(raw: Dict[str, Any], *, strict: bool = True) -> Test:
    return normalize(
        raw.get("questions") or [],
        title=raw.get("title") or "Untitled Test",
        test_id=raw.get("id") or None,
        strict=strict,
        job_title=raw.get("jobTitle"),
        job_requirements=raw.get("jobRequirements"),
        seniority=raw.get("seniority"),
    )
def load_test_file(path: str | Path) -> Test:
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    return build_test(raw)
def load_sample_test() -> Test:
    data = ir.files(__package__).joinpath("data/sample_test.json").read_text(encoding="utf-8")
    return build_test(json.loads(data))
