from __future__ import annotations
import json, logging, re, time
from typing import Any, Dict, Mapping

from . import config
from .errors import CollaboratorFailure
from .llm_cfg import client as llm_client, settings as llm_settings
from .prompts import TEMPLATES

log = logging.getLogger(__name__)

_FENCE_RX = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.S | re.I)

def backend_in_use() -> str:
    """Backend named by env, config.json or .llm_config.json; "none" unless fully configured."""
    try:
        return llm_settings().backend
    except RuntimeError as e:
        log.debug("llm backend unavailable: %s", e)
        return "none"

def render(kind: str, fields: Mapping[str, Any]) -> tuple[str, str]:
    if kind not in TEMPLATES:
        raise ValueError(f"unknown generation kind {kind!r}")
    system, user = TEMPLATES[kind]
    return system, user.format(**fields)

def _chat(system: str, user: str) -> str:
    s = llm_settings(); cli = llm_client(s)
    resp = cli.chat.completions.create(
        model=s.model,
        messages=[{"role":"system","content":system},{"role":"user","content":user}],
        temperature=config.LLM_TEMPERATURE, max_tokens=config.LLM_MAX_TOKENS,
        response_format={"type": "json_object"},
    )
    return resp.choices[0].message.content or ""

def parse_reply(raw: str) -> Dict[str, Any]:
    text = (raw or "").strip()
    m = _FENCE_RX.match(text)
    if m:
        text = m.group(1)
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data

def _log_call(kind: str, backend: str, prompt: str, raw: str | None, error: str | None, t0: float) -> None:
    rec = {
        "ts": round(time.time(), 3),
        "kind": kind,
        "backend": backend,
        "prompt": prompt[:config.LLM_LOG_PROMPT_CHARS],
        "raw": (raw or "")[:config.LLM_LOG_REPLY_CHARS],
        "error": error,
        "rt_ms": int((time.time()-t0)*1000),
    }
    try:
        with open(config.LLM_LOG_PATH, "a", encoding="utf-8") as f:
            f.write(json.dumps(rec, ensure_ascii=False) + "\n")
    except OSError as e:
        log.debug("could not write LLM call log %s: %s", config.LLM_LOG_PATH, e)

def generate(kind: str, fields: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Run one prompt/response round trip and return the decoded JSON object.
    Any backend, transport or decoding problem surfaces as CollaboratorFailure;
    nothing is retried.
    """
    system, user = render(kind, fields)
    backend = backend_in_use()
    if backend == "none":
        raise CollaboratorFailure(kind, "LLM backend not configured")
    t0 = time.time()
    raw: str | None = None
    log.info("llm call kind=%s backend=%s", kind, backend)
    try:
        raw = _chat(system, user)
        data = parse_reply(raw)
    except Exception as e:
        _log_call(kind, backend, user, raw, str(e), t0)
        log.error("llm call failed kind=%s: %s", kind, e)
        raise CollaboratorFailure(kind, str(e) or type(e).__name__) from e
    _log_call(kind, backend, user, raw, None, t0)
    return data
