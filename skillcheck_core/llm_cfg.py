# skillcheck_core/llm_cfg.py
from __future__ import annotations
import os, json, pathlib
from dataclasses import dataclass
from typing import Optional, Union
from openai import AzureOpenAI, OpenAI

from .config import get_backend, load_config

@dataclass(frozen=True)
class LLMSettings:
    backend: str
    model: str
    api_key: str
    endpoint: Optional[str] = None
    api_version: Optional[str] = None

def _from_json(path: str = ".llm_config.json") -> dict[str, str]:
    p = pathlib.Path(path)
    if not p.exists(): return {}
    try:
        j = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return {k: str(v) for k, v in j.items() if v not in (None, "")}

def _required(backend: str) -> dict[str, str]:
    if backend == "azure":
        return {
            "endpoint":   "AZURE_OPENAI_ENDPOINT",
            "api_key":    "AZURE_OPENAI_API_KEY",
            "api_version":"AZURE_OPENAI_API_VERSION",
            "model":      "AZURE_OPENAI_DEPLOYMENT",
        }
    return {"api_key": "OPENAI_API_KEY", "model": "LLM_MODEL"}

def settings(cfg: dict | None = None) -> LLMSettings:
    cfg = dict(load_config() if cfg is None else cfg)
    for k, v in _from_json().items():
        cfg.setdefault(k, v)
    backend = get_backend(cfg)
    if backend == "none":
        raise RuntimeError("LLM backend not configured. Set LLM_BACKEND to 'azure' or 'openai'.")
    if backend == "openai":
        cfg.setdefault("LLM_MODEL", os.getenv("LLM_MODEL", "gpt-4o-mini"))
    fields = {attr: str(cfg.get(key) or "") for attr, key in _required(backend).items()}
    missing = [key for attr, key in _required(backend).items() if not fields[attr]]
    if missing:
        raise RuntimeError(f"{backend} LLM not configured. Missing: {', '.join(missing)}")
    return LLMSettings(
        backend=backend,
        model=fields["model"],
        api_key=fields["api_key"],
        endpoint=fields.get("endpoint") or cfg.get("OPENAI_BASE_URL") or None,
        api_version=fields.get("api_version"),
    )

def is_configured() -> bool:
    try:
        settings()
    except RuntimeError:
        return False
    return True

def client(s: LLMSettings | None = None) -> Union[AzureOpenAI, OpenAI]:
    s = s or settings()
    if s.backend == "azure":
        return AzureOpenAI(
            azure_endpoint=s.endpoint,
            api_key=s.api_key,
            api_version=s.api_version,
        )
    return OpenAI(api_key=s.api_key, base_url=s.endpoint)
