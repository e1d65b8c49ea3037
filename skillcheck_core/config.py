from __future__ import annotations
import os, json, pathlib


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


OPTIONS_MIN: int = 2
OPTIONS_MAX: int = 5
QUESTION_TEXT_MIN: int = 10

QUESTION_COUNT_MIN: int = 3
QUESTION_COUNT_MAX: int = 20
DEFAULT_QUESTION_COUNT: int = 5

JOB_DESCRIPTION_MIN: int = 50
JOB_TITLE_MIN: int = 3
GENERATED_JD_MIN: int = 100
CODE_SNIPPET_MIN: int = 20
CODE_SCORE_MAX: float = 10.0

LLM_BACKENDS: tuple[str, ...] = ("azure", "openai")
LLM_TEMPERATURE: float = 0.2
LLM_MAX_TOKENS: int = 2000
LLM_LOG_PATH: str = "llm_calls.jsonl"
LLM_LOG_PROMPT_CHARS: int = 800
LLM_LOG_REPLY_CHARS: int = 2000

STRICT_NORMALIZE: bool = False

# // env overrides for staging/ops
DEFAULT_QUESTION_COUNT = _env_int("DEFAULT_QUESTION_COUNT", DEFAULT_QUESTION_COUNT)
LLM_TEMPERATURE = _env_float("LLM_TEMPERATURE", LLM_TEMPERATURE)
LLM_MAX_TOKENS = _env_int("LLM_MAX_TOKENS", LLM_MAX_TOKENS)
LLM_LOG_PATH = os.getenv("LLM_LOG_PATH", LLM_LOG_PATH)
STRICT_NORMALIZE = _env_bool("STRICT_NORMALIZE", STRICT_NORMALIZE)


def load_config(path: str = "config.json") -> dict:
    cfg = {}
    p = pathlib.Path(path)
    if p.exists():
        try: cfg = json.loads(p.read_text(encoding="utf-8"))
        except (OSError, ValueError): cfg = {}
    e = os.environ
    if e.get("LLM_BACKEND"): cfg["LLM_BACKEND"] = e.get("LLM_BACKEND")
    if e.get("LLM_MODEL"): cfg["LLM_MODEL"] = e.get("LLM_MODEL")
    if e.get("LLM_TEMPERATURE"): cfg["LLM_TEMPERATURE"] = _env_float("LLM_TEMPERATURE", LLM_TEMPERATURE)
    for k in ("OPENAI_API_KEY","OPENAI_BASE_URL","AZURE_OPENAI_ENDPOINT","AZURE_OPENAI_API_KEY",
              "AZURE_OPENAI_API_VERSION","AZURE_OPENAI_DEPLOYMENT"):
        if e.get(k): cfg[k] = e.get(k)
    return cfg


def get_backend(cfg: dict | None = None) -> str:
    cfg = load_config() if cfg is None else cfg
    b = (cfg.get("LLM_BACKEND") or "").lower().strip()
    return b if b in LLM_BACKENDS else "none"
