# tools/llm_smoke.py
from __future__ import annotations
from openai import NotFoundError
from skillcheck_core.llm_cfg import client, settings

def main():
    s = settings()
    print("Backend  :", s.backend)
    print("Endpoint :", s.endpoint or "(default)")
    print("Model    :", s.model, "(deployment name on azure)")
    if s.api_version: print("API ver  :", s.api_version)
    cli = client(s)
    try:
        r = cli.chat.completions.create(
            model=s.model,
            messages=[{"role":"user","content":"Say 'pong' only."}],
            temperature=0.0,
            max_tokens=5,
        )
        print("Reply    :", r.choices[0].message.content)
    except NotFoundError:
        print("ERROR 404: the model or deployment was not found.")
        print("→ Verify the deployment/model name and, on azure, the api_version.")
        raise

if __name__ == "__main__":
    main()
