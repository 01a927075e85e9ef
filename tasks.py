# tasks.py
# Invoke is the source of truth.
# Primary:
#   invoke build-index -> docs.jsonl -> Whoosh index (fails fast if empty)
#   invoke api         -> serve /search, /prefix, /fuzzy (+ static archive)
# Helpers:
#   invoke query | test | clean

from invoke import task
import os, sys, subprocess, shutil
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

PY         = sys.executable
API_HOST   = os.environ.get("HOST", "0.0.0.0")
API_PORT   = int(os.environ.get("PORT", "8080"))

# Paths
DOCS       = Path(os.environ.get("DOCS_PATH", "data/staging/docs.jsonl"))
INDEX_DIR  = Path(os.environ.get("INDEX_DIR", "data/index"))

def _run(cmd, env: dict | None = None, **kwargs):
    """Run shell cmd with repo root on PYTHONPATH, plus optional env overrides."""
    base = os.environ.copy()
    root = str(Path(".").resolve())
    base["PYTHONPATH"] = f'{root}{os.pathsep}{base.get("PYTHONPATH","")}'
    if env:
        base.update(env)
    print(f"$ {cmd}")
    return subprocess.run(cmd, shell=True, check=True, env=base, **kwargs)

def _jsonl_count(path: Path) -> int:
    if not Path(path).exists():
        return 0
    with open(path, "r", encoding="utf-8") as f:
        return sum(1 for line in f if line.strip())

@task(name="build-index")
def build_index(c, docs=None, out=None):
    """Build the Whoosh index from docs.jsonl"""
    src = Path(docs) if docs else DOCS
    dst = Path(out) if out else INDEX_DIR
    if _jsonl_count(src) == 0:
        raise SystemExit(f"No documents found at {src}. Export the archive to JSONL first.")
    _run(f'{PY} -m scripts.build_index --docs "{src}" --index_out "{dst}"')

@task
def query(c, q, mode="search", s=10):
    """CLI test against the index"""
    _run(f'{PY} -m scripts.query_index --index "{INDEX_DIR}" --q "{q}" --mode {mode} --s {s}')

@task
def api(c, reload=False):
    """Start the search API."""
    reload_flag = "--reload" if str(reload).lower() not in ("false", "0", "") else ""
    _run(
        f'{PY} -m uvicorn app.main:app --host {API_HOST} --port {API_PORT} {reload_flag}',
        env={"INDEX_DIR": str(INDEX_DIR)},
    )

@task
def test(c):
    """Run the test suite."""
    _run(f"{PY} -m pytest -q tests")

@task
def clean(c):
    """Blow away the built index (dangerous)."""
    if INDEX_DIR.exists():
        shutil.rmtree(INDEX_DIR)
        print("deleted", INDEX_DIR)
