#!/usr/bin/env python
"""
Build a Whoosh index from a JSONL file of documents using the same schema the API searches.
Inputs:
  - docs.jsonl with one record per line: {"id", "Date", "title", "body", "source"?}
Outputs:
  - a Whoosh index directory (default data/index)
Keys not in the schema are ignored; records sharing an id replace each other.
"""

import argparse
import json
from pathlib import Path

from store.store_whoosh import WhooshStore


def iter_jsonl(path: Path):
    with path.open("r", encoding="utf-8") as f:
        for line in f:
            if line.strip():
                yield json.loads(line)


def main():
    ap = argparse.ArgumentParser(description="Build a Whoosh index from JSONL")
    ap.add_argument("--docs", default="data/staging/docs.jsonl")
    ap.add_argument("--index_out", default="data/index")
    ap.add_argument("--indexname", default=None)
    args = ap.parse_args()

    docs = Path(args.docs)
    if not docs.exists():
        raise SystemExit(f"Docs file not found: {docs}")

    store = WhooshStore.create(args.index_out, indexname=args.indexname)
    added = store.add(iter_jsonl(docs))

    print({"added": added, "doc_count": store.index.doc_count(), "index": args.index_out})


if __name__ == "__main__":
    main()
