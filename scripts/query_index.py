#!/usr/bin/env python
"""
Query CLI that matches the API stack.
- Uses the same parameter parsing, query builders and redaction as the HTTP routes,
  so results line up with /search, /prefix and /fuzzy.

Usage:
  python -m scripts.query_index --q "harbour" --mode prefix --s 5
  python -m scripts.query_index --q "Date:1921 ship" --json

Example:
  >>> python -m scripts.query_index --q "cat" --mode fuzzy
   1 0.842  doc-17  Cats of the harbour (1921)
"""

import argparse
import json

from rich import print as rprint

from app.adapters.index_whoosh import WhooshIndexAdapter
from app.errors import ApiError
from app.services.query_builders import BUILDERS, QueryOptions
from app.services.search_service import search_service


def main():
    ap = argparse.ArgumentParser(description="Query a Whoosh index")
    ap.add_argument("--index", default="data/index")
    ap.add_argument("--indexname", default=None)
    ap.add_argument("--q", required=True, help="query text")
    ap.add_argument("--mode", choices=sorted(BUILDERS), default="search")
    ap.add_argument("--f", default="0", help="offset of the first hit")
    ap.add_argument("--s", default="10", help="page size")
    ap.add_argument("--fa", default="8", help="facet buckets (search mode only)")
    ap.add_argument("--fuzziness", type=int, default=2)
    ap.add_argument("--json", action="store_true", help="print the raw JSON response")
    args = ap.parse_args()

    try:
        index = WhooshIndexAdapter.open(args.index, indexname=args.indexname)
        result = search_service(
            args.mode,
            {"q": args.q, "f": args.f, "s": args.s, "fa": args.fa},
            index,
            options=QueryOptions(fuzziness=args.fuzziness),
        )
    except ApiError as e:
        raise SystemExit(f"[{e.error}] {e.message}")

    if args.json:
        print(json.dumps(result.model_dump(mode="json"), ensure_ascii=False))
        return

    rprint(f"[bold]QUERY:[/bold] {args.q} ({args.mode})  total={result.total_hits}  took={result.took_ms}ms")
    for rank, hit in enumerate(result.hits, 1):
        title = hit.fields.get("title") or "?"
        date = hit.fields.get("Date")
        suffix = f" ({date})" if date else ""
        rprint(f"{rank:>2} {hit.score:.3f}  {hit.id}  {title}{suffix}")
        for name, frags in hit.fragments.items():
            rprint(f"   {name}: {' … '.join(frags)}")

    for name, facet in (result.facets or {}).items():
        terms = ", ".join(f"{t.term}={t.count}" for t in facet.terms)
        rprint(f"[bold]FACET {name}:[/bold] {terms} (other={facet.other}, missing={facet.missing})")


if __name__ == "__main__":
    main()
