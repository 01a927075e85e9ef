from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, Optional

from whoosh import index
from whoosh.analysis import StemmingAnalyzer
from whoosh.fields import ID, STORED, TEXT, Schema


def default_schema() -> Schema:
    """Archive documents: an id, a Date bucket for faceting, and searchable text."""
    return Schema(
        id=ID(stored=True, unique=True),
        Date=ID(stored=True),
        title=TEXT(stored=True, field_boost=2.0),
        body=TEXT(stored=True, analyzer=StemmingAnalyzer()),
        source=STORED(),
    )


class WhooshStore:
    def __init__(self, ix: index.Index):
        self.index = ix

    @classmethod
    def create(cls, path: str | Path, schema: Optional[Schema] = None, indexname: Optional[str] = None):
        path = Path(path)
        path.mkdir(parents=True, exist_ok=True)
        ix = index.create_in(str(path), schema or default_schema(), indexname=indexname)
        return cls(ix)

    @classmethod
    def load(cls, path: str | Path, indexname: Optional[str] = None):
        return cls(index.open_dir(str(path), indexname=indexname))

    def add(self, docs: Iterable[Dict]) -> int:
        names = set(self.index.schema.names())
        added = 0
        writer = self.index.writer()
        try:
            for doc in docs:
                row = {k: _as_field_value(v) for k, v in doc.items() if k in names and v is not None}
                if not row:
                    continue
                if "id" in row:
                    writer.update_document(**row)
                else:
                    writer.add_document(**row)
                added += 1
        except Exception:
            writer.cancel()
            raise
        writer.commit()
        return added


def _as_field_value(value):
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value
