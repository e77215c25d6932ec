"""
Tool Directory - Codec and helpers for the public/tools.json document.

The directory is a JSON array of tool objects. Existing entries are kept
exactly as found (unknown keys included) so that rewriting the document
only ever appends the new entry.
"""

import json
from typing import Any, Dict, List

from makerbench.api.middleware.error_handler import DirectoryDocumentError
from makerbench.models.schemas import ToolRecord


def parse_tags(raw: str) -> List[str]:
    """
    Parse the submitted tag field.

    The form sends a JSON array (``["a","b"]``). Plain comma separated
    text (``a, b ,c``) is accepted as a fallback.
    """
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError):
        parsed = None

    if isinstance(parsed, list):
        return [str(item) for item in parsed]

    return [segment.strip() for segment in raw.split(",") if segment.strip()]


class ToolDirectory:
    """In-memory, ordered view of the tool directory document."""

    def __init__(self, records: List[Dict[str, Any]] = None):
        self.records: List[Dict[str, Any]] = list(records or [])

    @classmethod
    def from_json(cls, text: str) -> "ToolDirectory":
        try:
            data = json.loads(text)
        except ValueError as e:
            raise DirectoryDocumentError(f"Tool directory is not valid JSON: {e}")

        if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
            raise DirectoryDocumentError("Tool directory must be a JSON array of objects")
        return cls(data)

    def to_json(self) -> str:
        return json.dumps(self.records, indent=2, ensure_ascii=False)

    def next_id(self) -> int:
        """One more than the highest existing id, or 1 for an empty directory."""
        ids = []
        for record in self.records:
            tool_id = record.get("id")
            # bool is an int subclass but never a valid id
            if not isinstance(tool_id, int) or isinstance(tool_id, bool):
                raise DirectoryDocumentError(f"Tool entry has no integer id: {record!r}")
            ids.append(tool_id)
        return max(ids, default=0) + 1

    def append(self, record: ToolRecord) -> None:
        self.records.append(record.to_document())

    def __len__(self) -> int:
        return len(self.records)
