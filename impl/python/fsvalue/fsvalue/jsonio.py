"""JSON text helpers for documents, so callers can hand wire payloads to a transport."""
from __future__ import annotations

import json
from typing import Any, Dict, Mapping

from .codec import decode_document, encode_document


def dumps_document(fields: Mapping, **json_kwargs) -> str:
    json_kwargs.setdefault("ensure_ascii", False)
    return json.dumps(encode_document(fields), **json_kwargs)


def loads_document(text) -> Dict[str, Any]:
    return decode_document(json.loads(text))
