"""JSON encoding for tree snapshots."""

import json
from typing import Any

import orjson


def safe_json_dumps(obj: Any, **kwargs: Any) -> str:
    """
    Encode object to JSON string.

    Args:
        obj: Object to encode
        **kwargs: Additional arguments (indent, etc.)

    Returns:
        JSON string
    """
    indent = kwargs.get("indent", 0)

    # orjson for compact output
    if indent == 0:
        return orjson.dumps(obj).decode("utf-8")

    # stdlib for pretty-printed output (orjson only supports 2-space indent)
    return json.dumps(obj, indent=indent, ensure_ascii=False)
