"""Text rendering for JSON and CSV temporary files."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel

from tempwrite.errors import InvalidArgument, InvalidFormat


def _is_row_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def format_json(value: Any) -> str:
    """Serialize a structured value as indented JSON.

    Accepts mappings, non-string sequences and pydantic models.

    Raises:
        InvalidArgument: If ``value`` is None, a scalar, or not serializable
    """
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json")
    elif not (isinstance(value, Mapping) or _is_row_sequence(value)):
        raise InvalidArgument("Input must be a valid object")

    try:
        return json.dumps(value, indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise InvalidArgument(f"Input is not JSON serializable: {e}") from e


def _quote(cell: Any) -> str:
    text = "" if cell is None else str(cell)
    return '"' + text.replace('"', '""') + '"'


def format_csv(rows: Any, delimiter: str = ",") -> str:
    """Render rows as CSV with every cell quoted.

    Rows are either sequences of cells, or mappings sharing the keys of the
    first mapping (which become the header row). Lines are joined with ``\\n``
    and there is no trailing newline; no rows gives an empty string.

    Raises:
        InvalidArgument: If ``rows`` is not a sequence or the delimiter is empty
        InvalidFormat: If rows are neither sequences nor mappings, or mixed
    """
    if not _is_row_sequence(rows):
        raise InvalidArgument("CSV data must be a sequence")
    if not isinstance(delimiter, str) or not delimiter:
        raise InvalidArgument("CSV delimiter must be a non-empty string")

    if not rows:
        return ""

    first = rows[0]
    lines: list[str] = []

    if _is_row_sequence(first):
        for row in rows:
            if not _is_row_sequence(row):
                raise InvalidFormat("Invalid CSV data format")
            lines.append(delimiter.join(_quote(cell) for cell in row))
    elif isinstance(first, Mapping):
        headers = list(first.keys())
        lines.append(delimiter.join(_quote(header) for header in headers))
        for row in rows:
            if not isinstance(row, Mapping):
                raise InvalidFormat("Invalid CSV data format")
            lines.append(delimiter.join(_quote(row.get(header)) for header in headers))
    else:
        raise InvalidFormat("Invalid CSV data format")

    return "\n".join(lines)
