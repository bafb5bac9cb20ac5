"""Field parsing shared by the delimited-text graph adapters."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from ...domain.errors import GraphLoadError
from ...domain.models import NodeId


def parse_node_id(
    value: Optional[str],
    id_type: str,
    file_path: Union[str, Path],
    line_number: int,
) -> NodeId:
    """Convert a raw id field to the configured id type."""
    text = (value or "").strip()
    if not text:
        raise GraphLoadError(
            "Missing node id",
            file_path=str(file_path),
            line_number=line_number,
        )
    if id_type == "int":
        try:
            return int(text)
        except ValueError as e:
            raise GraphLoadError(
                f"Node id {text!r} is not an integer",
                cause=e,
                file_path=str(file_path),
                line_number=line_number,
            )
    return text


def parse_float(
    value: Optional[str],
    column: str,
    file_path: Union[str, Path],
    line_number: int,
) -> float:
    """Convert a raw numeric field, rejecting blanks and garbage."""
    text = (value or "").strip()
    try:
        return float(text)
    except ValueError as e:
        raise GraphLoadError(
            f"Column {column!r} has non-numeric value {text!r}",
            cause=e,
            file_path=str(file_path),
            line_number=line_number,
        )


def parse_optional_float(
    value: Optional[str],
    column: str,
    file_path: Union[str, Path],
    line_number: int,
) -> Optional[float]:
    if value is None or not value.strip():
        return None
    return parse_float(value, column, file_path, line_number)
