"""Shared types for the finimport package."""

from typing import Any

Row = dict[str, Any]
Params = tuple | list | dict
ParamsList = list[tuple] | list[list]

# One decoded CSV data row: header name -> raw cell text, None when the row is short.
RawRow = dict[str, str | None]
