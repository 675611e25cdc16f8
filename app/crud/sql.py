"""
SQL helpers shared by the CRUD modules.
"""

from typing import Any, Dict, List, Optional, Tuple

from app.core.exceptions import BadRequestError


def param_name(position: int) -> str:
    """Bind parameter name for a 1-based placeholder position."""
    return f"p{position}"


def sql_for_partial_update(
    data_to_update: Dict[str, Any],
    column_aliases: Optional[Dict[str, str]] = None
) -> Tuple[str, List[Any]]:
    """
    Build the SET clause and values for a partial UPDATE.

    Field names are translated through ``column_aliases`` when the column name
    differs from the external name. Values are never placed in the SQL;
    each field gets a numbered bind placeholder in input order.

        >>> sql_for_partial_update({"name": "Acme", "numEmployees": 3},
        ...                        {"numEmployees": "num_employees"})
        ('"name" = :p1, "num_employees" = :p2', ['Acme', 3])

    Raises:
        BadRequestError: If ``data_to_update`` is empty
    """
    if not data_to_update:
        raise BadRequestError("No data")

    column_aliases = column_aliases or {}
    cols = [
        f'"{column_aliases.get(key, key)}" = :{param_name(idx)}'
        for idx, key in enumerate(data_to_update, start=1)
    ]
    return ", ".join(cols), list(data_to_update.values())


def bind_positional(values: List[Any]) -> Dict[str, Any]:
    """Map an ordered value list onto the :p1, :p2, ... bind names."""
    return {param_name(idx): value for idx, value in enumerate(values, start=1)}


def like_pattern(term: str) -> str:
    """
    Wrap ``term`` for a substring LIKE match, escaping LIKE wildcards so
    the text is matched literally. Use with ``ESCAPE '\\'``.
    """
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
