"""
PostgREST filter operators.

Each operator maps to a function producing a ready-to-send query
fragment. New operators are added to FILTER_OPERATORS; RequestBuilder
dispatches through it and never formats fragments on its own.
"""
from typing import Any, Callable, Dict

from ...exceptions import UnknownFilterError


def to_query_value(value: Any) -> str:
    """Render a scalar the way PostgREST expects it in a query string."""
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def format_value(value: Any) -> str:
    """Comma-join list, tuple and set values, stringify anything else."""
    if isinstance(value, (list, tuple, set, frozenset)):
        return ','.join(to_query_value(item) for item in value)
    return to_query_value(value)


def _operator(name: str) -> Callable[[str, Any], str]:
    def format_filter(column: str, value: Any) -> str:
        return f"{column}={name}.{format_value(value)}"
    format_filter.__name__ = f"format_{name}"
    return format_filter


FILTER_OPERATORS: Dict[str, Callable[[str, Any], str]] = {
    name: _operator(name)
    for name in ('eq', 'gt', 'lt', 'gte', 'lte', 'like', 'ilike', 'is', 'in', 'not')
}


def format_filter(column: str, operator: str, value: Any) -> str:
    """
    Build the query fragment for a filter.

    Args:
        column: Column name
        operator: Operator name (key of FILTER_OPERATORS)
        value: Filter value; sequences are comma-joined

    Returns:
        Fragment such as 'age=gte.18' or 'id=in.1,2,3'

    Raises:
        UnknownFilterError: If the operator is not in the table
    """
    try:
        formatter = FILTER_OPERATORS[operator]
    except KeyError:
        raise UnknownFilterError(operator) from None
    return formatter(column, value)
