"""Field name conversion between storage rows and domain models.

Rows in the store use ``snake_case`` column names, domain models use
``camelCase`` keys. The conversion is applied at the repository boundary only,
with the same pydantic alias generators the request models use.
"""

from typing import Any

from pydantic.alias_generators import to_camel, to_snake


def to_snake_case(field: str) -> str:
    """Convert ``camelCase`` to ``snake_case`` (``firstName`` -> ``first_name``)."""
    return to_snake(field)


def to_camel_case(field: str) -> str:
    """Convert ``snake_case`` to ``camelCase`` (``first_name`` -> ``firstName``)."""
    return to_camel(field)


def map_to_snake_case(obj: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of ``obj`` with snake_cased keys."""
    return {to_snake(k): v for k, v in obj.items()}


def map_to_camel_case(row: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of ``row`` with camelCased keys."""
    return {to_camel(k): v for k, v in row.items()}
