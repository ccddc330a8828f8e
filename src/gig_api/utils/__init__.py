"""Utility functions for the gig API."""

from gig_api.utils.case_conversion import map_to_camel_case, map_to_snake_case, to_camel_case, to_snake_case
from gig_api.utils.pagination import Pagination, normalize_pagination

__all__ = [
    "map_to_camel_case",
    "map_to_snake_case",
    "to_camel_case",
    "to_snake_case",
    "Pagination",
    "normalize_pagination",
]
