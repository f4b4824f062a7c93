"""
Row sources for property exports.
"""

from .csv_source import PropertyRow, check_readable, is_hubspot_defined, iter_rows, row_to_definition

__all__ = [
    "PropertyRow",
    "check_readable",
    "is_hubspot_defined",
    "iter_rows",
    "row_to_definition",
]
