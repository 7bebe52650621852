"""
Utils Package

Serialization, file locking and rule snapshot persistence.
"""

from .serialization import (
    load_document,
    rules_from_dict,
    rules_to_dict,
    summary_to_dict,
    summary_to_json,
)

__all__ = [
    "load_document",
    "rules_from_dict",
    "rules_to_dict",
    "summary_to_dict",
    "summary_to_json",
]
