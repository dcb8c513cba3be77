"""Human-readable and JSON rendering of results."""

from .formatter import format_summary, format_validation_result, group_by_entity

__all__ = ["format_summary", "format_validation_result", "group_by_entity"]
