"""
Correlation filter payload extractor.
"""
from __future__ import annotations

from datetime import timedelta
from typing import Any, Dict

from .base import FilterPayloadExtractor
from ..durations import format_timespan
from ..models import CORRELATION_FILTER_FIELD, CorrelationFilterProperties


def _property_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, timedelta):
        return format_timespan(value)
    return str(value)


class CorrelationPayloadExtractor(FilterPayloadExtractor):
    """
    Extracts the content type and application properties of a correlation filter.

    Property values are converted to strings (durations in the same form as
    every other duration); a missing value becomes "" and a missing map
    becomes an empty mapping.
    """

    @property
    def field_name(self) -> str:
        return CORRELATION_FILTER_FIELD

    def extract(self, rule_filter: Any) -> CorrelationFilterProperties:
        application_properties = getattr(rule_filter, "properties", None) or {}
        properties: Dict[str, str] = {
            str(key): _property_text(value)
            for key, value in application_properties.items()
        }
        return CorrelationFilterProperties(
            content_type=getattr(rule_filter, "content_type", None),
            properties=properties,
        )
