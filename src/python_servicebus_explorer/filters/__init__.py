"""
Rule filter kinds.

Broker rule filters come as a small class hierarchy (correlation, SQL, true,
false). They are exported as a tagged union: a short ``FilterType`` tag plus
an optional kind-specific payload. Kinds with a payload are registered here
and new ones can be added without touching the model or the writer.

Usage:
    from python_servicebus_explorer.filters import build_rule_properties

    properties = build_rule_properties(rule.filter)

Registered filter types:
    - Correlation: content type and application properties (CorrelationFilter)
    - Sql: the SQL expression (SqlFilter)
"""
from __future__ import annotations

from typing import Any, Dict, Optional, Type

from .base import FilterPayloadExtractor
from .correlation import CorrelationPayloadExtractor
from .sql import SqlPayloadExtractor
from ..models import RuleProperties

# Registry of filter types carrying a payload
_EXTRACTOR_REGISTRY: Dict[str, Type[FilterPayloadExtractor]] = {
    'Correlation': CorrelationPayloadExtractor,
    'Sql': SqlPayloadExtractor,
}

# Public list of filter types with a payload
AVAILABLE_FILTER_TYPES = list(_EXTRACTOR_REGISTRY.keys())

_FILTER_SUFFIXES = ("RuleFilter", "Filter")


def filter_type_of(rule_filter: Any) -> str:
    """
    Derive the short filter tag from the filter's class name.

    Example:
        >>> filter_type_of(CorrelationRuleFilter())
        'Correlation'
    """
    class_name = type(rule_filter).__name__
    for suffix in _FILTER_SUFFIXES:
        if class_name.endswith(suffix) and class_name != suffix:
            return class_name[:-len(suffix)]
    return class_name


def get_extractor(filter_type: str) -> Optional[FilterPayloadExtractor]:
    """
    Get the payload extractor for a filter type.

    Args:
        filter_type: The filter tag (e.g. 'Correlation').

    Returns:
        An extractor instance, or None when the filter type has no payload.
    """
    extractor_class = _EXTRACTOR_REGISTRY.get(filter_type)
    if extractor_class is None:
        return None
    return extractor_class()


def register_extractor(filter_type: str, extractor_class: Type[FilterPayloadExtractor]) -> None:
    """
    Register a payload extractor for a filter type.

    Example:
        >>> class MyExtractor(FilterPayloadExtractor):
        ...     @property
        ...     def field_name(self) -> str:
        ...         return "MyFilter"
        ...
        ...     def extract(self, rule_filter):
        ...         return MyFilterProperties(...)
        ...
        >>> register_extractor('My', MyExtractor)
    """
    _EXTRACTOR_REGISTRY[filter_type] = extractor_class
    global AVAILABLE_FILTER_TYPES
    AVAILABLE_FILTER_TYPES = list(_EXTRACTOR_REGISTRY.keys())


def build_rule_properties(rule_filter: Any) -> RuleProperties:
    """
    Map a broker rule filter to RuleProperties.

    Args:
        rule_filter: The filter object of a rule returned by the administrative API.

    Returns:
        RuleProperties with the filter tag and, for registered kinds, its payload.
    """
    filter_type = filter_type_of(rule_filter)
    extractor = get_extractor(filter_type)
    if extractor is None:
        return RuleProperties(filter_type=filter_type)
    return RuleProperties(
        filter_type=filter_type,
        payloads={extractor.field_name: extractor.extract(rule_filter)},
    )


__all__ = [
    'FilterPayloadExtractor',
    'CorrelationPayloadExtractor',
    'SqlPayloadExtractor',
    'filter_type_of',
    'get_extractor',
    'register_extractor',
    'build_rule_properties',
    'AVAILABLE_FILTER_TYPES',
]
