"""
Base class for filter payload extractors.

This module defines the interface that every filter kind with a payload must implement.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class FilterPayloadExtractor(ABC):
    """
    Abstract base class for filter payload extractors.

    Each extractor turns one kind of broker rule filter into the payload
    serialized next to the rule's FilterType tag.
    """

    @property
    @abstractmethod
    def field_name(self) -> str:
        """
        Return the JSON field the payload is written under (e.g. "CorrelationFilter").
        """
        pass

    @abstractmethod
    def extract(self, rule_filter: Any) -> Any:
        """
        Build the payload for a rule filter.

        Args:
            rule_filter: The filter object returned by the administrative API.

        Returns:
            A payload object exposing ``to_dict()``.
        """
        pass
