"""
SQL filter payload extractor.
"""
from __future__ import annotations

from typing import Any

from .base import FilterPayloadExtractor
from ..models import SQL_FILTER_FIELD, SqlFilterProperties


class SqlPayloadExtractor(FilterPayloadExtractor):

    @property
    def field_name(self) -> str:
        return SQL_FILTER_FIELD

    def extract(self, rule_filter: Any) -> SqlFilterProperties:
        return SqlFilterProperties(sql_expression=getattr(rule_filter, "sql_expression", None) or "")
