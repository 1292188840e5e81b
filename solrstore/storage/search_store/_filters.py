from __future__ import annotations

import re
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any

from ...core.exceptions import (
    MissingFilterValueError,
    UnknownFilterOperatorError,
    UnsupportedFilterShapeError,
)
from ._models import FilterHint, FilterOperator, FilterTerm

SPECIAL_CHARACTERS = frozenset('\\+-!():^[]"{}~*?|&/')
PLAIN_BOUND = re.compile(r"[\w.:+\-]+")


class FilterCompiler:
    """Compiles filter mappings into Solr filter query clauses.

    Each filter key produces one clause. Many terms for the same
    key are joined with ``OR``; Solr combines the returned clauses
    with ``AND``.
    """

    @staticmethod
    def compile(
        filters: dict[str, Any] | None,
        hints: dict[str, Any] | None = None,
    ) -> list[str]:
        if not filters:
            return []
        if not isinstance(filters, dict):
            raise UnsupportedFilterShapeError(
                f"Filters must be a mapping, got {type(filters).__name__}"
            )
        field_hints = FilterCompiler._get_hints(hints)
        clauses: list[str] = []
        for key, raw_terms in filters.items():
            hint = field_hints.get(key) or FilterHint()
            field = hint.field or key
            default_operator = hint.type or FilterOperator.EQUAL
            terms = FilterCompiler._get_terms(key, raw_terms, default_operator)
            clauses.append(
                " OR ".join(
                    FilterCompiler.format_term(field, term.type, value)
                    for term in terms
                    for value in FilterCompiler._get_values(term.value)
                )
            )
        return clauses

    @staticmethod
    def format_term(field: str, operator: FilterOperator, value: Any) -> str:
        value = FilterCompiler._format_value(value)
        if operator == FilterOperator.EQUAL:
            return f"{field}:{FilterCompiler.quote(value)}"
        if operator == FilterOperator.NOT_EQUAL:
            return f"-{field}:{FilterCompiler.quote(value)}"
        if operator == FilterOperator.SEARCH:
            return f"{field}:*{FilterCompiler.escape(value)}*"
        value = FilterCompiler.format_bound(value)
        if operator == FilterOperator.GREATER:
            return f"{field}:{{{value} TO *}}"
        if operator == FilterOperator.GREATER_OR_EQUAL:
            return f"{field}:[{value} TO *]"
        if operator == FilterOperator.LESSER:
            return f"{field}:{{* TO {value}}}"
        if operator == FilterOperator.LESSER_OR_EQUAL:
            return f"{field}:[* TO {value}]"
        raise UnknownFilterOperatorError(
            f"'{operator}' is not a valid or supported filter type."
        )

    @staticmethod
    def quote(value: str) -> str:
        """Wrap a value in a phrase, escaping backslashes and quotes."""
        value = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{value}"'

    @staticmethod
    def escape(value: str) -> str:
        """Escape query syntax characters and whitespace in a bare term."""
        return "".join(
            f"\\{c}" if c in SPECIAL_CHARACTERS or c.isspace() else c
            for c in value
        )

    @staticmethod
    def format_bound(value: str) -> str:
        # numbers and dates stay bare, anything else is a quoted bound
        if value != "TO" and PLAIN_BOUND.fullmatch(value):
            return value
        return FilterCompiler.quote(value)

    @staticmethod
    def _get_hints(hints: dict[str, Any] | None) -> dict[str, FilterHint]:
        if not hints:
            return {}
        result: dict[str, FilterHint] = {}
        for key, hint in hints.items():
            if isinstance(hint, FilterHint):
                result[key] = hint
            elif isinstance(hint, dict):
                result[key] = FilterHint.parse(
                    hint,
                    error=UnknownFilterOperatorError,
                    message=f"Invalid filter hint for field '{key}'",
                )
        return result

    @staticmethod
    def _get_terms(
        key: str,
        raw_terms: Any,
        default_operator: FilterOperator,
    ) -> list[FilterTerm]:
        if isinstance(raw_terms, (list, tuple)):
            if not raw_terms:
                raise MissingFilterValueError(
                    f"Invalid filters for field '{key}': "
                    "Missing value for filter."
                )
            items = list(raw_terms)
        else:
            items = [raw_terms]
        terms: list[FilterTerm] = []
        for item in items:
            if isinstance(item, (list, tuple)):
                raise UnsupportedFilterShapeError(
                    f"Invalid filters for field '{key}': "
                    "Nested lists are not supported."
                )
            terms.append(
                FilterCompiler._get_term(key, item, default_operator)
            )
        return terms

    @staticmethod
    def _get_term(
        key: str,
        item: Any,
        default_operator: FilterOperator,
    ) -> FilterTerm:
        if isinstance(item, FilterTerm):
            operator: Any = item.type
            value = item.value
        elif isinstance(item, dict) and ("type" in item or "value" in item):
            operator = item.get("type") or default_operator
            value = item.get("value")
        else:
            operator = default_operator
            value = item

        FilterCompiler._check_shape(key, value)
        if FilterCompiler._is_missing(value):
            raise MissingFilterValueError(
                f"Invalid filters for field '{key}': "
                f"Missing value for filter type {_operator_name(operator)}."
            )
        try:
            operator = FilterOperator(operator)
        except ValueError as e:
            raise UnknownFilterOperatorError(
                f"'{operator}' is not a valid or supported filter type."
            ) from e
        return FilterTerm(type=operator, value=value)

    @staticmethod
    def _check_shape(key: str, value: Any) -> None:
        if isinstance(value, dict):
            raise UnsupportedFilterShapeError(
                f"Invalid filters for field '{key}': "
                "Object values are not supported."
            )
        if isinstance(value, (list, tuple)):
            for v in value:
                if isinstance(v, (list, tuple, dict)):
                    raise UnsupportedFilterShapeError(
                        f"Invalid filters for field '{key}': "
                        "Nested values are not supported."
                    )

    @staticmethod
    def _is_missing(value: Any) -> bool:
        # 0 and False are valid filter values
        if value is None or value == "":
            return True
        if isinstance(value, (list, tuple)):
            return not value or any(
                FilterCompiler._is_missing(v) for v in value
            )
        return False

    @staticmethod
    def _get_values(value: Any) -> list[Any]:
        if isinstance(value, (list, tuple)):
            return list(value)
        return [value]

    @staticmethod
    def _format_value(value: Any) -> str:
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, datetime):
            if value.tzinfo is not None:
                value = value.astimezone(timezone.utc)
            return value.strftime("%Y-%m-%dT%H:%M:%SZ")
        if isinstance(value, date):
            return f"{value.isoformat()}T00:00:00Z"
        if isinstance(value, Enum):
            return str(value.value)
        return str(value)


def _operator_name(operator: Any) -> str:
    if isinstance(operator, FilterOperator):
        return operator.value
    return str(operator)
