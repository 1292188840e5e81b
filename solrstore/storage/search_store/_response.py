from __future__ import annotations

from typing import Any, TypeVar

from ...core.exceptions import InternalEngineError
from ._models import FacetCount, SearchGroup, SolrEnvelope, SolrGroupField

PATH_SEPARATOR = "."

# Bookkeeping fields Solr adds to stored documents
INTERNAL_FIELDS: tuple[str, ...] = (
    "_version_",
    "_nest_path_",
    "_root_",
    "_text_",
)

E = TypeVar("E", bound=SolrEnvelope)


class ResponseValidator:
    @staticmethod
    def validate(response: Any, envelope: type[E]) -> E:
        """Validate a Solr response body against an envelope model.

        Every envelope requires ``responseHeader.status`` to be 0.

        Raises:
            InternalEngineError:
                Response does not have the expected shape.
        """
        return envelope.parse(
            response,
            error=InternalEngineError,
            message=f"Invalid Solr response {response!r}",
        )


class ResponseFormatter:
    @staticmethod
    def format(documents: list[dict[str, Any]]) -> list[dict[str, Any]]:
        return [ResponseFormatter.format_document(doc) for doc in documents]

    @staticmethod
    def format_document(document: dict[str, Any]) -> dict[str, Any]:
        """Rebuild nested objects from dotted keys.

        Internal Solr fields are dropped. The input is left untouched.
        """
        result: dict[str, Any] = {}
        for key, value in document.items():
            if key in INTERNAL_FIELDS:
                continue
            if PATH_SEPARATOR not in key:
                ResponseFormatter._merge(result, {key: value})
            else:
                ResponseFormatter._merge(
                    result, ResponseFormatter.unflatten(key, value)
                )
        return result

    @staticmethod
    def unflatten(key: str, value: Any) -> dict[str, Any]:
        """Build the nested fragment for a dotted key.

        ``unflatten("a.b.c", 1)`` returns ``{"a": {"b": {"c": 1}}}``.
        Keys with an empty segment, such as ``"a..b"`` or ``".c"``, are
        not paths and are copied through unchanged.
        """
        root, *properties = key.split(PATH_SEPARATOR)
        if not root or not all(properties):
            return {key: value}
        fragment = value
        for property in reversed(properties):
            fragment = {property: fragment}
        return {root: fragment}

    @staticmethod
    def format_distinct(
        documents: list[dict[str, Any]], key: str
    ) -> list[Any]:
        return [doc[key] for doc in documents if key in doc]

    @staticmethod
    def format_group(
        grouped: dict[str, SolrGroupField],
    ) -> list[SearchGroup]:
        groups: list[SearchGroup] = []
        for field, group_field in grouped.items():
            for group in group_field.groups:
                groups.append(
                    SearchGroup(
                        field=field,
                        value=group.group_value,
                        count=group.doclist.num_found,
                        items=ResponseFormatter.format(group.doclist.docs),
                    )
                )
        return groups

    @staticmethod
    def format_facet_fields(
        facet_fields: dict[str, list[Any]],
    ) -> list[FacetCount]:
        # Solr returns [value, count, value, count, ...]
        counts: list[FacetCount] = []
        for field, values in facet_fields.items():
            for index in range(0, len(values) - 1, 2):
                counts.append(
                    FacetCount(
                        field=field,
                        value=values[index],
                        count=values[index + 1],
                    )
                )
        return counts

    @staticmethod
    def format_facet_pivot(
        facet_pivot: dict[str, list[dict[str, Any]]],
    ) -> list[dict[str, Any]]:
        return [entry for entries in facet_pivot.values() for entry in entries]

    @staticmethod
    def _merge(target: dict[str, Any], source: dict[str, Any]) -> None:
        for key, value in source.items():
            existing = target.get(key)
            if isinstance(existing, dict) and isinstance(value, dict):
                ResponseFormatter._merge(existing, value)
            elif isinstance(existing, dict):
                # A nested object wins over a scalar with the same path
                continue
            elif isinstance(value, dict):
                nested: dict[str, Any] = {}
                ResponseFormatter._merge(nested, value)
                target[key] = nested
            else:
                target[key] = value
