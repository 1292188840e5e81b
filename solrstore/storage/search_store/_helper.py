from typing import Any

from ...core import DataModel
from ...core.exceptions import (
    InvalidModelDeclarationError,
    InvalidParametersError,
)
from ._models import FilterHint, SearchModel
from ._schema import SchemaHelper


class Helper:
    @staticmethod
    def get_model(
        model: Any,
        default_core: str | None = None,
        default_fields: dict[str, Any] | None = None,
    ) -> SearchModel:
        """Resolve a document type declaration.

        Accepts a SearchModel, a dict, or any object exposing
        ``core`` (or ``table``), ``fields`` and ``field_types``.
        """
        if isinstance(model, SearchModel):
            data = model.model_dump()
        elif isinstance(model, dict):
            data = dict(model)
        elif model is not None and hasattr(model, "fields"):
            data = {
                "core": getattr(model, "core", None)
                or getattr(model, "table", None),
                "fields": getattr(model, "fields"),
                "field_types": getattr(model, "field_types", None),
            }
        else:
            raise InvalidModelDeclarationError(
                f"Invalid model {model!r}: fields are not declared"
            )
        if not data.get("core"):
            data["core"] = default_core
        if default_fields and isinstance(data.get("fields"), dict):
            data["fields"] = {**default_fields, **data["fields"]}
        return SearchModel.parse(
            data,
            error=InvalidModelDeclarationError,
            message="Invalid model",
        )

    @staticmethod
    def get_item(item: Any) -> dict[str, Any]:
        if isinstance(item, DataModel):
            return item.to_dict()
        if not isinstance(item, dict):
            raise InvalidParametersError(
                f"Item must be an object, got {type(item).__name__}"
            )
        return item

    @staticmethod
    def get_items(items: Any) -> list[dict[str, Any]]:
        if not isinstance(items, (list, tuple)):
            raise InvalidParametersError(
                f"Items must be a list, got {type(items).__name__}"
            )
        return [Helper.get_item(item) for item in items]

    @staticmethod
    def get_filter_hints(
        model: SearchModel,
        hints: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Merge field aliases declared by the model under the hints.

        Nested aliases are keyed by their dotted path. Explicit hints
        win over the model declarations.
        """
        result: dict[str, Any] = {
            path: FilterHint(field=field)
            for path, field in SchemaHelper.get_aliases(model.fields).items()
        }
        result.update(hints or {})
        return result
