from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from ...core.exceptions import (
    InternalEngineError,
    InvalidFieldDeclarationError,
    InvalidModelDeclarationError,
)
from ._models import (
    FieldDeclaration,
    FieldDeletion,
    FieldDescriptor,
    FieldTypeDescriptor,
    SchemaDiff,
    SearchFieldType,
)

FIELD_TYPE_MAP: dict[str, str] = {
    SearchFieldType.STRING.value: "string",
    SearchFieldType.TEXT.value: "text_general",
    SearchFieldType.BOOLEAN.value: "boolean",
    SearchFieldType.DATE.value: "pdate",
    SearchFieldType.NUMBER.value: "pint",
    SearchFieldType.FLOAT.value: "pfloat",
    SearchFieldType.DOUBLE.value: "pdouble",
    SearchFieldType.LONG.value: "plong",
}

# Fields Solr manages itself. They are never deleted.
RESERVED_FIELDS: tuple[str, ...] = (
    "id",
    "_version_",
    "_root_",
    "_text_",
    "_nest_path_",
)

MAX_FIELD_DEPTH = 32


class SchemaHelper:
    @staticmethod
    def flatten(
        fields: dict[str, Any],
        field_types: dict[str, dict[str, Any]] | None = None,
    ) -> list[FieldDescriptor]:
        """Flatten field declarations into Solr field descriptors.

        Every leaf produces one descriptor named by its dotted path.
        Nested objects only contribute their leaves.

        Args:
            fields:
                Field declarations by name.
            field_types:
                Custom field type declarations by name.

        Returns:
            Field descriptors in declaration order.

        Raises:
            InvalidFieldDeclarationError:
                Declaration is ambiguous, malformed or cyclic.
        """
        descriptors, _ = SchemaHelper._walk(fields, field_types)
        return descriptors

    @staticmethod
    def get_aliases(fields: dict[str, Any]) -> dict[str, str]:
        """Collect the storage field aliases of a declaration by path.

        ``{"a": {"type": {"b": {"type": "string", "field": "ab"}}}}``
        returns ``{"a.b": "ab"}``.
        """
        _, aliases = SchemaHelper._walk(fields, None)
        return aliases

    @staticmethod
    def _walk(
        fields: dict[str, Any],
        field_types: dict[str, dict[str, Any]] | None,
    ) -> tuple[list[FieldDescriptor], dict[str, str]]:
        if not isinstance(fields, dict):
            raise InvalidFieldDeclarationError(
                "Field declarations must be a mapping"
            )
        descriptors: list[FieldDescriptor] = []
        aliases: dict[str, str] = {}
        for name, value in fields.items():
            SchemaHelper._flatten_field(
                path=SchemaHelper._get_path(None, name),
                value=value,
                nested=False,
                field_types=field_types or {},
                descriptors=descriptors,
                aliases=aliases,
                ancestors=frozenset(),
            )
        return descriptors, aliases

    @staticmethod
    def get_field_type(type_name: str) -> str:
        return FIELD_TYPE_MAP.get(type_name, type_name)

    @staticmethod
    def _flatten_field(
        path: str,
        value: Any,
        nested: bool,
        field_types: dict[str, dict[str, Any]],
        descriptors: list[FieldDescriptor],
        aliases: dict[str, str],
        ancestors: frozenset[int],
    ) -> None:
        if isinstance(value, dict):
            if id(value) in ancestors:
                raise InvalidFieldDeclarationError(
                    f"Field '{path}' references itself"
                )
            ancestors = ancestors | {id(value)}
        if path.count(".") >= MAX_FIELD_DEPTH:
            raise InvalidFieldDeclarationError(
                f"Field '{path}' is nested deeper than {MAX_FIELD_DEPTH}"
            )
        try:
            declaration = FieldDeclaration.normalize(value, nested=nested)
        except ValidationError as e:
            raise InvalidFieldDeclarationError(
                f"Invalid declaration for field '{path}'"
            ) from e
        if declaration.field:
            aliases[path] = declaration.field

        type = declaration.type
        if isinstance(type, dict):
            for child, child_value in type.items():
                SchemaHelper._flatten_field(
                    path=SchemaHelper._get_path(path, child),
                    value=child_value,
                    nested=True,
                    field_types=field_types,
                    descriptors=descriptors,
                    aliases=aliases,
                    ancestors=ancestors,
                )
        elif isinstance(type, list):
            if len(type) != 1:
                raise InvalidFieldDeclarationError(
                    f"Field '{path}' must declare exactly one array type, "
                    f"got {len(type)}"
                )
            descriptors.append(
                SchemaHelper._build_descriptor(
                    path, type[0], True, field_types
                )
            )
        else:
            descriptors.append(
                SchemaHelper._build_descriptor(path, type, False, field_types)
            )

    @staticmethod
    def _build_descriptor(
        name: str,
        type_name: Any,
        multi_valued: bool,
        field_types: dict[str, dict[str, Any]],
    ) -> FieldDescriptor:
        if type_name is None or type_name is True:
            type_name = SearchFieldType.STRING.value
        if not isinstance(type_name, str) or not type_name:
            raise InvalidFieldDeclarationError(
                f"Field '{name}' has an unsupported type {type_name!r}"
            )
        indexed = True
        stored = True
        custom = field_types.get(type_name)
        if isinstance(custom, dict):
            indexed = custom.get("indexed", True)
            stored = custom.get("stored", True)
            multi_valued = multi_valued or custom.get("multiValued", False)
        return FieldDescriptor(
            name=name,
            type=SchemaHelper.get_field_type(type_name),
            multi_valued=multi_valued,
            indexed=indexed,
            stored=stored,
        )

    @staticmethod
    def _get_path(parent: str | None, name: Any) -> str:
        if not isinstance(name, str) or not name or "." in name:
            raise InvalidFieldDeclarationError(
                f"Invalid field name {name!r}"
                + (f" in '{parent}'" if parent else "")
            )
        return f"{parent}.{name}" if parent else name


class SchemaReconciler:
    @staticmethod
    def reconcile(
        fields: dict[str, Any],
        field_types: dict[str, dict[str, Any]] | None,
        current_fields: list[dict[str, Any]],
        current_field_types: list[dict[str, Any]],
    ) -> SchemaDiff | None:
        """Compute the schema operations a model needs.

        Args:
            fields:
                Declared fields.
            field_types:
                Declared custom field types.
            current_fields:
                Fields reported by Solr.
            current_field_types:
                Field types reported by Solr.

        Returns:
            Schema diff, or None when the schema is up to date.
        """
        desired = SchemaHelper.flatten(fields, field_types)
        desired_types = SchemaReconciler._get_field_types(field_types)

        diff = SchemaDiff()
        SchemaReconciler._diff_field_types(
            diff, desired_types, current_field_types
        )
        SchemaReconciler._diff_fields(diff, desired, current_fields)
        if diff.is_empty():
            return None
        return diff

    @staticmethod
    def _get_field_types(
        field_types: dict[str, dict[str, Any]] | None,
    ) -> list[FieldTypeDescriptor]:
        if not field_types:
            return []
        if not isinstance(field_types, dict):
            raise InvalidModelDeclarationError(
                "Field type declarations must be a mapping"
            )
        result: list[FieldTypeDescriptor] = []
        for name, declaration in field_types.items():
            if not isinstance(declaration, dict):
                raise InvalidModelDeclarationError(
                    f"Invalid declaration for field type '{name}'"
                )
            result.append(
                FieldTypeDescriptor.parse(
                    {**declaration, "name": name},
                    error=InvalidModelDeclarationError,
                    message=f"Invalid declaration for field type '{name}'",
                )
            )
        return result

    @staticmethod
    def _diff_field_types(
        diff: SchemaDiff,
        desired: list[FieldTypeDescriptor],
        current: list[dict[str, Any]],
    ) -> None:
        current_by_name = SchemaReconciler._index_by_name(current)
        for field_type in desired:
            existing = current_by_name.get(field_type.name)
            if existing is None:
                diff.add_field_types.append(field_type)
                continue
            if existing != field_type.to_command():
                diff.replace_field_types.append(field_type)

    @staticmethod
    def _diff_fields(
        diff: SchemaDiff,
        desired: list[FieldDescriptor],
        current: list[dict[str, Any]],
    ) -> None:
        current_by_name = SchemaReconciler._index_by_name(current)
        for descriptor in desired:
            existing = current_by_name.get(descriptor.name)
            if existing is None:
                diff.add_fields.append(descriptor)
            elif descriptor != SchemaReconciler._to_descriptor(existing):
                diff.replace_fields.append(descriptor)

        desired_names = {descriptor.name for descriptor in desired}
        for name in current_by_name:
            if name in desired_names or name in RESERVED_FIELDS:
                continue
            diff.delete_fields.append(FieldDeletion(name=name))

    @staticmethod
    def _to_descriptor(field: dict[str, Any]) -> FieldDescriptor:
        return FieldDescriptor.parse(
            field,
            error=InternalEngineError,
            message=f"Invalid field reported by Solr: {field!r}",
        )

    @staticmethod
    def _index_by_name(
        items: list[dict[str, Any]] | None,
    ) -> dict[str, dict[str, Any]]:
        return {
            item["name"]: item
            for item in items or []
            if isinstance(item, dict) and isinstance(item.get("name"), str)
        }
