from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import (
    ConfigDict,
    Field,
    StrictStr,
    field_validator,
    model_validator,
)

from ...core import DataModel


class SearchFieldType(str, Enum):
    STRING = "string"  # exact match
    TEXT = "text"  # full-text search
    NUMBER = "number"  # 32-bit integer
    LONG = "long"  # 64-bit integer
    FLOAT = "float"
    DOUBLE = "double"
    BOOLEAN = "boolean"
    DATE = "date"


class FilterOperator(str, Enum):
    EQUAL = "equal"
    NOT_EQUAL = "notEqual"
    SEARCH = "search"
    GREATER = "greater"
    GREATER_OR_EQUAL = "greaterOrEqual"
    LESSER = "lesser"
    LESSER_OR_EQUAL = "lesserOrEqual"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class FilterTerm(DataModel):
    """Filter term."""

    type: FilterOperator
    """Filter operator."""

    value: Any
    """Scalar value or list of scalar values."""


class FilterHint(DataModel):
    """Per field filter hint."""

    field: str | None = None
    """Storage field the filter key maps to."""

    type: FilterOperator | None = None
    """Operator used when a filter term omits one."""


class FieldDeclaration(DataModel):
    """Declaration of a document field.

    ``type`` is a scalar type name (or a custom field type name),
    a single element list for multi-valued fields, or a mapping
    of nested declarations. ``None`` means ``string``.
    """

    type: str | list[Any] | dict[str, Any] | None = None
    """Declared type."""

    field: str | None = None
    """Storage field alias used by filters."""

    @classmethod
    def normalize(
        cls, value: Any, nested: bool = False
    ) -> FieldDeclaration:
        """Build a declaration from its shorthand forms.

        Top level values are ``{type, field}`` mappings, ``True``,
        ``None`` or a bare type. Values inside a nested mapping are
        bare types, unless they are a ``{type, field}`` mapping.
        """
        if isinstance(value, FieldDeclaration):
            return value
        if value is None or value is True:
            return FieldDeclaration()
        if isinstance(value, dict):
            if not nested or (
                "type" in value and set(value) <= {"type", "field"}
            ):
                return FieldDeclaration.model_validate(value)
        return FieldDeclaration(type=value)


class FieldDescriptor(DataModel):
    """Flat, storage ready description of one field."""

    name: str
    """Dotted path of the field."""

    type: str
    """Solr field type name."""

    multi_valued: bool = Field(default=False, alias="multiValued")
    """A value indicating whether the field holds many values."""

    indexed: bool = True
    """A value indicating whether the field is indexed."""

    stored: bool = True
    """A value indicating whether the field is stored."""

    def to_command(self) -> dict[str, Any]:
        return self.to_dict()


class FieldTypeDescriptor(DataModel):
    """Custom Solr field type."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str
    class_name: str = Field(alias="class")
    indexed: bool | None = None
    stored: bool | None = None
    multi_valued: bool | None = Field(default=None, alias="multiValued")

    def to_command(self) -> dict[str, Any]:
        return self.to_dict(exclude_none=True)


class FieldDeletion(DataModel):
    name: str

    def to_command(self) -> dict[str, Any]:
        return self.to_dict()


class SchemaDiff(DataModel):
    """Operations that bring a Solr schema in line with a model."""

    add_field_types: list[FieldTypeDescriptor] = []
    replace_field_types: list[FieldTypeDescriptor] = []
    add_fields: list[FieldDescriptor] = []
    replace_fields: list[FieldDescriptor] = []
    delete_fields: list[FieldDeletion] = []

    def is_empty(self) -> bool:
        return not (
            self.add_field_types
            or self.replace_field_types
            or self.add_fields
            or self.replace_fields
            or self.delete_fields
        )

    def to_commands(self) -> dict[str, list[dict[str, Any]]]:
        """Bulk schema API document.

        Field types go first, since new fields may reference them.
        """
        buckets: list[tuple[str, list[Any]]] = [
            ("add-field-type", self.add_field_types),
            ("replace-field-type", self.replace_field_types),
            ("add-field", self.add_fields),
            ("replace-field", self.replace_fields),
            ("delete-field", self.delete_fields),
        ]
        return {
            command: [item.to_command() for item in items]
            for command, items in buckets
            if items
        }


class SolrSchema(DataModel):
    """Live schema of a core."""

    fields: list[dict[str, Any]] = []
    field_types: list[dict[str, Any]] = []


class SearchModel(DataModel):
    """Document type declaration."""

    core: str = Field(min_length=1)
    """Solr core (collection) name."""

    fields: dict[str, Any]
    """Field declarations."""

    field_types: dict[str, dict[str, Any]] | None = None
    """Custom field type declarations."""


class SearchParams(DataModel):
    """Read parameters."""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=500, ge=0)
    filters: dict[str, Any] | None = None
    order: dict[str, SortDirection] | None = None
    fields: dict[str, FilterHint] | None = None
    """Filter hints by filter key."""

    @field_validator("order", mode="before")
    @classmethod
    def _lower_directions(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {
                k: v.lower() if isinstance(v, str) else v
                for k, v in value.items()
            }
        return value

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class DistinctParams(SearchParams):
    """Distinct values parameters."""

    key: StrictStr = Field(min_length=1)
    """Field to collect distinct values from."""


class GroupParams(SearchParams):
    """Grouped search parameters."""

    key: StrictStr = Field(min_length=1)
    """Field to group by."""

    group_limit: int = Field(default=10, ge=1)
    """Documents returned per group."""


class FacetParams(SearchParams):
    """Facet parameters."""

    field: StrictStr | list[StrictStr]
    """Field to facet on, or list of fields for a pivot facet."""

    mincount: int = Field(default=1, ge=0)
    """Minimum count for a value to be returned."""

    @field_validator("field")
    @classmethod
    def _check_pivot(cls, value: Any) -> Any:
        if isinstance(value, list) and not value:
            raise ValueError("at least one facet field is required")
        return value


class Totals(DataModel):
    total: int
    page_size: int = Field(alias="pageSize")
    pages: int
    page: int


class SearchGroup(DataModel):
    field: str
    value: Any
    count: int
    items: list[dict[str, Any]]


class FacetCount(DataModel):
    field: str
    value: Any
    count: int


class SolrConfig(DataModel):
    """Connection config."""

    url: str = Field(pattern=r"^https?://")
    """Solr base url, e.g. http://localhost:8983."""

    core: str | None = None
    """Default core when a model does not name one."""

    username: str | None = None
    password: str | None = None

    timeout: float | None = Field(default=60, gt=0)
    """HTTP timeout in seconds."""

    allow_empty_delete: bool = False
    """Accept delete requests without filters as a no-op."""

    default_fields: dict[str, Any] | None = None
    """Field declarations added to every model."""

    config_set: str = "_default"
    """Config set used to create cores."""

    @field_validator("url")
    @classmethod
    def _strip_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @model_validator(mode="after")
    def _check_auth(self) -> SolrConfig:
        if (self.username is None) != (self.password is None):
            raise ValueError("username and password must be set together")
        return self

    @property
    def auth(self) -> tuple[str, str] | None:
        if self.username is None or self.password is None:
            return None
        return (self.username, self.password)


class SolrResponseHeader(DataModel):
    status: Literal[0]


class SolrEnvelope(DataModel):
    response_header: SolrResponseHeader = Field(alias="responseHeader")


class SolrDocList(DataModel):
    num_found: int = Field(alias="numFound")
    docs: list[dict[str, Any]]


class SolrQueryEnvelope(SolrEnvelope):
    response: SolrDocList


class SolrGroup(DataModel):
    group_value: Any = Field(alias="groupValue")
    doclist: SolrDocList


class SolrGroupField(DataModel):
    matches: int
    groups: list[SolrGroup]


class SolrGroupEnvelope(SolrEnvelope):
    grouped: dict[str, SolrGroupField]


class SolrFacetCounts(DataModel):
    facet_fields: dict[str, list[Any]] = {}
    facet_pivot: dict[str, list[dict[str, Any]]] = {}


class SolrFacetEnvelope(SolrEnvelope):
    response: SolrDocList
    facet_counts: SolrFacetCounts


class SolrFieldsEnvelope(SolrEnvelope):
    fields: list[dict[str, Any]]


class SolrFieldTypesEnvelope(SolrEnvelope):
    field_types: list[dict[str, Any]] = Field(alias="fieldTypes")


class SolrPingEnvelope(SolrEnvelope):
    status: str


class SolrCoreStatusEnvelope(SolrEnvelope):
    status: dict[str, dict[str, Any]]
