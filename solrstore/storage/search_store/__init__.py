from solrstore.core.exceptions import (
    InternalEngineError,
    InvalidConfigurationError,
    InvalidFieldDeclarationError,
    InvalidModelDeclarationError,
    InvalidParametersError,
    MissingFilterValueError,
    RequestFailedError,
    RequestTimeoutError,
    SchemaReloadError,
    UnknownFilterOperatorError,
    UnsupportedFilterShapeError,
)

from ._endpoint import Endpoint, EndpointPreset
from ._filters import FilterCompiler
from ._models import (
    DistinctParams,
    FacetCount,
    FacetParams,
    FieldDeclaration,
    FieldDescriptor,
    FieldTypeDescriptor,
    FilterHint,
    FilterOperator,
    FilterTerm,
    GroupParams,
    SchemaDiff,
    SearchFieldType,
    SearchGroup,
    SearchModel,
    SearchParams,
    SolrConfig,
    SolrSchema,
    SortDirection,
    Totals,
)
from ._query import QueryBuilder
from ._response import ResponseFormatter, ResponseValidator
from ._schema import SchemaHelper, SchemaReconciler
from .component import SearchStore

__all__ = [
    "DistinctParams",
    "Endpoint",
    "EndpointPreset",
    "FacetCount",
    "FacetParams",
    "FieldDeclaration",
    "FieldDescriptor",
    "FieldTypeDescriptor",
    "FilterCompiler",
    "FilterHint",
    "FilterOperator",
    "FilterTerm",
    "GroupParams",
    "QueryBuilder",
    "ResponseFormatter",
    "ResponseValidator",
    "SchemaDiff",
    "SchemaHelper",
    "SchemaReconciler",
    "SearchFieldType",
    "SearchGroup",
    "SearchModel",
    "SearchParams",
    "SearchStore",
    "SolrConfig",
    "SolrSchema",
    "SortDirection",
    "Totals",
    "InternalEngineError",
    "InvalidConfigurationError",
    "InvalidFieldDeclarationError",
    "InvalidModelDeclarationError",
    "InvalidParametersError",
    "MissingFilterValueError",
    "RequestFailedError",
    "RequestTimeoutError",
    "SchemaReloadError",
    "UnknownFilterOperatorError",
    "UnsupportedFilterShapeError",
]
