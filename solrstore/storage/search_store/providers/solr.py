"""
Solr.
"""

from __future__ import annotations

__all__ = ["Solr"]

from typing import Any

from solrstore._common import HttpTransport
from solrstore.core import DataModel, Provider, Response, log
from solrstore.core.exceptions import (
    InternalEngineError,
    InvalidConfigurationError,
    InvalidParametersError,
    RequestFailedError,
    RequestTimeoutError,
    SchemaReloadError,
)

from .._endpoint import Endpoint, EndpointPreset
from .._helper import Helper
from .._models import (
    DistinctParams,
    FacetCount,
    FacetParams,
    GroupParams,
    SchemaDiff,
    SearchGroup,
    SearchModel,
    SearchParams,
    SolrConfig,
    SolrCoreStatusEnvelope,
    SolrEnvelope,
    SolrFacetEnvelope,
    SolrFieldsEnvelope,
    SolrFieldTypesEnvelope,
    SolrGroupEnvelope,
    SolrPingEnvelope,
    SolrQueryEnvelope,
    SolrSchema,
    Totals,
)
from .._query import QueryBuilder
from .._response import ResponseFormatter, ResponseValidator
from .._schema import SchemaReconciler


class Solr(Provider):
    config: SolrConfig
    nparams: dict[str, Any]

    _transport: HttpTransport

    def __init__(
        self,
        url: str,
        core: str | None = None,
        username: str | None = None,
        password: str | None = None,
        timeout: float | None = 60,
        allow_empty_delete: bool = False,
        default_fields: dict[str, Any] | None = None,
        config_set: str = "_default",
        nparams: dict[str, Any] = dict(),
        **kwargs,
    ):
        """Initialize.

        Args:
            url:
                Solr base url, e.g. http://localhost:8983.
            core:
                Default core when a model does not name one.
            username:
                Basic auth username.
            password:
                Basic auth password.
            timeout:
                HTTP timeout in seconds. Defaults to 60.
            allow_empty_delete:
                Accept delete requests whose filters resolve to
                nothing as a no-op instead of raising.
            default_fields:
                Field declarations added to every model.
            config_set:
                Config set used to create cores.
            nparams:
                Native parameters to httpx clients.
        """
        self.config = SolrConfig.parse(
            dict(
                url=url,
                core=core,
                username=username,
                password=password,
                timeout=timeout,
                allow_empty_delete=allow_empty_delete,
                default_fields=default_fields,
                config_set=config_set,
            ),
            error=InvalidConfigurationError,
            message="Error validating connection config",
        )
        self.nparams = nparams
        self._transport = HttpTransport(
            timeout=self.config.timeout,
            auth=self.config.auth,
            nparams=nparams,
        )
        super().__init__(**kwargs)

    def _get_model(self, model: Any) -> SearchModel:
        return Helper.get_model(
            model,
            default_core=self._get_default_core(),
            default_fields=self.config.default_fields,
        )

    def _get_core(self, model: Any) -> str:
        if model is None:
            core = self._get_default_core()
            if not core:
                raise InvalidParametersError("Core name must be specified")
            return core
        if isinstance(model, str):
            return model
        return self._get_model(model).core

    def _get_default_core(self) -> str | None:
        component = getattr(self, "__component__", None)
        return self.config.core or getattr(component, "core", None)

    def _get_converter(self) -> OperationConverter:
        return OperationConverter(self.config)

    def insert(
        self,
        model: SearchModel | dict | Any,
        item: dict[str, Any] | DataModel,
        **kwargs: Any,
    ) -> Response[Any]:
        args = self._get_converter().convert_insert(
            self._get_model(model), item
        )
        nresult = self._transport.post(**args)
        return ResultConverter.convert_insert(args["body"], nresult)

    async def ainsert(
        self,
        model: SearchModel | dict | Any,
        item: dict[str, Any] | DataModel,
        **kwargs: Any,
    ) -> Response[Any]:
        args = self._get_converter().convert_insert(
            self._get_model(model), item
        )
        nresult = await self._transport.apost(**args)
        return ResultConverter.convert_insert(args["body"], nresult)

    def multi_insert(
        self,
        model: SearchModel | dict | Any,
        items: list[dict[str, Any] | DataModel],
        **kwargs: Any,
    ) -> Response[list[dict[str, Any]]]:
        args = self._get_converter().convert_multi_insert(
            self._get_model(model), items
        )
        nresult = self._transport.post(**args)
        return ResultConverter.convert_multi_insert(args["body"], nresult)

    async def amulti_insert(
        self,
        model: SearchModel | dict | Any,
        items: list[dict[str, Any] | DataModel],
        **kwargs: Any,
    ) -> Response[list[dict[str, Any]]]:
        args = self._get_converter().convert_multi_insert(
            self._get_model(model), items
        )
        nresult = await self._transport.apost(**args)
        return ResultConverter.convert_multi_insert(args["body"], nresult)

    def get(
        self,
        model: SearchModel | dict | Any,
        params: dict | SearchParams | None = None,
        **kwargs: Any,
    ) -> Response[list[dict[str, Any]]]:
        args = self._get_converter().convert_get(
            self._get_model(model), params
        )
        nresult = self._transport.post(**args)
        return ResultConverter.convert_get(nresult)

    async def aget(
        self,
        model: SearchModel | dict | Any,
        params: dict | SearchParams | None = None,
        **kwargs: Any,
    ) -> Response[list[dict[str, Any]]]:
        args = self._get_converter().convert_get(
            self._get_model(model), params
        )
        nresult = await self._transport.apost(**args)
        return ResultConverter.convert_get(nresult)

    def get_totals(
        self,
        model: SearchModel | dict | Any,
        params: dict | SearchParams | None = None,
        **kwargs: Any,
    ) -> Response[Totals]:
        params = SearchParams.parse(params)
        args = self._get_converter().convert_get_totals(
            self._get_model(model), params
        )
        nresult = self._transport.post(**args)
        return ResultConverter.convert_get_totals(params, nresult)

    async def aget_totals(
        self,
        model: SearchModel | dict | Any,
        params: dict | SearchParams | None = None,
        **kwargs: Any,
    ) -> Response[Totals]:
        params = SearchParams.parse(params)
        args = self._get_converter().convert_get_totals(
            self._get_model(model), params
        )
        nresult = await self._transport.apost(**args)
        return ResultConverter.convert_get_totals(params, nresult)

    def distinct(
        self,
        model: SearchModel | dict | Any,
        params: dict | DistinctParams,
        **kwargs: Any,
    ) -> Response[list[Any]]:
        params = DistinctParams.parse(
            params, message="Invalid distinct parameters"
        )
        args = self._get_converter().convert_distinct(
            self._get_model(model), params
        )
        nresult = self._transport.post(**args)
        return ResultConverter.convert_distinct(params, nresult)

    async def adistinct(
        self,
        model: SearchModel | dict | Any,
        params: dict | DistinctParams,
        **kwargs: Any,
    ) -> Response[list[Any]]:
        params = DistinctParams.parse(
            params, message="Invalid distinct parameters"
        )
        args = self._get_converter().convert_distinct(
            self._get_model(model), params
        )
        nresult = await self._transport.apost(**args)
        return ResultConverter.convert_distinct(params, nresult)

    def group(
        self,
        model: SearchModel | dict | Any,
        params: dict | GroupParams,
        **kwargs: Any,
    ) -> Response[list[SearchGroup]]:
        args = self._get_converter().convert_group(
            self._get_model(model), params
        )
        nresult = self._transport.post(**args)
        return ResultConverter.convert_group(nresult)

    async def agroup(
        self,
        model: SearchModel | dict | Any,
        params: dict | GroupParams,
        **kwargs: Any,
    ) -> Response[list[SearchGroup]]:
        args = self._get_converter().convert_group(
            self._get_model(model), params
        )
        nresult = await self._transport.apost(**args)
        return ResultConverter.convert_group(nresult)

    def facet(
        self,
        model: SearchModel | dict | Any,
        params: dict | FacetParams,
        **kwargs: Any,
    ) -> Response[list[FacetCount] | list[dict[str, Any]]]:
        params = FacetParams.parse(params, message="Invalid facet parameters")
        args = self._get_converter().convert_facet(
            self._get_model(model), params
        )
        nresult = self._transport.post(**args)
        return ResultConverter.convert_facet(params, nresult)

    async def afacet(
        self,
        model: SearchModel | dict | Any,
        params: dict | FacetParams,
        **kwargs: Any,
    ) -> Response[list[FacetCount] | list[dict[str, Any]]]:
        params = FacetParams.parse(params, message="Invalid facet parameters")
        args = self._get_converter().convert_facet(
            self._get_model(model), params
        )
        nresult = await self._transport.apost(**args)
        return ResultConverter.convert_facet(params, nresult)

    def multi_remove(
        self,
        model: SearchModel | dict | Any,
        filters: dict[str, Any] | None,
        hints: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> Response[bool]:
        args = self._get_converter().convert_multi_remove(
            self._get_model(model), filters, hints
        )
        if args is None:
            return Response(result=False)
        nresult = self._transport.post(**args)
        return ResultConverter.convert_write(True, nresult)

    async def amulti_remove(
        self,
        model: SearchModel | dict | Any,
        filters: dict[str, Any] | None,
        hints: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> Response[bool]:
        args = self._get_converter().convert_multi_remove(
            self._get_model(model), filters, hints
        )
        if args is None:
            return Response(result=False)
        nresult = await self._transport.apost(**args)
        return ResultConverter.convert_write(True, nresult)

    def get_schema(
        self,
        model: SearchModel | dict | Any,
        **kwargs: Any,
    ) -> Response[SolrSchema]:
        converter = self._get_converter()
        core = self._get_core(model)
        nfields = self._transport.get(
            **converter.convert_get_fields(core)
        )
        nfield_types = self._transport.get(
            **converter.convert_get_field_types(core)
        )
        return ResultConverter.convert_get_schema(nfields, nfield_types)

    async def aget_schema(
        self,
        model: SearchModel | dict | Any,
        **kwargs: Any,
    ) -> Response[SolrSchema]:
        converter = self._get_converter()
        core = self._get_core(model)
        nfields = await self._transport.aget(
            **converter.convert_get_fields(core)
        )
        nfield_types = await self._transport.aget(
            **converter.convert_get_field_types(core)
        )
        return ResultConverter.convert_get_schema(nfields, nfield_types)

    def build_schema(
        self,
        model: SearchModel | dict | Any,
        current: dict | SolrSchema | None = None,
        **kwargs: Any,
    ) -> Response[SchemaDiff | None]:
        search_model = self._get_model(model)
        OperationConverter.check_schema(search_model)
        native = None
        if current is None:
            response = self.get_schema(search_model)
            current, native = response.result, response.native
        diff = OperationConverter.convert_build_schema(search_model, current)
        return Response(result=diff, native=native)

    async def abuild_schema(
        self,
        model: SearchModel | dict | Any,
        current: dict | SolrSchema | None = None,
        **kwargs: Any,
    ) -> Response[SchemaDiff | None]:
        search_model = self._get_model(model)
        OperationConverter.check_schema(search_model)
        native = None
        if current is None:
            response = await self.aget_schema(search_model)
            current, native = response.result, response.native
        diff = OperationConverter.convert_build_schema(search_model, current)
        return Response(result=diff, native=native)

    def update_schema(
        self,
        model: SearchModel | dict | Any,
        **kwargs: Any,
    ) -> Response[SchemaDiff | None]:
        search_model = self._get_model(model)
        diff = self.build_schema(search_model).result
        args = self._get_converter().convert_update_schema(
            search_model, diff
        )
        if args is None:
            return Response(result=None)
        nresult = self._transport.post(**args)
        ResultConverter.convert_write(True, nresult)
        try:
            self.reload_core(search_model)
        except (
            RequestFailedError,
            RequestTimeoutError,
            InternalEngineError,
        ) as e:
            raise ResultConverter.convert_reload_error(
                search_model, diff, e
            ) from e
        return Response(result=diff, native=nresult)

    async def aupdate_schema(
        self,
        model: SearchModel | dict | Any,
        **kwargs: Any,
    ) -> Response[SchemaDiff | None]:
        search_model = self._get_model(model)
        diff = (await self.abuild_schema(search_model)).result
        args = self._get_converter().convert_update_schema(
            search_model, diff
        )
        if args is None:
            return Response(result=None)
        nresult = await self._transport.apost(**args)
        ResultConverter.convert_write(True, nresult)
        try:
            await self.areload_core(search_model)
        except (
            RequestFailedError,
            RequestTimeoutError,
            InternalEngineError,
        ) as e:
            raise ResultConverter.convert_reload_error(
                search_model, diff, e
            ) from e
        return Response(result=diff, native=nresult)

    def ping(
        self,
        model: SearchModel | dict | Any = None,
        **kwargs: Any,
    ) -> Response[bool]:
        args = self._get_converter().convert_ping(self._get_core(model))
        nresult = self._transport.get(**args)
        return ResultConverter.convert_ping(nresult)

    async def aping(
        self,
        model: SearchModel | dict | Any = None,
        **kwargs: Any,
    ) -> Response[bool]:
        args = self._get_converter().convert_ping(self._get_core(model))
        nresult = await self._transport.aget(**args)
        return ResultConverter.convert_ping(nresult)

    def has_core(
        self,
        model: SearchModel | dict | Any = None,
        **kwargs: Any,
    ) -> Response[bool]:
        core = self._get_core(model)
        args = self._get_converter().convert_has_core(core)
        nresult = self._transport.get(**args)
        return ResultConverter.convert_has_core(core, nresult)

    async def ahas_core(
        self,
        model: SearchModel | dict | Any = None,
        **kwargs: Any,
    ) -> Response[bool]:
        core = self._get_core(model)
        args = self._get_converter().convert_has_core(core)
        nresult = await self._transport.aget(**args)
        return ResultConverter.convert_has_core(core, nresult)

    def create_core(
        self,
        model: SearchModel | dict | Any = None,
        **kwargs: Any,
    ) -> Response[bool]:
        args = self._get_converter().convert_create_core(
            self._get_core(model)
        )
        nresult = self._transport.get(**args)
        return ResultConverter.convert_write(True, nresult)

    async def acreate_core(
        self,
        model: SearchModel | dict | Any = None,
        **kwargs: Any,
    ) -> Response[bool]:
        args = self._get_converter().convert_create_core(
            self._get_core(model)
        )
        nresult = await self._transport.aget(**args)
        return ResultConverter.convert_write(True, nresult)

    def reload_core(
        self,
        model: SearchModel | dict | Any = None,
        **kwargs: Any,
    ) -> Response[bool]:
        args = self._get_converter().convert_reload_core(
            self._get_core(model)
        )
        nresult = self._transport.get(**args)
        return ResultConverter.convert_write(True, nresult)

    async def areload_core(
        self,
        model: SearchModel | dict | Any = None,
        **kwargs: Any,
    ) -> Response[bool]:
        args = self._get_converter().convert_reload_core(
            self._get_core(model)
        )
        nresult = await self._transport.aget(**args)
        return ResultConverter.convert_write(True, nresult)

    def close(
        self,
        **kwargs: Any,
    ) -> Response[None]:
        return Response(result=None)

    async def aclose(
        self,
        **kwargs: Any,
    ) -> Response[None]:
        return Response(result=None)


class OperationConverter:
    config: SolrConfig

    def __init__(self, config: SolrConfig):
        self.config = config

    def convert_insert(
        self,
        model: SearchModel,
        item: dict[str, Any] | DataModel,
    ) -> dict[str, Any]:
        return {
            "url": self._get_url(EndpointPreset.UPDATE, model.core),
            "body": Helper.get_item(item),
        }

    def convert_multi_insert(
        self,
        model: SearchModel,
        items: list[dict[str, Any] | DataModel],
    ) -> dict[str, Any]:
        return {
            "url": self._get_url(EndpointPreset.UPDATE, model.core),
            "body": Helper.get_items(items),
        }

    def convert_get(
        self,
        model: SearchModel,
        params: dict | SearchParams | None,
    ) -> dict[str, Any]:
        params = self._get_params(model, SearchParams.parse(params))
        return {
            "url": self._get_url(EndpointPreset.QUERY, model.core),
            "body": QueryBuilder.build_get(params),
        }

    def convert_get_totals(
        self,
        model: SearchModel,
        params: SearchParams,
    ) -> dict[str, Any]:
        params = self._get_params(model, params)
        return {
            "url": self._get_url(EndpointPreset.QUERY, model.core),
            "body": QueryBuilder.build_totals(params),
        }

    def convert_distinct(
        self,
        model: SearchModel,
        params: DistinctParams,
    ) -> dict[str, Any]:
        params = self._get_params(model, params)
        return {
            "url": self._get_url(EndpointPreset.QUERY, model.core),
            "body": QueryBuilder.build_distinct(params),
        }

    def convert_group(
        self,
        model: SearchModel,
        params: dict | GroupParams,
    ) -> dict[str, Any]:
        params = self._get_params(
            model,
            GroupParams.parse(params, message="Invalid group parameters"),
        )
        return {
            "url": self._get_url(EndpointPreset.QUERY, model.core),
            "body": QueryBuilder.build_group(params),
        }

    def convert_facet(
        self,
        model: SearchModel,
        params: FacetParams,
    ) -> dict[str, Any]:
        params = self._get_params(model, params)
        return {
            "url": self._get_url(EndpointPreset.QUERY, model.core),
            "body": QueryBuilder.build_facet(params),
        }

    def convert_multi_remove(
        self,
        model: SearchModel,
        filters: dict[str, Any] | None,
        hints: dict[str, Any] | None,
    ) -> dict[str, Any] | None:
        body = QueryBuilder.build_delete(
            filters, Helper.get_filter_hints(model, hints)
        )
        if not body:
            if not self.config.allow_empty_delete:
                raise InvalidParametersError(
                    "Delete requires at least one filter"
                )
            log.warn(
                "Skipped delete on core %s: no filter to apply", model.core
            )
            return None
        return {
            "url": self._get_url(EndpointPreset.UPDATE_COMMAND, model.core),
            "body": body,
        }

    def convert_get_fields(self, core: str) -> dict[str, Any]:
        return {"url": self._get_url(EndpointPreset.SCHEMA_FIELDS, core)}

    def convert_get_field_types(self, core: str) -> dict[str, Any]:
        return {
            "url": self._get_url(EndpointPreset.SCHEMA_FIELD_TYPES, core)
        }

    @staticmethod
    def check_schema(model: SearchModel) -> None:
        SchemaReconciler.reconcile(model.fields, model.field_types, [], [])

    @staticmethod
    def convert_build_schema(
        model: SearchModel,
        current: dict | SolrSchema,
    ) -> SchemaDiff | None:
        schema = SolrSchema.parse(current, message="Invalid current schema")
        return SchemaReconciler.reconcile(
            model.fields,
            model.field_types,
            schema.fields,
            schema.field_types,
        )

    def convert_update_schema(
        self,
        model: SearchModel,
        diff: SchemaDiff | None,
    ) -> dict[str, Any] | None:
        if diff is None:
            log.info("Schema of core %s is up to date", model.core)
            return None
        commands = diff.to_commands()
        log.info("Updating schema of core %s: %s", model.core, commands)
        return {
            "url": self._get_url(EndpointPreset.SCHEMA, model.core),
            "body": commands,
        }

    def convert_ping(self, core: str) -> dict[str, Any]:
        return {"url": self._get_url(EndpointPreset.ADMIN_PING, core)}

    def convert_has_core(self, core: str) -> dict[str, Any]:
        return {"url": self._get_url(EndpointPreset.CORE_STATUS, core)}

    def convert_create_core(self, core: str) -> dict[str, Any]:
        return {
            "url": self._get_url(
                EndpointPreset.CORE_CREATE,
                core,
                config_set=self.config.config_set,
            )
        }

    def convert_reload_core(self, core: str) -> dict[str, Any]:
        return {"url": self._get_url(EndpointPreset.CORE_RELOAD, core)}

    def _get_url(
        self,
        preset: EndpointPreset,
        core: str,
        **replacements: Any,
    ) -> str:
        return Endpoint.build(preset, self.config.url, core, **replacements)

    def _get_params(self, model: SearchModel, params: Any) -> Any:
        hints = Helper.get_filter_hints(model, params.fields)
        if not hints:
            return params
        return params.model_copy(update={"fields": hints})


class ResultConverter:
    @staticmethod
    def convert_write(result: Any, nresult: Any) -> Response[Any]:
        ResponseValidator.validate(nresult, SolrEnvelope)
        return Response(result=result, native=nresult)

    @staticmethod
    def convert_insert(item: dict[str, Any], nresult: Any) -> Response[Any]:
        return ResultConverter.convert_write(item.get("id"), nresult)

    @staticmethod
    def convert_multi_insert(
        items: list[dict[str, Any]], nresult: Any
    ) -> Response[list[dict[str, Any]]]:
        return ResultConverter.convert_write(items, nresult)

    @staticmethod
    def convert_get(nresult: Any) -> Response[list[dict[str, Any]]]:
        envelope = ResponseValidator.validate(nresult, SolrQueryEnvelope)
        return Response(
            result=ResponseFormatter.format(envelope.response.docs),
            native=nresult,
        )

    @staticmethod
    def convert_get_totals(
        params: SearchParams, nresult: Any
    ) -> Response[Totals]:
        envelope = ResponseValidator.validate(nresult, SolrQueryEnvelope)
        return Response(
            result=QueryBuilder.get_totals(
                envelope.response.num_found, params.limit, params.page
            ),
            native=nresult,
        )

    @staticmethod
    def convert_distinct(
        params: DistinctParams, nresult: Any
    ) -> Response[list[Any]]:
        envelope = ResponseValidator.validate(nresult, SolrQueryEnvelope)
        return Response(
            result=ResponseFormatter.format_distinct(
                envelope.response.docs, params.key
            ),
            native=nresult,
        )

    @staticmethod
    def convert_group(nresult: Any) -> Response[list[SearchGroup]]:
        envelope = ResponseValidator.validate(nresult, SolrGroupEnvelope)
        return Response(
            result=ResponseFormatter.format_group(envelope.grouped),
            native=nresult,
        )

    @staticmethod
    def convert_facet(
        params: FacetParams, nresult: Any
    ) -> Response[list[FacetCount] | list[dict[str, Any]]]:
        envelope = ResponseValidator.validate(nresult, SolrFacetEnvelope)
        result: list[FacetCount] | list[dict[str, Any]]
        if isinstance(params.field, list):
            result = ResponseFormatter.format_facet_pivot(
                envelope.facet_counts.facet_pivot
            )
        else:
            result = ResponseFormatter.format_facet_fields(
                envelope.facet_counts.facet_fields
            )
        return Response(result=result, native=nresult)

    @staticmethod
    def convert_get_schema(
        nfields: Any, nfield_types: Any
    ) -> Response[SolrSchema]:
        fields = ResponseValidator.validate(nfields, SolrFieldsEnvelope)
        field_types = ResponseValidator.validate(
            nfield_types, SolrFieldTypesEnvelope
        )
        return Response(
            result=SolrSchema(
                fields=fields.fields,
                field_types=field_types.field_types,
            ),
            native={"fields": nfields, "fieldTypes": nfield_types},
        )

    @staticmethod
    def convert_ping(nresult: Any) -> Response[bool]:
        envelope = ResponseValidator.validate(nresult, SolrPingEnvelope)
        return Response(result=envelope.status == "OK", native=nresult)

    @staticmethod
    def convert_has_core(core: str, nresult: Any) -> Response[bool]:
        envelope = ResponseValidator.validate(nresult, SolrCoreStatusEnvelope)
        return Response(result=bool(envelope.status.get(core)), native=nresult)

    @staticmethod
    def convert_reload_error(
        model: SearchModel,
        diff: SchemaDiff,
        error: Exception,
    ) -> SchemaReloadError:
        log.error(
            "Schema of core %s was updated but the reload failed: %s",
            model.core,
            error,
        )
        return SchemaReloadError(
            f"Schema of core {model.core} was updated "
            f"but the reload failed: {error}",
            diff=diff,
        )
