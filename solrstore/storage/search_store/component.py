from __future__ import annotations

from typing import Any

from ...core import Component, DataModel, Response, operation
from ._models import (
    DistinctParams,
    FacetCount,
    FacetParams,
    GroupParams,
    SchemaDiff,
    SearchGroup,
    SearchModel,
    SearchParams,
    SolrSchema,
    Totals,
)


class SearchStore(Component):
    core: str | None

    def __init__(
        self,
        core: str | None = None,
        **kwargs,
    ):
        """Initialize.

        Args:
            core:
                Default core name.
        """
        self.core = core
        super().__init__(**kwargs)

    @operation()
    def insert(
        self,
        model: SearchModel | dict | Any,
        item: dict[str, Any] | DataModel,
        **kwargs: Any,
    ) -> Response[Any]:
        """Insert document.

        Args:
            model:
                Document type declaration.
            item:
                Document.

        Returns:
            Document id.

        Raises:
            InvalidModelDeclarationError:
                Model is invalid.
            InvalidParametersError:
                Item is not an object.
        """
        raise NotImplementedError

    @operation()
    def multi_insert(
        self,
        model: SearchModel | dict | Any,
        items: list[dict[str, Any] | DataModel],
        **kwargs: Any,
    ) -> Response[list[dict[str, Any]]]:
        """Insert many documents.

        Args:
            model:
                Document type declaration.
            items:
                Documents.

        Returns:
            Inserted documents.
        """
        raise NotImplementedError

    @operation()
    def get(
        self,
        model: SearchModel | dict | Any,
        params: dict | SearchParams | None = None,
        **kwargs: Any,
    ) -> Response[list[dict[str, Any]]]:
        """Get documents.

        Args:
            model:
                Document type declaration.
            params:
                Page, limit, filters, order and filter hints.

        Returns:
            Documents with nested objects rebuilt.
        """
        raise NotImplementedError

    @operation()
    def get_totals(
        self,
        model: SearchModel | dict | Any,
        params: dict | SearchParams | None = None,
        **kwargs: Any,
    ) -> Response[Totals]:
        """Count documents and pages.

        Args:
            model:
                Document type declaration.
            params:
                Page, limit and filters.

        Returns:
            Totals.
        """
        raise NotImplementedError

    @operation()
    def distinct(
        self,
        model: SearchModel | dict | Any,
        params: dict | DistinctParams,
        **kwargs: Any,
    ) -> Response[list[Any]]:
        """Get distinct values of a field.

        Args:
            model:
                Document type declaration.
            params:
                Key field, page, limit and filters.

        Returns:
            Distinct values.

        Raises:
            InvalidParametersError:
                Key is missing or not a string.
        """
        raise NotImplementedError

    @operation()
    def group(
        self,
        model: SearchModel | dict | Any,
        params: dict | GroupParams,
        **kwargs: Any,
    ) -> Response[list[SearchGroup]]:
        """Get documents grouped by a field.

        Args:
            model:
                Document type declaration.
            params:
                Key field, documents per group, page, limit and filters.

        Returns:
            Groups with their documents.
        """
        raise NotImplementedError

    @operation()
    def facet(
        self,
        model: SearchModel | dict | Any,
        params: dict | FacetParams,
        **kwargs: Any,
    ) -> Response[list[FacetCount] | list[dict[str, Any]]]:
        """Count documents by field value.

        Args:
            model:
                Document type declaration.
            params:
                Field (or list of fields for a pivot), page,
                limit and filters.

        Returns:
            Value counts, or pivot entries for many fields.
        """
        raise NotImplementedError

    @operation()
    def multi_remove(
        self,
        model: SearchModel | dict | Any,
        filters: dict[str, Any] | None,
        hints: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> Response[bool]:
        """Delete documents matching filters.

        Args:
            model:
                Document type declaration.
            filters:
                Filters selecting the documents to delete.
            hints:
                Filter hints by filter key.

        Returns:
            A value indicating whether a delete was sent.

        Raises:
            InvalidParametersError:
                No filter resolved and empty deletes are not allowed.
        """
        raise NotImplementedError

    @operation()
    def get_schema(
        self,
        model: SearchModel | dict | Any,
        **kwargs: Any,
    ) -> Response[SolrSchema]:
        """Get the live fields and field types of the model core.

        Args:
            model:
                Document type declaration.

        Returns:
            Live schema.
        """
        raise NotImplementedError

    @operation()
    def build_schema(
        self,
        model: SearchModel | dict | Any,
        current: dict | SolrSchema | None = None,
        **kwargs: Any,
    ) -> Response[SchemaDiff | None]:
        """Compute the schema changes a model needs.

        Args:
            model:
                Document type declaration.
            current:
                Live schema. Fetched when not provided.

        Returns:
            Schema diff, or None when there is nothing to change.
        """
        raise NotImplementedError

    @operation()
    def update_schema(
        self,
        model: SearchModel | dict | Any,
        **kwargs: Any,
    ) -> Response[SchemaDiff | None]:
        """Bring the core schema in line with the model.

        Writes the schema diff, then reloads the core.

        Args:
            model:
                Document type declaration.

        Returns:
            Applied schema diff, or None when nothing changed.

        Raises:
            InvalidFieldDeclarationError:
                Field declarations are invalid.
            SchemaReloadError:
                Schema was written but the reload failed.
        """
        raise NotImplementedError

    @operation()
    def ping(
        self,
        model: SearchModel | dict | Any = None,
        **kwargs: Any,
    ) -> Response[bool]:
        """Check that the model core answers.

        Args:
            model:
                Document type declaration.

        Returns:
            A value indicating whether the core is healthy.
        """
        raise NotImplementedError

    @operation()
    def has_core(
        self,
        model: SearchModel | dict | Any = None,
        **kwargs: Any,
    ) -> Response[bool]:
        """Check if the model core exists.

        Args:
            model:
                Document type declaration.

        Returns:
            A value indicating whether the core exists.
        """
        raise NotImplementedError

    @operation()
    def create_core(
        self,
        model: SearchModel | dict | Any = None,
        **kwargs: Any,
    ) -> Response[bool]:
        """Create the model core.

        Args:
            model:
                Document type declaration.

        Returns:
            True.
        """
        raise NotImplementedError

    @operation()
    def reload_core(
        self,
        model: SearchModel | dict | Any = None,
        **kwargs: Any,
    ) -> Response[bool]:
        """Reload the model core.

        Args:
            model:
                Document type declaration.

        Returns:
            True.
        """
        raise NotImplementedError

    @operation()
    def close(
        self,
        **kwargs: Any,
    ) -> Response[None]:
        """Close client.

        Returns:
            None.
        """
        raise NotImplementedError

    @operation()
    async def ainsert(
        self,
        model: SearchModel | dict | Any,
        item: dict[str, Any] | DataModel,
        **kwargs: Any,
    ) -> Response[Any]:
        """Insert document.

        Args:
            model:
                Document type declaration.
            item:
                Document.

        Returns:
            Document id.
        """
        raise NotImplementedError

    @operation()
    async def amulti_insert(
        self,
        model: SearchModel | dict | Any,
        items: list[dict[str, Any] | DataModel],
        **kwargs: Any,
    ) -> Response[list[dict[str, Any]]]:
        """Insert many documents.

        Args:
            model:
                Document type declaration.
            items:
                Documents.

        Returns:
            Inserted documents.
        """
        raise NotImplementedError

    @operation()
    async def aget(
        self,
        model: SearchModel | dict | Any,
        params: dict | SearchParams | None = None,
        **kwargs: Any,
    ) -> Response[list[dict[str, Any]]]:
        """Get documents.

        Args:
            model:
                Document type declaration.
            params:
                Page, limit, filters, order and filter hints.

        Returns:
            Documents with nested objects rebuilt.
        """
        raise NotImplementedError

    @operation()
    async def aget_totals(
        self,
        model: SearchModel | dict | Any,
        params: dict | SearchParams | None = None,
        **kwargs: Any,
    ) -> Response[Totals]:
        """Count documents and pages.

        Args:
            model:
                Document type declaration.
            params:
                Page, limit and filters.

        Returns:
            Totals.
        """
        raise NotImplementedError

    @operation()
    async def adistinct(
        self,
        model: SearchModel | dict | Any,
        params: dict | DistinctParams,
        **kwargs: Any,
    ) -> Response[list[Any]]:
        """Get distinct values of a field.

        Args:
            model:
                Document type declaration.
            params:
                Key field, page, limit and filters.

        Returns:
            Distinct values.
        """
        raise NotImplementedError

    @operation()
    async def agroup(
        self,
        model: SearchModel | dict | Any,
        params: dict | GroupParams,
        **kwargs: Any,
    ) -> Response[list[SearchGroup]]:
        """Get documents grouped by a field.

        Args:
            model:
                Document type declaration.
            params:
                Key field, documents per group, page, limit and filters.

        Returns:
            Groups with their documents.
        """
        raise NotImplementedError

    @operation()
    async def afacet(
        self,
        model: SearchModel | dict | Any,
        params: dict | FacetParams,
        **kwargs: Any,
    ) -> Response[list[FacetCount] | list[dict[str, Any]]]:
        """Count documents by field value.

        Args:
            model:
                Document type declaration.
            params:
                Field (or list of fields for a pivot), page,
                limit and filters.

        Returns:
            Value counts, or pivot entries for many fields.
        """
        raise NotImplementedError

    @operation()
    async def amulti_remove(
        self,
        model: SearchModel | dict | Any,
        filters: dict[str, Any] | None,
        hints: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> Response[bool]:
        """Delete documents matching filters.

        Args:
            model:
                Document type declaration.
            filters:
                Filters selecting the documents to delete.
            hints:
                Filter hints by filter key.

        Returns:
            A value indicating whether a delete was sent.
        """
        raise NotImplementedError

    @operation()
    async def aget_schema(
        self,
        model: SearchModel | dict | Any,
        **kwargs: Any,
    ) -> Response[SolrSchema]:
        """Get the live fields and field types of the model core.

        Args:
            model:
                Document type declaration.

        Returns:
            Live schema.
        """
        raise NotImplementedError

    @operation()
    async def abuild_schema(
        self,
        model: SearchModel | dict | Any,
        current: dict | SolrSchema | None = None,
        **kwargs: Any,
    ) -> Response[SchemaDiff | None]:
        """Compute the schema changes a model needs.

        Args:
            model:
                Document type declaration.
            current:
                Live schema. Fetched when not provided.

        Returns:
            Schema diff, or None when there is nothing to change.
        """
        raise NotImplementedError

    @operation()
    async def aupdate_schema(
        self,
        model: SearchModel | dict | Any,
        **kwargs: Any,
    ) -> Response[SchemaDiff | None]:
        """Bring the core schema in line with the model.

        Args:
            model:
                Document type declaration.

        Returns:
            Applied schema diff, or None when nothing changed.
        """
        raise NotImplementedError

    @operation()
    async def aping(
        self,
        model: SearchModel | dict | Any = None,
        **kwargs: Any,
    ) -> Response[bool]:
        """Check that the model core answers.

        Args:
            model:
                Document type declaration.

        Returns:
            A value indicating whether the core is healthy.
        """
        raise NotImplementedError

    @operation()
    async def ahas_core(
        self,
        model: SearchModel | dict | Any = None,
        **kwargs: Any,
    ) -> Response[bool]:
        """Check if the model core exists.

        Args:
            model:
                Document type declaration.

        Returns:
            A value indicating whether the core exists.
        """
        raise NotImplementedError

    @operation()
    async def acreate_core(
        self,
        model: SearchModel | dict | Any = None,
        **kwargs: Any,
    ) -> Response[bool]:
        """Create the model core.

        Args:
            model:
                Document type declaration.

        Returns:
            True.
        """
        raise NotImplementedError

    @operation()
    async def areload_core(
        self,
        model: SearchModel | dict | Any = None,
        **kwargs: Any,
    ) -> Response[bool]:
        """Reload the model core.

        Args:
            model:
                Document type declaration.

        Returns:
            True.
        """
        raise NotImplementedError

    @operation()
    async def aclose(
        self,
        **kwargs: Any,
    ) -> Response[None]:
        """Close async client.

        Returns:
            None.
        """
        raise NotImplementedError
