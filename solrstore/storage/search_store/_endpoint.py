from __future__ import annotations

from enum import Enum
from typing import Any
from urllib.parse import quote

from ...core.exceptions import InvalidParametersError


class EndpointPreset(str, Enum):
    QUERY = "query"
    UPDATE = "update"
    UPDATE_COMMAND = "update-command"
    SCHEMA = "schema"
    SCHEMA_FIELDS = "schema-fields"
    SCHEMA_FIELD_TYPES = "schema-fieldtypes"
    ADMIN_PING = "admin-ping"
    CORE_STATUS = "core-status"
    CORE_CREATE = "core-create"
    CORE_RELOAD = "core-reload"


ENDPOINTS: dict[EndpointPreset, str] = {
    EndpointPreset.QUERY: "{url}/solr/{core}/query",
    EndpointPreset.UPDATE: "{url}/solr/{core}/update/json/docs?commit=true",
    EndpointPreset.UPDATE_COMMAND: "{url}/solr/{core}/update?commit=true",
    EndpointPreset.SCHEMA: "{url}/solr/{core}/schema",
    EndpointPreset.SCHEMA_FIELDS: "{url}/solr/{core}/schema/fields",
    EndpointPreset.SCHEMA_FIELD_TYPES: "{url}/solr/{core}/schema/fieldtypes",
    EndpointPreset.ADMIN_PING: "{url}/solr/{core}/admin/ping",
    EndpointPreset.CORE_STATUS: (
        "{url}/solr/admin/cores?action=STATUS&core={core}"
    ),
    EndpointPreset.CORE_CREATE: (
        "{url}/solr/admin/cores?action=CREATE&name={core}"
        "&instanceDir={core}&configSet={config_set}"
    ),
    EndpointPreset.CORE_RELOAD: (
        "{url}/solr/admin/cores?action=RELOAD&core={core}"
    ),
}


class Endpoint:
    @staticmethod
    def build(
        preset: EndpointPreset | str,
        url: str,
        core: str,
        **replacements: Any,
    ) -> str:
        """Build a Solr url from a preset template.

        Args:
            preset:
                Endpoint preset name.
            url:
                Solr base url.
            core:
                Core name.
            replacements:
                Extra template values, e.g. config_set.

        Returns:
            Endpoint url.
        """
        try:
            template = ENDPOINTS[EndpointPreset(preset)]
        except ValueError as e:
            raise InvalidParametersError(
                f"Unknown endpoint preset {preset!r}"
            ) from e
        values = {
            key: quote(str(value), safe="")
            for key, value in {"core": core, **replacements}.items()
        }
        try:
            return template.format(url=url.rstrip("/"), **values)
        except KeyError as e:
            raise InvalidParametersError(
                f"Missing value {e.args[0]!r} for endpoint {preset!r}"
            ) from e
