"""HTTP client for the Dependency-Track REST API (v1)."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import BaseModel, ValidationError

from trackform.adapters.http_resilience import ResilientClient
from trackform.domain.ports.fetching import Page

from .schema import (
    ConfigPropertyPayload,
    OidcGroupPayload,
    OidcMappingPayload,
    PermissionPayload,
    RepositoryPayload,
    TeamPayload,
)
from .translator import (
    config_property_to_payload,
    oidc_group_to_payload,
    parse_config_property,
    parse_oidc_group,
    parse_oidc_mapping,
    parse_permission,
    parse_repository,
    parse_team,
    repository_to_payload,
    team_to_payload,
)

if TYPE_CHECKING:
    from collections.abc import Callable
    from uuid import UUID

    from trackform.adapters.http_resilience import ResilienceConfig
    from trackform.config.dtrack import DependencyTrackConfig
    from trackform.domain.model import (
        ConfigProperty,
        OidcGroup,
        OidcMapping,
        Permission,
        Repository,
        RepositoryType,
        Team,
    )
    from trackform.domain.ports.fetching import PageOptions

log = getLogger(__name__)

TOTAL_COUNT_HEADER = "X-Total-Count"


class DependencyTrackAPIError(RuntimeError):
    """Raised when Dependency-Track answers with an error or an unreadable payload."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.endpoint = endpoint

    def __str__(self) -> str:
        where = f" ({self.endpoint})" if self.endpoint else ""
        status = f"HTTP {self.status_code}: " if self.status_code is not None else ""
        return f"{status}{self.message}{where}"


def _page_params(options: PageOptions) -> dict[str, int]:
    return {"pageNumber": options.page_number, "pageSize": options.page_size}


def _total_count(response: httpx.Response) -> int | None:
    raw = response.headers.get(TOTAL_COUNT_HEADER)
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        log.warning("Ignoring malformed %s header %r", TOTAL_COUNT_HEADER, raw)
        return None


def _error_message(response: httpx.Response) -> str:
    text = response.text.strip()
    return text or response.reason_phrase or "request failed"


def _endpoint(method: str, path: str) -> str:
    return f"{method} {path}"


def _validate_one[P: BaseModel](payload: object, model: type[P], endpoint: str) -> P:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise DependencyTrackAPIError(
            f"Unexpected {model.__name__} payload", endpoint=endpoint
        ) from exc


def _validate_many[P: BaseModel](payload: object, model: type[P], endpoint: str) -> list[P]:
    if not isinstance(payload, list):
        raise DependencyTrackAPIError(
            f"Expected a list of {model.__name__} items", endpoint=endpoint
        )
    items: list[object] = payload
    return [_validate_one(item, model, endpoint) for item in items]


class DependencyTrackClient:
    """Synchronous facade over the Dependency-Track API.

    Every public method is one REST call. Each call opens a short-lived
    ``ResilientClient`` inside its own event loop, so instances are cheap and
    hold no connection state between calls.
    """

    def __init__(
        self,
        *,
        config: DependencyTrackConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient

    # teams

    def list_teams(self, options: PageOptions) -> Page[Team]:
        response, payload = self._call("GET", "team", params=_page_params(options))
        teams = _validate_many(payload, TeamPayload, _endpoint("GET", "team"))
        return Page(
            items=tuple(parse_team(item) for item in teams),
            total_count=_total_count(response),
        )

    def get_team(self, team_uuid: UUID) -> Team:
        path = f"team/{team_uuid}"
        _, payload = self._call("GET", path)
        return parse_team(_validate_one(payload, TeamPayload, _endpoint("GET", path)))

    def create_team(self, name: str) -> Team:
        _, payload = self._call("PUT", "team", json={"name": name})
        return parse_team(_validate_one(payload, TeamPayload, _endpoint("PUT", "team")))

    def update_team(self, team: Team) -> Team:
        _, payload = self._call("POST", "team", json=team_to_payload(team))
        return parse_team(_validate_one(payload, TeamPayload, _endpoint("POST", "team")))

    def delete_team(self, team: Team) -> None:
        self._call("DELETE", "team", json=team_to_payload(team), expect_body=False)

    # permissions

    def list_permissions(self, options: PageOptions) -> Page[Permission]:
        # the endpoint is not paginated: everything arrives on the first page
        if options.page_number > 1:
            return Page()
        _, payload = self._call("GET", "permission")
        permissions = _validate_many(payload, PermissionPayload, _endpoint("GET", "permission"))
        return Page(items=tuple(parse_permission(item) for item in permissions))

    def add_permission_to_team(self, permission: str, team_uuid: UUID) -> Team | None:
        return self._set_permission("POST", permission, team_uuid)

    def remove_permission_from_team(self, permission: str, team_uuid: UUID) -> Team | None:
        return self._set_permission("DELETE", permission, team_uuid)

    def _set_permission(self, method: str, permission: str, team_uuid: UUID) -> Team | None:
        path = f"permission/{permission}/team/{team_uuid}"
        response, payload = self._call(method, path, not_modified_ok=True)
        if response.status_code == httpx.codes.NOT_MODIFIED:
            log.debug("Permission %s unchanged on team %s (304)", permission, team_uuid)
            return None
        return parse_team(_validate_one(payload, TeamPayload, _endpoint(method, path)))

    # OIDC groups and mappings

    def list_oidc_groups(self, options: PageOptions) -> Page[OidcGroup]:
        response, payload = self._call("GET", "oidc/group", params=_page_params(options))
        groups = _validate_many(payload, OidcGroupPayload, _endpoint("GET", "oidc/group"))
        return Page(
            items=tuple(parse_oidc_group(item) for item in groups),
            total_count=_total_count(response),
        )

    def create_oidc_group(self, name: str) -> OidcGroup:
        _, payload = self._call("PUT", "oidc/group", json={"name": name})
        group = _validate_one(payload, OidcGroupPayload, _endpoint("PUT", "oidc/group"))
        return parse_oidc_group(group)

    def update_oidc_group(self, group: OidcGroup) -> OidcGroup:
        _, payload = self._call("POST", "oidc/group", json=oidc_group_to_payload(group))
        updated = _validate_one(payload, OidcGroupPayload, _endpoint("POST", "oidc/group"))
        return parse_oidc_group(updated)

    def delete_oidc_group(self, group_uuid: UUID) -> None:
        self._call("DELETE", f"oidc/group/{group_uuid}", expect_body=False)

    def list_oidc_group_teams(self, group_uuid: UUID, options: PageOptions) -> Page[Team]:
        if options.page_number > 1:
            return Page()
        path = f"oidc/group/{group_uuid}/team"
        _, payload = self._call("GET", path)
        teams = _validate_many(payload, TeamPayload, _endpoint("GET", path))
        return Page(items=tuple(parse_team(item) for item in teams))

    def add_oidc_mapping(self, group_uuid: UUID, team_uuid: UUID) -> OidcMapping:
        body = {"team": str(team_uuid), "group": str(group_uuid)}
        _, payload = self._call("PUT", "oidc/mapping", json=body)
        mapping = _validate_one(payload, OidcMappingPayload, _endpoint("PUT", "oidc/mapping"))
        return parse_oidc_mapping(mapping)

    def remove_oidc_mapping(self, mapping_uuid: UUID) -> None:
        self._call("DELETE", f"oidc/mapping/{mapping_uuid}", expect_body=False)

    # repositories

    def list_repositories(self, options: PageOptions) -> Page[Repository]:
        return self._list_repositories("repository", options)

    def list_repositories_by_type(
        self, repository_type: RepositoryType, options: PageOptions
    ) -> Page[Repository]:
        return self._list_repositories(f"repository/{repository_type}", options)

    def _list_repositories(self, path: str, options: PageOptions) -> Page[Repository]:
        response, payload = self._call("GET", path, params=_page_params(options))
        repositories = _validate_many(payload, RepositoryPayload, _endpoint("GET", path))
        return Page(
            items=tuple(parse_repository(item) for item in repositories),
            total_count=_total_count(response),
        )

    def create_repository(self, repository: Repository) -> Repository:
        _, payload = self._call("PUT", "repository", json=repository_to_payload(repository))
        created = _validate_one(payload, RepositoryPayload, _endpoint("PUT", "repository"))
        return parse_repository(created)

    def update_repository(self, repository: Repository) -> Repository:
        _, payload = self._call("POST", "repository", json=repository_to_payload(repository))
        updated = _validate_one(payload, RepositoryPayload, _endpoint("POST", "repository"))
        return parse_repository(updated)

    def delete_repository(self, repository_uuid: UUID) -> None:
        self._call("DELETE", f"repository/{repository_uuid}", expect_body=False)

    # configuration properties

    def list_config_properties(self) -> list[ConfigProperty]:
        _, payload = self._call("GET", "configProperty")
        props = _validate_many(payload, ConfigPropertyPayload, _endpoint("GET", "configProperty"))
        return [parse_config_property(item) for item in props]

    def update_config_property(self, prop: ConfigProperty) -> ConfigProperty:
        body = config_property_to_payload(prop)
        _, payload = self._call("POST", "configProperty", json=body)
        updated = _validate_one(
            payload, ConfigPropertyPayload, _endpoint("POST", "configProperty")
        )
        return parse_config_property(updated)

    # transport

    def _call(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, int] | None = None,
        json: object = None,
        expect_body: bool = True,
        not_modified_ok: bool = False,
    ) -> tuple[httpx.Response, object]:
        return asyncio.run(
            self._call_async(
                method,
                path,
                params=params,
                json=json,
                expect_body=expect_body,
                not_modified_ok=not_modified_ok,
            )
        )

    async def _call_async(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, int] | None,
        json: object,
        expect_body: bool,
        not_modified_ok: bool,
    ) -> tuple[httpx.Response, object]:
        async with self._client_factory(self._resilience) as client:
            return await self._perform_request(
                client=client,
                method=method,
                path=path,
                params=params,
                json=json,
                expect_body=expect_body,
                not_modified_ok=not_modified_ok,
            )

    async def _perform_request(
        self,
        *,
        client: ResilientClient,
        method: str,
        path: str,
        params: dict[str, int] | None,
        json: object,
        expect_body: bool,
        not_modified_ok: bool,
    ) -> tuple[httpx.Response, object]:
        endpoint = _endpoint(method, path)
        try:
            if json is None:
                response = await client.request(method, path, params=params)
            else:
                response = await client.request(method, path, params=params, json=json)
        except httpx.TransportError as exc:
            raise DependencyTrackAPIError(
                f"Could not reach Dependency-Track: {exc}", endpoint=endpoint
            ) from exc

        if response.status_code == httpx.codes.NOT_MODIFIED and not_modified_ok:
            return response, None
        if not response.is_success:
            message = _error_message(response)
            log.error(
                "Dependency-Track API error %s on %s: %s", response.status_code, endpoint, message
            )
            raise DependencyTrackAPIError(
                message, status_code=response.status_code, endpoint=endpoint
            )
        if not expect_body or not response.content:
            return response, None

        try:
            payload: object = response.json()
        except ValueError as exc:
            raise DependencyTrackAPIError(
                "Response is not valid JSON", status_code=response.status_code, endpoint=endpoint
            ) from exc
        return response, payload
