"""Port describing every remote call the resource handlers make."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from uuid import UUID

    from trackform.domain.model import (
        ConfigProperty,
        OidcGroup,
        OidcMapping,
        Permission,
        Repository,
        RepositoryType,
        Team,
    )

    from .fetching import Page, PageOptions


@runtime_checkable
class DependencyTrackPort(Protocol):
    """Remote Dependency-Track operations, one method per REST call."""

    # teams
    def list_teams(self, options: PageOptions) -> Page[Team]: ...

    def get_team(self, team_uuid: UUID) -> Team: ...

    def create_team(self, name: str) -> Team: ...

    def update_team(self, team: Team) -> Team: ...

    def delete_team(self, team: Team) -> None: ...

    # permissions
    def list_permissions(self, options: PageOptions) -> Page[Permission]: ...

    def add_permission_to_team(self, permission: str, team_uuid: UUID) -> Team | None: ...

    def remove_permission_from_team(self, permission: str, team_uuid: UUID) -> Team | None: ...

    # OIDC groups and their team mappings
    def list_oidc_groups(self, options: PageOptions) -> Page[OidcGroup]: ...

    def create_oidc_group(self, name: str) -> OidcGroup: ...

    def update_oidc_group(self, group: OidcGroup) -> OidcGroup: ...

    def delete_oidc_group(self, group_uuid: UUID) -> None: ...

    def list_oidc_group_teams(self, group_uuid: UUID, options: PageOptions) -> Page[Team]: ...

    def add_oidc_mapping(self, group_uuid: UUID, team_uuid: UUID) -> OidcMapping: ...

    def remove_oidc_mapping(self, mapping_uuid: UUID) -> None: ...

    # repositories
    def list_repositories(self, options: PageOptions) -> Page[Repository]: ...

    def list_repositories_by_type(
        self, repository_type: RepositoryType, options: PageOptions
    ) -> Page[Repository]: ...

    def create_repository(self, repository: Repository) -> Repository: ...

    def update_repository(self, repository: Repository) -> Repository: ...

    def delete_repository(self, repository_uuid: UUID) -> None: ...

    # configuration properties (not paginated server-side)
    def list_config_properties(self) -> list[ConfigProperty]: ...

    def update_config_property(self, prop: ConfigProperty) -> ConfigProperty: ...


__all__ = ["DependencyTrackPort"]
