"""Repository handler, keyed by ``(type, identifier)``."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from trackform.domain.model import Repository, ResourceKind
from trackform.domain.ports.fetching import DEFAULT_PAGE_SIZE
from trackform.domain.reconciliation import fetch_all, index_by

from .base import ChangeAction, ResourceChange, ResourceExistsError

if TYPE_CHECKING:
    from trackform.domain.model import DesiredRepository, RepositoryKey, RepositoryType
    from trackform.domain.ports.fetching import Page, PageOptions
    from trackform.domain.ports.remote import DependencyTrackPort

log = getLogger(__name__)


def repository_label(key: RepositoryKey) -> str:
    repository_type, identifier = key
    return f"{repository_type}/{identifier}"


def _repository_key(repository: Repository) -> RepositoryKey:
    return repository.key


@dataclass(slots=True)
class RepositoryHandler:
    remote: DependencyTrackPort
    page_size: int = DEFAULT_PAGE_SIZE

    def list_all(self) -> list[Repository]:
        return fetch_all(
            self.remote.list_repositories,
            page_size=self.page_size,
            kind=ResourceKind.REPOSITORY,
        )

    def list_by_type(self, repository_type: RepositoryType) -> list[Repository]:
        def fetch_page(options: PageOptions) -> Page[Repository]:
            return self.remote.list_repositories_by_type(repository_type, options)

        return fetch_all(fetch_page, page_size=self.page_size, kind=ResourceKind.REPOSITORY)

    def find(self, repository_type: RepositoryType, identifier: str) -> Repository | None:
        repositories = index_by(self.list_by_type(repository_type), _repository_key)
        return repositories.get((repository_type, identifier))

    def create(self, desired: DesiredRepository) -> Repository:
        existing = self.find(desired.type, desired.identifier)
        if existing is not None:
            raise ResourceExistsError(
                ResourceKind.REPOSITORY, repository_label(desired.key), uuid=existing.uuid
            )
        return self._create(desired)

    def ensure(self, desired: DesiredRepository, *, dry_run: bool = False) -> ResourceChange:
        """Create the repository if missing, update it if readable fields drifted.

        Passwords cannot be read back, so a password change alone is not detected.
        """

        existing = self.find(desired.type, desired.identifier)
        label = repository_label(desired.key)
        if existing is None:
            if not dry_run:
                self._create(desired)
            return self._change(label, ChangeAction.CREATED, dry_run=dry_run)

        target = desired.to_repository(existing=existing)
        if not target.differs_from(existing):
            return self._change(label, ChangeAction.UNCHANGED, dry_run=dry_run)

        if not dry_run:
            self.remote.update_repository(target)
            log.info("Updated repository %s (%s)", label, existing.uuid)
        return self._change(label, ChangeAction.UPDATED, dry_run=dry_run)

    def delete(self, repository_type: RepositoryType, identifier: str) -> bool:
        label = repository_label((repository_type, identifier))
        existing = self.find(repository_type, identifier)
        if existing is None or existing.uuid is None:
            log.info("Repository %s does not exist, nothing to delete", label)
            return False
        self.remote.delete_repository(existing.uuid)
        log.info("Deleted repository %s (%s)", label, existing.uuid)
        return True

    def _create(self, desired: DesiredRepository) -> Repository:
        created = self.remote.create_repository(desired.to_repository())
        log.info(
            "Created repository %s (%s, resolution order %s)",
            repository_label(desired.key),
            created.uuid,
            created.resolution_order,
        )
        return created

    @staticmethod
    def _change(label: str, action: ChangeAction, *, dry_run: bool) -> ResourceChange:
        return ResourceChange(
            kind=ResourceKind.REPOSITORY,
            label=label,
            action=action,
            dry_run=dry_run,
        )
