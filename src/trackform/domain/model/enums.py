"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class RepositoryType(StrEnum):
    """Package ecosystems Dependency-Track can resolve components against."""

    CPAN = "CPAN"
    MAVEN = "MAVEN"
    NPM = "NPM"
    GEM = "GEM"
    PYPI = "PYPI"
    NUGET = "NUGET"
    HEX = "HEX"
    COMPOSER = "COMPOSER"
    CARGO = "CARGO"
    GO_MODULES = "GO_MODULES"
    GITHUB = "GITHUB"
    UNSUPPORTED = "UNSUPPORTED"


class ConfigPropertyType(StrEnum):
    BOOLEAN = "BOOLEAN"
    INTEGER = "INTEGER"
    NUMBER = "NUMBER"
    STRING = "STRING"
    ENCRYPTEDSTRING = "ENCRYPTEDSTRING"
    TIMESTAMP = "TIMESTAMP"
    URL = "URL"
    UUID = "UUID"


class ResourceKind(StrEnum):
    """Names used for remote object kinds in logs, errors and the CLI."""

    TEAM = "team"
    PERMISSION = "permission"
    OIDC_GROUP = "oidc group"
    REPOSITORY = "repository"
    CONFIG_PROPERTY = "config property"
