"""Declarative configuration for Dependency-Track servers."""

from __future__ import annotations

from importlib import metadata

try:
    __version__ = metadata.version("trackform")
except metadata.PackageNotFoundError:
    # running from a source checkout without an install
    __version__ = "0.0.0+local"
