"""Module Build Tool: cross-module code generation and build orchestration."""

from .version import get_version

__version__ = get_version()
