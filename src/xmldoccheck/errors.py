"""Exceptions for xmldoccheck.

Missing documentation is never an exception; it is reported as an Issue.
These exceptions cover the failures around a run: bad configuration, an
unloadable project, and a source unit the front-end cannot compile.
"""

from __future__ import annotations


class XmlDocCheckError(Exception):
    """Base exception for xmldoccheck operations."""


class ConfigError(XmlDocCheckError):
    """Raised when a configuration file cannot be read or is invalid."""


class ProjectLoadError(XmlDocCheckError):
    """Raised when a solution, project or directory cannot be resolved."""


class FrontEndError(XmlDocCheckError):
    """Raised when a source unit cannot be read or parsed."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path
