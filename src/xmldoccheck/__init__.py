"""xmldoccheck - audit C# sources for missing XML documentation comments."""

from xmldoccheck.checker import check_source_units, check_units, run_check
from xmldoccheck.config import CheckerConfig, load_config
from xmldoccheck.errors import (
    ConfigError,
    FrontEndError,
    ProjectLoadError,
    XmlDocCheckError,
)
from xmldoccheck.extractors import extract_documentation, parse_doc_comment
from xmldoccheck.models import (
    Declaration,
    DeclarationKind,
    DocElement,
    DocumentationBlock,
    Issue,
    IssueKind,
    Report,
)
from xmldoccheck.validators import validate_declaration

__all__ = [
    "CheckerConfig",
    "ConfigError",
    "Declaration",
    "DeclarationKind",
    "DocElement",
    "DocumentationBlock",
    "FrontEndError",
    "Issue",
    "IssueKind",
    "ProjectLoadError",
    "Report",
    "XmlDocCheckError",
    "check_source_units",
    "check_units",
    "extract_documentation",
    "load_config",
    "parse_doc_comment",
    "run_check",
    "validate_declaration",
]
