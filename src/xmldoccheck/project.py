"""Resolve a solution, project, directory or file to the C# sources to check."""

from __future__ import annotations

import logging
import re
from pathlib import Path, PureWindowsPath

from .config import CheckerConfig
from .csharp import PendingCSharpUnit
from .errors import ProjectLoadError

log = logging.getLogger(__name__)

# Project("{type-guid}") = "Name", "relative\path\Name.csproj", "{project-guid}"
_SLN_PROJECT = re.compile(
    r'^Project\("\{[^}]*\}"\)\s*=\s*"[^"]*"\s*,\s*"([^"]+)"', re.MULTILINE
)


def _sources_under(directory: Path, exclude: set[str]) -> list[Path]:
    """All .cs files below ``directory``, skipping excluded directory names."""
    files = []
    for path in directory.rglob("*.cs"):
        rel_parts = path.relative_to(directory).parts[:-1]
        if any(part in exclude for part in rel_parts):
            continue
        if path.is_file():
            files.append(path)
    return sorted(files)


def _solution_projects(sln: Path) -> list[Path]:
    """Paths of the C# projects listed in a .sln file, in solution order."""
    try:
        content = sln.read_text(encoding="utf-8-sig")
    except OSError as e:
        raise ProjectLoadError(f"Cannot read solution {sln}: {e}") from e

    projects = []
    for match in _SLN_PROJECT.finditer(content):
        # Solution files use Windows separators
        rel = Path(*PureWindowsPath(match.group(1)).parts)
        if rel.suffix.lower() != ".csproj":
            continue
        project = sln.parent / rel
        if not project.is_file():
            log.warning("Project %s listed in %s does not exist", rel, sln.name)
            continue
        projects.append(project)
    return projects


def discover_sources(path: Path, config: CheckerConfig | None = None) -> list[Path]:
    """Find the C# files to check for ``path``.

    Args:
        path: A .sln, .csproj or .cs file, or a directory
        config: Supplies the directory names to skip

    Returns:
        Source paths, grouped by project in solution order and sorted
        within each project. A file shared by two projects appears twice.

    Raises:
        ProjectLoadError: If the path does not exist or is not a supported kind.
    """
    config = config or CheckerConfig()
    exclude = set(config.exclude)

    if path.is_dir():
        return _sources_under(path, exclude)

    if not path.is_file():
        raise ProjectLoadError(f"No such file or directory: {path}")

    suffix = path.suffix.lower()
    if suffix == ".cs":
        return [path]
    if suffix == ".csproj":
        return _sources_under(path.parent, exclude)
    if suffix == ".sln":
        sources = []
        for project in _solution_projects(path):
            found = _sources_under(project.parent, exclude)
            log.info("%s: %d source file(s)", project.name, len(found))
            sources.extend(found)
        return sources

    raise ProjectLoadError(
        f"Unsupported input {path}: expected a .sln, .csproj or .cs file, or a directory"
    )


def load_project(path: Path, config: CheckerConfig | None = None) -> list[PendingCSharpUnit]:
    """Pending units for every source file of ``path``, ready to be checked."""
    return [PendingCSharpUnit(str(p)) for p in discover_sources(path, config)]
