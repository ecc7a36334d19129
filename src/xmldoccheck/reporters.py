"""Output renderers for documentation reports."""

from __future__ import annotations

from .models import DeclarationKind, Issue, Report


def _location(issue: Issue) -> str:
    if issue.path is None:
        return ""
    if issue.line:
        return f"{issue.path}:{issue.line}: "
    return f"{issue.path}: "


def render_text(report: Report, locations: bool = False) -> str:
    """One issue message per line, in report order."""
    lines = []
    for issue in report:
        prefix = _location(issue) if locations else ""
        lines.append(f"{prefix}{issue.message}")
    return "\n".join(lines)


def _escape_annotation(text: str) -> str:
    """Escape a message for a GitHub workflow command."""
    return text.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _escape_property(text: str) -> str:
    return _escape_annotation(text).replace(":", "%3A").replace(",", "%2C")


def render_github(report: Report) -> str:
    """GitHub Actions annotations, one ``::warning`` command per issue."""
    lines = []
    for issue in report:
        props = []
        if issue.path is not None:
            props.append(f"file={_escape_property(issue.path)}")
        if issue.subject is not None and issue.subject.line:
            props.append(f"line={issue.subject.line}")
            props.append(f"col={issue.subject.column}")
        props.append(f"title={issue.kind.value}")
        lines.append(f"::warning {','.join(props)}::{_escape_annotation(issue.message)}")
    return "\n".join(lines)


def compute_coverage(report: Report) -> dict[str, float]:
    """Compute the share of declarations with a documentation block, by kind.

    Returns:
        Dict keyed by kind ('type', 'property', 'routine'), 0.0 - 1.0.
        Kinds with nothing checked count as fully covered.
    """
    coverage = {}
    for kind in DeclarationKind:
        total = report.checked[kind]
        coverage[kind.value] = report.documented[kind] / total if total > 0 else 1.0
    return coverage


def render_summary(report: Report) -> str:
    """A one-line summary with issue count and coverage."""
    coverage = compute_coverage(report)
    parts = ", ".join(f"{kind} {value:.0%}" for kind, value in coverage.items())
    failed = f", {report.units_failed} failed" if report.units_failed else ""
    return (
        f"{len(report)} issue(s) in {report.units_checked} file(s){failed}. "
        f"Coverage: {parts}"
    )
