"""Documentation completeness rules."""

from __future__ import annotations

from .config import CheckerConfig
from .models import Declaration, DeclarationKind, DocumentationBlock, Issue, IssueKind


def _issue(
    kind: IssueKind,
    message: str,
    declaration: Declaration,
    parameter: str | None = None,
) -> Issue:
    return Issue(
        kind=kind,
        message=message,
        subject=declaration,
        parameter=parameter,
        path=declaration.path,
    )


def _check_type(decl: Declaration, block: DocumentationBlock | None) -> list[Issue]:
    if block is None:
        return [
            _issue(
                IssueKind.MISSING_DOCUMENTATION_BLOCK,
                f"Class {decl.name} does not have any XML comments",
                decl,
            )
        ]

    if not block.has("summary"):
        return [
            _issue(
                IssueKind.MISSING_REQUIRED_ELEMENT,
                f"Class {decl.name} does not have a <summary> element in its XML comments",
                decl,
            )
        ]
    return []


def _check_property(
    decl: Declaration, block: DocumentationBlock | None
) -> list[Issue]:
    where = f"Property {decl.name} in {decl.enclosing_type}"

    if block is None:
        return [
            _issue(
                IssueKind.MISSING_DOCUMENTATION_BLOCK,
                f"{where} does not have any XML comments",
                decl,
            )
        ]

    if not block.has("summary", "value"):
        return [
            _issue(
                IssueKind.MISSING_REQUIRED_ELEMENT,
                f"{where} does not have a <summary> or <value> element in its XML comments",
                decl,
            )
        ]
    return []


def _check_routine(
    decl: Declaration, block: DocumentationBlock | None, config: CheckerConfig
) -> list[Issue]:
    where = f"Method {decl.name} in {decl.enclosing_type}"

    if block is None:
        return [
            _issue(
                IssueKind.MISSING_DOCUMENTATION_BLOCK,
                f"{where} does not have any XML comments",
                decl,
            )
        ]

    issues = []
    if not block.has("summary"):
        issues.append(
            _issue(
                IssueKind.MISSING_REQUIRED_ELEMENT,
                f"{where} does not have a <summary> element in its XML comments",
                decl,
            )
        )

    if config.check_params:
        documented = block.identifiers("param")
        for param in decl.parameters:
            if param not in documented:
                issues.append(
                    _issue(
                        IssueKind.MISSING_PARAM_ELEMENT,
                        f"{where} does not have a <param> element for parameter "
                        f"{param} in its XML comments",
                        decl,
                        parameter=param,
                    )
                )

    if config.check_returns and decl.has_return and not block.has("returns"):
        issues.append(
            _issue(
                IssueKind.MISSING_REQUIRED_ELEMENT,
                f"{where} does not have a <returns> element in its XML comments",
                decl,
            )
        )

    return issues


def validate_declaration(
    declaration: Declaration,
    block: DocumentationBlock | None,
    config: CheckerConfig | None = None,
) -> list[Issue]:
    """Check one declaration's documentation against its contract.

    Checks:
    1. A documentation block must exist. If it does not, that is the only
       issue reported for the declaration.
    2. Types need <summary>; properties need <summary> or <value>;
       methods need <summary>.
    3. Methods need a <param> per declared parameter (in declaration order)
       and, when they return a value, a <returns>.

    Properties and methods without an enclosing type are reported as
    orphans and not checked further.

    Args:
        declaration: The declaration being checked
        block: Its documentation block, or None when there is none
        config: Rule switches; defaults apply when omitted

    Returns:
        List of issues, possibly empty
    """
    config = config or CheckerConfig()

    if declaration.kind is DeclarationKind.TYPE:
        return _check_type(declaration, block)

    if declaration.enclosing_type is None:
        label = "Property" if declaration.kind is DeclarationKind.PROPERTY else "Method"
        return [
            _issue(
                IssueKind.ORPHAN_DECLARATION,
                f"{label} {declaration.name} is not declared inside a type",
                declaration,
            )
        ]

    if declaration.kind is DeclarationKind.PROPERTY:
        return _check_property(declaration, block)
    return _check_routine(declaration, block, config)
