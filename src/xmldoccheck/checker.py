"""Walk source units and collect documentation issues into one report."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Callable, Iterable

from .config import CheckerConfig
from .errors import FrontEndError
from .extractors import extract_documentation
from .models import (
    Declaration,
    DeclarationKind,
    Issue,
    IssueKind,
    PendingUnit,
    Report,
    SourceUnit,
)
from .project import load_project
from .validators import validate_declaration

log = logging.getLogger(__name__)

# One full pass over the unit per kind, in this order
PASS_ORDER = (DeclarationKind.TYPE, DeclarationKind.PROPERTY, DeclarationKind.ROUTINE)

DeclarationFilter = Callable[[Declaration], bool]


def check_unit(
    unit: SourceUnit,
    config: CheckerConfig,
    report: Report,
    include: DeclarationFilter | None = None,
) -> None:
    """Check every declaration in ``unit`` and append the issues to ``report``."""
    for kind in PASS_ORDER:
        for declaration in unit.declarations(kind):
            if include is not None and not include(declaration):
                log.debug("Skipping %s %s", kind.value, declaration.name)
                continue

            block = extract_documentation(unit, declaration)
            report.record(kind, documented=block is not None)
            report.extend(validate_declaration(declaration, block, config))

    report.units_checked += 1


def check_source_units(
    units: Iterable[SourceUnit],
    config: CheckerConfig | None = None,
    report: Report | None = None,
    include: DeclarationFilter | None = None,
) -> Report:
    """Check already parsed units, in order."""
    config = config or CheckerConfig()
    if report is None:
        report = Report()

    for unit in units:
        log.info("Checking %s", unit.path)
        check_unit(unit, config, report, include)
    return report


async def check_units(
    units: Iterable[PendingUnit],
    config: CheckerConfig | None = None,
    report: Report | None = None,
    include: DeclarationFilter | None = None,
) -> Report:
    """Compile and check units one at a time, in the order supplied.

    A unit the front-end cannot compile is recorded as a UNIT_FAILURE issue
    and the run continues with the next unit.

    Args:
        units: Pending units from the front-end
        config: Rule switches; defaults apply when omitted
        report: Report to append to. Pass one in to keep the issues found
            so far if the run is abandoned part way.
        include: Optional predicate; declarations it rejects are skipped

    Returns:
        The report, with issues in discovery order
    """
    config = config or CheckerConfig()
    if report is None:
        report = Report()

    for pending in units:
        log.info("Checking %s", pending.path)
        try:
            unit = await pending.compile()
        except FrontEndError as e:
            log.warning("Skipping %s: %s", pending.path, e)
            report.units_failed += 1
            report.add(
                Issue(
                    kind=IssueKind.UNIT_FAILURE,
                    message=f"Unable to analyze {pending.path}: {e}",
                    path=pending.path,
                )
            )
            continue

        check_unit(unit, config, report, include)

    return report


def run_check(
    path: Path,
    config: CheckerConfig | None = None,
    include: DeclarationFilter | None = None,
) -> Report:
    """Check the solution, project, directory or file at ``path``."""
    config = config or CheckerConfig()
    units = load_project(path, config)
    log.info("Loaded %d source file(s) from %s", len(units), path)
    return asyncio.run(check_units(units, config, include=include))
