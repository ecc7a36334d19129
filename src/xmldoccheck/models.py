"""Data models for documentation checking."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Protocol


class DeclarationKind(str, Enum):
    """Kinds of declarations that carry a documentation contract."""

    TYPE = "type"
    PROPERTY = "property"
    ROUTINE = "routine"


class IssueKind(str, Enum):
    """Classification of a reported issue."""

    MISSING_DOCUMENTATION_BLOCK = "missing-documentation-block"
    MISSING_REQUIRED_ELEMENT = "missing-required-element"
    MISSING_PARAM_ELEMENT = "missing-param-element"
    ORPHAN_DECLARATION = "orphan-declaration"
    UNIT_FAILURE = "unit-failure"


@dataclass(frozen=True)
class Declaration:
    """A named type, property or method found in a source unit."""

    kind: DeclarationKind
    name: str
    enclosing_type: str | None = None  # None for top-level types
    parameters: tuple[str, ...] = ()  # Routine only, in declaration order
    has_return: bool = False  # Routine only; False means void
    path: str | None = None
    line: int = 0  # 1-based
    column: int = 0  # 1-based
    node: Any = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class DocElement:
    """A tagged entry of a documentation comment, e.g. <param name="x">."""

    tag: str
    identifier: str | None = None  # value of the name="" attribute
    body: str = ""
    children: tuple[DocElement, ...] = ()


@dataclass(frozen=True)
class DocumentationBlock:
    """The parsed documentation comment attached to one declaration."""

    elements: tuple[DocElement, ...] = ()
    text: str = ""

    def has(self, *tags: str) -> bool:
        """True if any top-level element carries one of ``tags``."""
        return any(e.tag in tags for e in self.elements)

    def elements_tagged(self, tag: str) -> list[DocElement]:
        return [e for e in self.elements if e.tag == tag]

    def identifiers(self, tag: str) -> set[str]:
        """Identifiers bound by the top-level ``tag`` elements."""
        return {e.identifier for e in self.elements if e.tag == tag and e.identifier}


@dataclass(frozen=True)
class Issue:
    """One documentation finding."""

    kind: IssueKind
    message: str
    subject: Declaration | None = None
    parameter: str | None = None  # MISSING_PARAM_ELEMENT only
    path: str | None = None

    @property
    def line(self) -> int:
        return self.subject.line if self.subject else 0


@dataclass
class Report:
    """Issues in discovery order, plus counts of what was checked.

    Order is source-unit order, then declaration discovery order within a
    unit, then rule order within a declaration. Issues are never
    deduplicated.
    """

    issues: list[Issue] = field(default_factory=list)
    checked: Counter = field(default_factory=Counter)  # DeclarationKind -> n
    documented: Counter = field(default_factory=Counter)  # DeclarationKind -> n
    units_checked: int = 0
    units_failed: int = 0

    def add(self, issue: Issue) -> None:
        self.issues.append(issue)

    def extend(self, issues: list[Issue]) -> None:
        self.issues.extend(issues)

    def record(self, kind: DeclarationKind, documented: bool) -> None:
        """Count one checked declaration of ``kind``."""
        self.checked[kind] += 1
        if documented:
            self.documented[kind] += 1

    def messages(self) -> list[str]:
        return [i.message for i in self.issues]

    def by_kind(self, kind: IssueKind) -> list[Issue]:
        return [i for i in self.issues if i.kind == kind]

    def __iter__(self) -> Iterator[Issue]:
        return iter(self.issues)

    def __len__(self) -> int:
        return len(self.issues)


class SourceUnit(Protocol):
    """A parsed source file, as supplied by a front-end.

    The underlying tree is owned by the front-end and treated as read-only.
    """

    path: str

    def declarations(self, kind: DeclarationKind) -> Iterator[Declaration]:
        """Yield every declaration of ``kind`` in pre-order."""
        ...

    def leading_doc_comment(self, declaration: Declaration) -> str | None:
        """Return the documentation comment text nearest above ``declaration``."""
        ...


class PendingUnit(Protocol):
    """A source unit that still has to be compiled by the front-end."""

    path: str

    async def compile(self) -> SourceUnit:
        """Parse the unit. Raises FrontEndError if it cannot be produced."""
        ...
