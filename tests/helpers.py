"""In-memory source units for testing the checker without a parser."""

from __future__ import annotations

from xmldoccheck.errors import FrontEndError
from xmldoccheck.models import Declaration, DeclarationKind


def type_decl(name: str, enclosing: str | None = None) -> Declaration:
    return Declaration(DeclarationKind.TYPE, name, enclosing_type=enclosing, path="Fake.cs")


def property_decl(name: str, enclosing: str | None = "Foo") -> Declaration:
    return Declaration(
        DeclarationKind.PROPERTY, name, enclosing_type=enclosing, path="Fake.cs"
    )


def method_decl(
    name: str,
    enclosing: str | None = "Foo",
    parameters: tuple[str, ...] = (),
    has_return: bool = False,
) -> Declaration:
    return Declaration(
        DeclarationKind.ROUTINE,
        name,
        enclosing_type=enclosing,
        parameters=parameters,
        has_return=has_return,
        path="Fake.cs",
    )


class FakeUnit:
    """
    A source unit backed by a list of (declaration, doc comment) pairs.

    Declarations are yielded per kind in list order, which stands in for
    pre-order discovery in a real tree.
    """

    def __init__(self, entries: list[tuple[Declaration, str | None]], path: str = "Fake.cs"):
        self.path = path
        self.entries = entries
        self.comment_lookups = 0

    def declarations(self, kind: DeclarationKind):
        for declaration, _ in self.entries:
            if declaration.kind is kind:
                yield declaration

    def leading_doc_comment(self, declaration: Declaration) -> str | None:
        self.comment_lookups += 1
        for candidate, comment in self.entries:
            if candidate is declaration:
                return comment
        return None


class FakePending:
    """A pending unit that compiles to a given unit, or fails."""

    def __init__(self, unit: FakeUnit | None = None, error: str | None = None, path: str | None = None):
        self.unit = unit
        self.error = error
        self.path = path or (unit.path if unit else "Broken.cs")
        self.compiled = 0

    async def compile(self) -> FakeUnit:
        self.compiled += 1
        if self.error is not None:
            raise FrontEndError(self.error, self.path)
        return self.unit
