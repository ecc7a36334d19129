"""C# front-end built on tree-sitter.

Exposes parsed files as source units: declarations are found by walking
the syntax tree, and documentation comments are found by looking at the
comment nodes immediately preceding a declaration.
"""

from __future__ import annotations

import asyncio
import codecs
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

import tree_sitter_c_sharp
from tree_sitter import Language, Node, Parser, Tree

from .errors import FrontEndError
from .models import Declaration, DeclarationKind

log = logging.getLogger(__name__)

CSHARP = Language(tree_sitter_c_sharp.language())

_TYPE_NODES = frozenset(
    {
        "class_declaration",
        "struct_declaration",
        "interface_declaration",
        "record_declaration",
        "record_struct_declaration",
    }
)

_NODE_TYPES: dict[DeclarationKind, frozenset[str]] = {
    DeclarationKind.TYPE: _TYPE_NODES,
    DeclarationKind.PROPERTY: frozenset({"property_declaration"}),
    DeclarationKind.ROUTINE: frozenset({"method_declaration"}),
}

# Nodes that may sit between a documentation comment and its declaration
_TRIVIA_NODES = frozenset(
    {
        "comment",
        "preproc_region",
        "preproc_endregion",
        "preproc_pragma",
        "preproc_nullable",
    }
)

# Conditional-compilation blocks that may wrap a declaration
_CONDITIONAL_NODES = frozenset({"preproc_if", "preproc_elif", "preproc_else"})

# Return types that produce no value, so need no <returns>
_NO_VALUE_RETURNS = frozenset({"void", "Task", "ValueTask"})


def _text(node: Node) -> str:
    return node.text.decode("utf-8", errors="replace") if node.text else ""


def _walk(root: Node) -> Iterator[Node]:
    """Pre-order walk of the tree under ``root``, ``root`` included."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def _name(node: Node) -> str:
    name = node.child_by_field_name("name")
    return _text(name) if name is not None else "<unnamed>"


def _enclosing_type(node: Node) -> str | None:
    parent = node.parent
    while parent is not None:
        if parent.type in _TYPE_NODES:
            return _name(parent)
        parent = parent.parent
    return None


def _parameters(node: Node) -> tuple[str, ...]:
    params = node.child_by_field_name("parameters")
    if params is None:
        params = next((c for c in node.children if c.type == "parameter_list"), None)
    if params is None:
        return ()

    names = []
    for param in params.named_children:
        if param.type != "parameter":
            continue
        name = param.child_by_field_name("name")
        if name is not None:
            names.append(_text(name))
    return tuple(names)


def _has_return(node: Node) -> bool:
    returns = node.child_by_field_name("returns")
    if returns is None:
        returns = node.child_by_field_name("type")
    if returns is None:
        return False
    text = _text(returns).strip()
    # Non-generic Task/ValueTask, qualified or not
    return text.rsplit(".", 1)[-1] not in _NO_VALUE_RETURNS


def _directive_only(parent: Node | None, last: Node | None) -> bool:
    """True if ``parent`` is an #if/#elif/#else block and ``last`` and the
    children before it are only the directive line itself.
    """
    if parent is None or parent.type not in _CONDITIONAL_NODES:
        return False

    condition = parent.child_by_field_name("condition")
    child = last
    while child is not None:
        on_directive_line = child.start_point[0] == parent.start_point[0]
        if (
            child.is_named
            and child != condition
            and not on_directive_line
            and child.type not in _TRIVIA_NODES
        ):
            return False
        child = child.prev_sibling
    return True


def _is_doc_comment(text: str) -> bool:
    if text.startswith("///"):
        return not text.startswith("////")
    return text.startswith("/**") and not text.startswith("/**/")


class CSharpSourceUnit:
    """A parsed C# file.

    The tree is owned by this unit and never modified; declarations carry a
    reference to their node that is only meaningful while the unit lives.
    """

    def __init__(self, path: str, tree: Tree):
        self.path = path
        self.tree = tree

    @classmethod
    def from_source(cls, source: str | bytes, path: str = "<memory>") -> CSharpSourceUnit:
        """Parse C# source text."""
        data = source.encode("utf-8") if isinstance(source, str) else source
        if data.startswith(codecs.BOM_UTF8):
            data = data[len(codecs.BOM_UTF8) :]

        tree = Parser(CSHARP).parse(data)
        if tree.root_node.has_error:
            log.warning("%s has syntax errors; checking what could be parsed", path)
        return cls(path, tree)

    def declarations(self, kind: DeclarationKind) -> Iterator[Declaration]:
        node_types = _NODE_TYPES[kind]
        for node in _walk(self.tree.root_node):
            if node.type in node_types:
                yield self._declaration(kind, node)

    def _declaration(self, kind: DeclarationKind, node: Node) -> Declaration:
        anchor = node.child_by_field_name("name")
        row, column = (anchor if anchor is not None else node).start_point
        routine = kind is DeclarationKind.ROUTINE
        return Declaration(
            kind=kind,
            name=_name(node),
            enclosing_type=_enclosing_type(node),
            parameters=_parameters(node) if routine else (),
            has_return=_has_return(node) if routine else False,
            path=self.path,
            line=row + 1,
            column=column + 1,
            node=node,
        )

    def leading_doc_comment(self, declaration: Declaration) -> str | None:
        """Return the documentation comment region nearest above the declaration.

        Only trivia (comments, region and pragma directives) may sit between
        the region and the declaration. A declaration that opens an ``#if``,
        ``#elif`` or ``#else`` block looks above the directive. A region is
        a run of ``///`` lines on consecutive lines, or a single ``/** */``
        comment. Plain ``//`` comments are skipped over; if several regions
        precede the declaration, the closest one wins.
        """
        node: Node = declaration.node
        trivia: list[Node] = []

        current = node
        while True:
            sibling = current.prev_sibling
            while sibling is not None and sibling.type in _TRIVIA_NODES:
                trivia.append(sibling)
                sibling = sibling.prev_sibling
            # A declaration opening an #if block keeps the comment above the #if
            if not _directive_only(current.parent, sibling):
                break
            current = current.parent

        # Comments the parser attached inside the node, before its first token
        leading = []
        for child in node.children:
            if child.type not in _TRIVIA_NODES:
                break
            leading.append(child)
        trivia = list(reversed(leading)) + trivia  # nearest first

        region: list[Node] = []
        for item in trivia:
            if item.type != "comment":
                if region:
                    break
                continue

            text = _text(item).strip()
            if not _is_doc_comment(text):
                if region:
                    break
                continue

            if text.startswith("/**"):
                if region:
                    break
                return text

            if region and item.end_point[0] + 1 != region[-1].start_point[0]:
                break
            region.append(item)

        if not region:
            return None
        return "\n".join(_text(c) for c in reversed(region))


@dataclass
class PendingCSharpUnit:
    """A C# file waiting to be read and parsed."""

    path: str

    async def compile(self) -> CSharpSourceUnit:
        """Read and parse the file in a worker thread.

        Raises:
            FrontEndError: If the file cannot be read or is not UTF-8.
        """
        return await asyncio.to_thread(self._compile)

    def _compile(self) -> CSharpSourceUnit:
        try:
            data = Path(self.path).read_bytes()
        except OSError as e:
            raise FrontEndError(f"cannot read file: {e}", self.path) from e

        try:
            data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise FrontEndError(f"not valid UTF-8: {e}", self.path) from e

        return CSharpSourceUnit.from_source(data, self.path)
