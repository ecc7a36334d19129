"""Documentation comment extraction.

Turns the raw text of a ``///`` or ``/** */`` comment into a
DocumentationBlock of top-level tagged elements. Parsing is best-effort:
malformed XML never raises, it just yields whatever elements are
recognisable, so a broken comment shows up later as a missing element.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from .models import Declaration, DocElement, DocumentationBlock, SourceUnit

log = logging.getLogger(__name__)

# Regions whose content must not be scanned for tags
_OPAQUE = re.compile(r"<!--.*?(?:-->|\Z)|<!\[CDATA\[.*?(?:\]\]>|\Z)", re.DOTALL)

_TAG = re.compile(r"<(/?)([A-Za-z_][\w.:-]*)([^<>]*?)(/?)>")

_NAME_ATTR = re.compile(r"""\bname\s*=\s*(?:"([^"]*)"|'([^']*)')""")


@dataclass
class _OpenElement:
    tag: str
    identifier: str | None
    body_start: int
    children: list[DocElement] = field(default_factory=list)


def _strip_markers(text: str) -> str:
    """Remove ``///`` and ``/** * */`` comment markers, keeping line structure."""
    lines = []
    for raw in text.splitlines():
        line = raw.strip()
        if line.startswith("///"):
            line = line[3:]
            # One space after the marker is conventional, not content
            if line.startswith(" "):
                line = line[1:]
        else:
            if line.startswith("/**"):
                line = line[3:]
            if line.endswith("*/"):
                line = line[:-2]
            line = line.strip()
            if line.startswith("*"):
                line = line[1:].lstrip()
        lines.append(line.rstrip())
    return "\n".join(lines).strip()


def _mask_opaque(xml: str) -> str:
    """Blank out XML comments and CDATA so their content is not seen as tags.

    Offsets are preserved so bodies can still be sliced from the unmasked text.
    """
    return _OPAQUE.sub(lambda m: " " * len(m.group(0)), xml)


def _identifier(attrs: str) -> str | None:
    match = _NAME_ATTR.search(attrs)
    if not match:
        return None
    return match.group(1) if match.group(1) is not None else match.group(2)


def _parse_elements(xml: str) -> tuple[DocElement, ...]:
    """Extract the top-level elements of ``xml`` in document order."""
    masked = _mask_opaque(xml)
    top: list[DocElement] = []
    stack: list[_OpenElement] = []

    def close(element: _OpenElement, end: int) -> None:
        done = DocElement(
            tag=element.tag,
            identifier=element.identifier,
            body=xml[element.body_start : end].strip(),
            children=tuple(element.children),
        )
        (stack[-1].children if stack else top).append(done)

    for match in _TAG.finditer(masked):
        closing, tag, attrs, self_closing = match.groups()

        if closing:
            depth = next(
                (d for d in range(len(stack) - 1, -1, -1) if stack[d].tag == tag),
                None,
            )
            if depth is None:
                log.debug("Ignoring stray </%s> in documentation comment", tag)
                continue
            # Elements left open inside the matched one end with it
            while len(stack) > depth:
                close(stack.pop(), match.start())
            continue

        if self_closing:
            element = DocElement(tag=tag, identifier=_identifier(attrs))
            (stack[-1].children if stack else top).append(element)
            continue

        stack.append(_OpenElement(tag, _identifier(attrs), match.end()))

    if stack:
        log.debug(
            "Unclosed element(s) %s in documentation comment",
            ", ".join(f"<{e.tag}>" for e in stack),
        )
    while stack:
        close(stack.pop(), len(xml))

    return tuple(top)


def parse_doc_comment(text: str) -> DocumentationBlock:
    """Parse the raw text of a documentation comment.

    Args:
        text: Comment text including its ``///`` or ``/**`` markers.

    Returns:
        DocumentationBlock with the top-level elements in document order.
        Repeated tags are kept as separate elements.
    """
    xml = _strip_markers(text)
    return DocumentationBlock(elements=_parse_elements(xml), text=xml)


def extract_documentation(
    unit: SourceUnit, declaration: Declaration
) -> DocumentationBlock | None:
    """Return the documentation block attached to ``declaration``, if any.

    The association is positional: the unit is asked for the documentation
    comment region immediately preceding the declaration.
    """
    text = unit.leading_doc_comment(declaration)
    if text is None:
        return None

    log.debug(
        "%s %s documentation:\n%s", declaration.kind.value, declaration.name, text
    )
    return parse_doc_comment(text)
