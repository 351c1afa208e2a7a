import logging
import re

from prisma_case_format.core.scanning import mask_literals, split_comment
from prisma_case_format.models import Block, Line, LineKind, SchemaDocument

logger = logging.getLogger(__name__)

_FIELD = re.compile(r"^(?P<indent>\s*)(?P<name>[A-Za-z_]\w*)(?P<gap>\s+)(?P<rest>\S.*)$")
_BLOCK_ATTRIBUTE = re.compile(r"^\s*@@(?P<attribute>[A-Za-z_][\w.]*)")

_MAP_CALL = re.compile(r"(?<![@\w])@map\s*\(")
_BLOCK_MAP_CALL = re.compile(r"@@map\s*\(")
_LITERAL_ARGUMENT = re.compile(r'\s*(?:name\s*:\s*)?"(?P<literal>(?:[^"\\]|\\.)*)"')


def _call_argument(fragment: str, call: re.Match[str]) -> str:
    literal = _LITERAL_ARGUMENT.match(fragment, call.end())
    if literal:
        return literal["literal"]
    # Not a plain string literal; keep the raw argument so the line still counts as mapped.
    return fragment[call.end() :].split(")", 1)[0].strip()


def extract_map_literal(fragment: str) -> str | None:
    """Return the argument of an inline ``@map(...)`` in ``fragment``, if any.

    Occurrences inside string literals or the trailing comment are ignored, and
    ``@@map`` never counts as an inline ``@map``.
    """
    call = _MAP_CALL.search(mask_literals(fragment))
    if call is None:
        return None
    return _call_argument(fragment, call)


def extract_block_map_literal(line: str) -> str | None:
    call = _BLOCK_MAP_CALL.search(mask_literals(line))
    if call is None:
        return None
    return _call_argument(line, call)


def classify_line(line: Line) -> Line:
    stripped = line.text.strip()
    if not stripped:
        line.kind = LineKind.BLANK
    elif stripped.startswith("//"):
        line.kind = LineKind.COMMENT
    elif stripped.startswith("@@"):
        attribute = _BLOCK_ATTRIBUTE.match(line.text)
        line.kind = LineKind.BLOCK_ATTRIBUTE
        line.attribute = attribute["attribute"] if attribute else None
        if line.attribute == "map":
            line.map_literal = extract_block_map_literal(line.text)
    else:
        field = _FIELD.match(line.text)
        if field and split_comment(field["rest"])[0].strip():
            line.kind = LineKind.FIELD
            line.indent = field["indent"]
            line.field_name = field["name"]
            line.gap = field["gap"]
            line.rest = field["rest"]
            line.map_literal = extract_map_literal(field["rest"])
        else:
            line.kind = LineKind.OPAQUE
    return line


def classify_block(block: Block) -> Block:
    if not block.is_declaration:
        return block
    for line in block.lines:
        classify_line(line)
    return block


def classify_document(document: SchemaDocument) -> SchemaDocument:
    for block in document.declarations():
        classify_block(block)
        logger.debug(
            "Classified %s %s: %d field(s), %d line(s)",
            block.keyword,
            block.name,
            len(block.field_lines()),
            len(block.lines),
        )
    return document
