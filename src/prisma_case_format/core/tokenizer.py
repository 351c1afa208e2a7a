import logging
import re

from prisma_case_format.core.scanning import mask_literals, position_of
from prisma_case_format.errors import ParseErrorKind, SchemaParseError
from prisma_case_format.models import Block, BlockKind, Line, Passthrough, SchemaDocument

logger = logging.getLogger(__name__)

BYTE_ORDER_MARK = "\ufeff"

_BLOCK_HEADER = re.compile(
    r"^(?P<indent>[ \t]*)(?P<keyword>[A-Za-z_]\w*)(?P<gap>[ \t]+)(?P<name>[A-Za-z_]\w*)(?P<trail>[ \t]*)\{",
    re.MULTILINE,
)


def split_lines(body: str) -> list[Line]:
    """Split a block body into lines, keeping each terminator for exact round-trips."""
    parts = body.split("\n")
    lines: list[Line] = []
    for index, part in enumerate(parts):
        if index == len(parts) - 1:
            lines.append(Line(text=part, eol=""))
        elif part.endswith("\r"):
            lines.append(Line(text=part[:-1], eol="\r\n"))
        else:
            lines.append(Line(text=part, eol="\n"))
    return lines


def _check_passthrough(text: str, masked: str, start: int, end: int) -> None:
    for offset in range(start, end):
        if masked[offset] in "{}":
            line, column = position_of(text, offset)
            snippet = text[text.rfind("\n", 0, offset) + 1 : offset + 1].strip()
            raise SchemaParseError(
                ParseErrorKind.UNRECOGNIZED_CONSTRUCT,
                f"unexpected '{masked[offset]}' outside of a block near {snippet!r}",
                line,
                column,
            )


def _find_closing_brace(text: str, masked: str, header: re.Match[str]) -> int:
    depth = 1
    for offset in range(header.end(), len(masked)):
        ch = masked[offset]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return offset
    line, column = position_of(text, header.start("keyword"))
    raise SchemaParseError(
        ParseErrorKind.UNTERMINATED_BLOCK,
        f"{header['keyword']} {header['name']} is never closed",
        line,
        column,
    )


def tokenize(text: str) -> SchemaDocument:
    """Split schema text into top-level blocks and the passthrough text between them."""
    masked = mask_literals(text)
    if masked.startswith(BYTE_ORDER_MARK):
        # Same length, and lets the first header match at a line start.
        masked = "\n" + masked[1:]
    document = SchemaDocument()
    pos = 0
    while pos < len(text):
        header = _BLOCK_HEADER.search(masked, pos)
        end = header.start() if header else len(text)
        _check_passthrough(text, masked, pos, end)
        if end > pos:
            document.segments.append(Passthrough(text=text[pos:end]))
        if header is None:
            break

        close = _find_closing_brace(text, masked, header)
        document.segments.append(
            Block(
                kind=BlockKind.from_keyword(header["keyword"]),
                keyword=header["keyword"],
                name=header["name"],
                indent=header["indent"],
                gap=header["gap"],
                trail=header["trail"],
                lines=split_lines(text[header.end() : close]),
                line_number=position_of(text, header.start("keyword"))[0],
            )
        )
        pos = close + 1

    logger.debug("Tokenized schema into %d block(s)", len(document.blocks))
    return document
