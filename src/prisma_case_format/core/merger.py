import logging
import re

from prisma_case_format.core.classifier import classify_line
from prisma_case_format.core.scanning import split_comment
from prisma_case_format.models import Block, BlockKind, Line, LineKind, RenamePlan, RenameRecord, RenameScope

logger = logging.getLogger(__name__)

DEFAULT_INDENT = "  "

_TYPE_TOKEN = re.compile(r"[A-Za-z_]\w*")


def _body_indent(block: Block) -> str:
    # The first line shares the header line, so its leading space says nothing about indentation.
    for line in block.lines[1:]:
        if line.kind is not LineKind.BLANK and line.text.strip():
            return line.text[: len(line.text) - len(line.text.lstrip())] or DEFAULT_INDENT
    return DEFAULT_INDENT


def _line_ending(block: Block) -> str:
    for line in block.lines:
        if line.eol:
            return line.eol
    return "\n"


def insert_block_map(block: Block, original: str) -> None:
    """Record ``original`` as ``@@map`` directly under the block header."""
    eol = _line_ending(block)
    map_line = classify_line(Line(text=f'{_body_indent(block)}@@map("{original}")', eol=eol))
    first = block.lines[0]
    # A comment on the header line stays there.
    if first.eol and (not first.text.strip() or first.kind is LineKind.COMMENT):
        block.lines.insert(1, map_line)
    else:
        block.lines[0:0] = [Line(text="", eol=eol, kind=LineKind.BLANK), map_line]


def append_field_map(line: Line, original: str) -> None:
    """Append ``@map("original")`` to a field line, ahead of any trailing comment."""
    code, comment = split_comment(line.rest)
    stripped = code.rstrip()
    trailing = code[len(stripped) :]
    if comment and not trailing:
        trailing = " "
    line.rest = f'{stripped} @map("{original}"){trailing}{comment}'
    line.map_literal = original
    line.rebuild()


def _scope_of(block: Block) -> RenameScope:
    return RenameScope.ENUM if block.kind is BlockKind.ENUM else RenameScope.MODEL


def merge_block(block: Block, block_plan: RenamePlan, field_plans: list[RenamePlan]) -> list[RenameRecord]:
    """Apply the rename plans of one model/enum block in place.

    ``field_plans`` is aligned with ``block.field_lines()``. Existing ``@@map``
    and ``@map`` annotations are never rewritten: they already name the
    database object.
    """
    records: list[RenameRecord] = []

    if block_plan.changed:
        mapped = block.find_block_attribute("map") is None
        if mapped:
            insert_block_map(block, block_plan.original)
        block.name = block_plan.new_name
        records.append(
            RenameRecord(
                scope=_scope_of(block),
                block=block.name,
                original=block_plan.original,
                new_name=block_plan.new_name,
                mapped=mapped,
            )
        )
        logger.debug("Renamed %s %s -> %s", block.keyword, block_plan.original, block_plan.new_name)

    fields = block.field_lines()
    taken = {line.field_name for line in fields}
    for line, plan in zip(fields, field_plans, strict=True):
        if not plan.changed:
            continue
        if plan.new_name in taken:
            logger.warning(
                "Skipping %s.%s: %s is already declared in the same block",
                block.name,
                plan.original,
                plan.new_name,
            )
            continue
        taken.discard(plan.original)
        taken.add(plan.new_name)

        mapped = line.map_literal is None
        line.field_name = plan.new_name
        if mapped:
            append_field_map(line, plan.original)
        else:
            line.rebuild()
        records.append(
            RenameRecord(
                scope=RenameScope.FIELD,
                block=block.name,
                original=plan.original,
                new_name=plan.new_name,
                mapped=mapped,
            )
        )
        logger.debug("Renamed field %s.%s -> %s", block.name, plan.original, plan.new_name)

    return records


def rename_type_references(block: Block, renamed: dict[str, str]) -> int:
    """Point field types at renamed models/enums. Attributes are left alone."""
    count = 0
    for line in block.field_lines():
        token = _TYPE_TOKEN.match(line.rest)
        if token is None or token.group() not in renamed:
            continue
        line.rest = renamed[token.group()] + line.rest[token.end() :]
        line.rebuild()
        count += 1
    if count:
        logger.debug("Updated %d type reference(s) in %s", count, block.name)
    return count
