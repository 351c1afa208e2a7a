"""Pure-Python canonical layout for schema files.

Approximates ``prisma format``: two-space indentation, column-aligned fields
and settings, one blank line between blocks, single trailing newline.
"""

from __future__ import annotations

import re

from prisma_case_format.core.classifier import classify_line
from prisma_case_format.core.scanning import mask_literals, split_comment
from prisma_case_format.core.tokenizer import BYTE_ORDER_MARK, tokenize
from prisma_case_format.models import Block, BlockKind, Line, LineKind, Passthrough

INDENT = "  "

_SETTING = re.compile(r"^\s*(?P<key>[A-Za-z_]\w*)\s*=\s*(?P<value>.*?)\s*$")


def _split_type(code: str) -> tuple[str, str]:
    """Split ``Type @attr(...)`` at the first top-level whitespace."""
    masked = mask_literals(code)
    depth = 0
    for index, ch in enumerate(masked):
        if ch in "([":
            depth += 1
        elif ch in ")]":
            depth = max(0, depth - 1)
        elif ch.isspace() and depth == 0:
            return code[:index], code[index:].strip()
    return code, ""


def _field_columns(line: Line) -> tuple[str, str, str, str]:
    code, comment = split_comment(line.rest)
    type_token, attributes = _split_type(code.strip())
    return line.field_name or "", type_token, attributes, comment.strip()


def _render_field_group(group: list[Line]) -> list[str]:
    columns = [_field_columns(line) for line in group]
    name_width = max(len(name) for name, _, _, _ in columns)
    type_width = max(len(type_token) for _, type_token, _, _ in columns)
    rendered = []
    for name, type_token, attributes, comment in columns:
        text = f"{INDENT}{name.ljust(name_width)} {type_token.ljust(type_width)} {attributes}".rstrip()
        if comment:
            text = f"{text} {comment}"
        rendered.append(text)
    return rendered


def _render_setting_group(group: list[re.Match[str]]) -> list[str]:
    width = max(len(match["key"]) for match in group)
    return [f"{INDENT}{match['key'].ljust(width)} = {match['value']}" for match in group]


def _declaration_body(lines: list[Line]) -> list[str]:
    body: list[str] = []
    group: list[Line] = []
    for line in lines:
        classify_line(line)
        if line.kind is LineKind.FIELD:
            group.append(line)
            continue
        if group:
            body.extend(_render_field_group(group))
            group = []
        body.append("" if line.kind is LineKind.BLANK else INDENT + line.text.strip())
    if group:
        body.extend(_render_field_group(group))
    return body


def _settings_body(lines: list[Line]) -> list[str]:
    body: list[str] = []
    group: list[re.Match[str]] = []
    for line in lines:
        code, comment = split_comment(line.text)
        setting = _SETTING.match(code) if not comment else None
        if setting:
            group.append(setting)
            continue
        if group:
            body.extend(_render_setting_group(group))
            group = []
        stripped = line.text.strip()
        body.append(INDENT + stripped if stripped else "")
    if group:
        body.extend(_render_setting_group(group))
    return body


def _collapse_blank_lines(lines: list[str]) -> list[str]:
    collapsed: list[str] = []
    for line in lines:
        if not line and (not collapsed or not collapsed[-1]):
            continue
        collapsed.append(line)
    while collapsed and not collapsed[-1]:
        collapsed.pop()
    return collapsed


def _render_block(block: Block) -> list[str]:
    if block.kind in (BlockKind.DATASOURCE, BlockKind.GENERATOR):
        body = _settings_body(block.lines)
    else:
        body = _declaration_body(block.lines)
    return [f"{block.keyword} {block.name} {{", *_collapse_blank_lines(body), "}"]


def format_schema(text: str) -> str:
    bom = BYTE_ORDER_MARK if text.startswith(BYTE_ORDER_MARK) else ""
    text = text[len(bom) :]
    newline = "\r\n" if "\r\n" in text else "\n"
    output: list[str] = []
    block_ends: set[int] = set()

    for segment in tokenize(text).segments:
        if isinstance(segment, Passthrough):
            parts = [part.rstrip() for part in segment.text.split("\n")]
            # The first part continues the line of a preceding closing brace.
            if output and parts[0].strip():
                output[-1] = f"{output[-1]} {parts[0].strip()}"
                parts = parts[1:]
            elif output:
                parts = parts[1:]
            output.extend(part.strip() if part.lstrip().startswith("//") else part for part in parts)
            continue
        if output and not output[-1]:
            output.pop()
        output.extend(_render_block(segment))
        block_ends.add(len(output) - 1)

    spaced: list[str] = []
    for index, line in enumerate(output):
        spaced.append(line)
        if index in block_ends and index + 1 < len(output) and output[index + 1]:
            spaced.append("")

    lines = _collapse_blank_lines(spaced)
    while lines and not lines[0]:
        lines.pop(0)
    return bom + (newline.join(lines) + newline if lines else "")


class BuiltinFormatter:
    """Implements the ``SchemaFormatter`` protocol without external tools."""

    async def format(self, schema: str) -> str:
        return format_schema(schema)
