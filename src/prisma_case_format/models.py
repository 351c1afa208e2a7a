from enum import Enum

from pydantic import BaseModel, Field


class BlockKind(str, Enum):
    DATASOURCE = "datasource"
    GENERATOR = "generator"
    MODEL = "model"
    ENUM = "enum"
    UNKNOWN = "unknown"

    @classmethod
    def from_keyword(cls, keyword: str) -> "BlockKind":
        try:
            return cls(keyword)
        except ValueError:
            return cls.UNKNOWN


class LineKind(str, Enum):
    FIELD = "field"
    BLOCK_ATTRIBUTE = "block_attribute"
    COMMENT = "comment"
    BLANK = "blank"
    OPAQUE = "opaque"


class Line(BaseModel):
    """One physical line of a block body.

    ``text`` never contains the line terminator, which is kept in ``eol`` so
    that ``render()`` reproduces the source bytes exactly. Field lines are
    decomposed into ``indent + field_name + gap + rest``.
    """

    text: str
    eol: str = ""
    kind: LineKind = LineKind.OPAQUE
    indent: str = ""
    field_name: str | None = None
    gap: str = ""
    rest: str = ""
    attribute: str | None = None
    map_literal: str | None = None

    def rebuild(self) -> None:
        if self.kind is LineKind.FIELD:
            self.text = f"{self.indent}{self.field_name}{self.gap}{self.rest}"

    def render(self) -> str:
        return self.text + self.eol


class Block(BaseModel):
    kind: BlockKind
    keyword: str
    name: str
    indent: str = ""
    gap: str = " "
    trail: str = " "
    lines: list[Line] = Field(default_factory=list)
    closing: str = "}"
    line_number: int = 1

    @property
    def header(self) -> str:
        return f"{self.indent}{self.keyword}{self.gap}{self.name}{self.trail}{{"

    @property
    def is_declaration(self) -> bool:
        return self.kind in (BlockKind.MODEL, BlockKind.ENUM)

    def field_lines(self) -> list[Line]:
        return [line for line in self.lines if line.kind is LineKind.FIELD]

    def find_block_attribute(self, attribute: str) -> Line | None:
        for line in self.lines:
            if line.kind is LineKind.BLOCK_ATTRIBUTE and line.attribute == attribute:
                return line
        return None

    def render(self) -> str:
        body = "".join(line.render() for line in self.lines)
        return f"{self.header}{body}{self.closing}"


class Passthrough(BaseModel):
    text: str

    def render(self) -> str:
        return self.text


class SchemaDocument(BaseModel):
    segments: list[Block | Passthrough] = Field(default_factory=list)

    @property
    def blocks(self) -> list[Block]:
        return [segment for segment in self.segments if isinstance(segment, Block)]

    def declarations(self) -> list[Block]:
        return [block for block in self.blocks if block.is_declaration]


class RenamePlan(BaseModel):
    original: str
    new_name: str
    changed: bool


class RenameScope(str, Enum):
    MODEL = "model"
    ENUM = "enum"
    FIELD = "field"


class RenameRecord(BaseModel):
    scope: RenameScope
    block: str
    original: str
    new_name: str
    mapped: bool


class MigrationResult(BaseModel):
    schema_text: str
    renames: list[RenameRecord] = Field(default_factory=list)
