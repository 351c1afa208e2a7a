"""Character-level helpers shared by the parser stages and the formatter.

Prisma schemas only know double-quoted strings and ``//`` line comments, so a
tiny state machine is enough to tell code apart from literal text.
"""

from collections.abc import Iterator
from enum import Enum


class _State(Enum):
    CODE = "code"
    STRING = "string"
    COMMENT = "comment"


def _scan(text: str) -> Iterator[tuple[int, str, _State]]:
    state = _State.CODE
    escaped = False
    for index, ch in enumerate(text):
        if ch == "\n":
            state = _State.CODE
            escaped = False
            yield index, ch, _State.CODE
            continue
        if state is _State.COMMENT:
            yield index, ch, _State.COMMENT
        elif state is _State.STRING:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                state = _State.CODE
                yield index, ch, _State.CODE
                continue
            yield index, ch, _State.STRING
        elif ch == '"':
            state = _State.STRING
            yield index, ch, _State.CODE
        elif ch == "/" and text.startswith("//", index):
            state = _State.COMMENT
            yield index, ch, _State.COMMENT
        else:
            yield index, ch, _State.CODE


def mask_literals(text: str) -> str:
    """Blank out string contents and comments, keeping offsets and quotes intact."""
    return "".join(ch if state is _State.CODE else " " for _, ch, state in _scan(text))


def comment_start(line: str) -> int:
    """Return the offset of the ``//`` comment on a single line, or -1."""
    for index, _, state in _scan(line):
        if state is _State.COMMENT:
            return index
    return -1


def split_comment(line: str) -> tuple[str, str]:
    index = comment_start(line)
    if index < 0:
        return line, ""
    return line[:index], line[index:]


def position_of(text: str, offset: int) -> tuple[int, int]:
    """1-based (line, column) for an offset into ``text``."""
    line = text.count("\n", 0, offset) + 1
    column = offset - (text.rfind("\n", 0, offset) + 1) + 1
    return line, column
