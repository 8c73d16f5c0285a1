from __future__ import annotations

"""Line tokenizer for comma separated sales exports.

Exports are split line by line before tokenizing, so a quoted field never spans
lines. The tokenizer is permissive: an unterminated quote simply runs to the end
of the line, because malformed trailing rows are common in these exports.
"""

__all__ = [
    "QUOTE",
    "split_lines",
    "tokenize_line",
]

QUOTE = '"'


def split_lines(text: str) -> list[str]:
    """Split an export into physical lines.

    Trailing whitespace of the whole blob is dropped and CRLF endings are
    normalized. Leading blank lines are kept so indexes stay physical line
    numbers. An empty blob yields a single empty line.
    """
    return [line.rstrip("\r") for line in text.rstrip().split("\n")]


def tokenize_line(line: str, delimiter: str = ",") -> list[str]:
    """Split one line into fields.

    - ``delimiter`` separates fields outside quoted regions
    - ``""`` inside a quoted region is a literal quote
    - quote characters themselves are not part of the field

    Never raises; always returns at least one field.

    >>> tokenize_line('a,"b,c",d')
    ['a', 'b,c', 'd']
    >>> tokenize_line('a,"b""c",d')
    ['a', 'b"c', 'd']
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    n = len(line)
    while i < n:
        ch = line[i]
        if ch == QUOTE:
            if in_quotes and i + 1 < n and line[i + 1] == QUOTE:
                current.append(QUOTE)
                i += 1
            else:
                in_quotes = not in_quotes
        elif ch == delimiter and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(ch)
        i += 1
    fields.append("".join(current))
    return fields
