"""Line wrapping for study notes that carry ``${...}`` highlights."""

_LINE_WIDTH = 30
_WIDE_BYTES = 3


def split_line(text):
    """Wrap ``text`` about every thirty wide characters.

    Position is measured in UTF-8 bytes, three to a wide character. A
    ``${...}`` span is never broken: a line break falling inside it is
    placed after its closing brace.
    """
    raw = text.encode("utf-8")
    out = []
    quote_start = 0
    in_quote = False
    newline_due = False
    offset = 0
    for char in text:
        pos = offset
        offset += len(char.encode("utf-8"))

        if (pos // _WIDE_BYTES + 1) % _LINE_WIDTH == 0:
            newline_due = True

        if char == "$":
            quote_start = pos
            in_quote = True
        elif char == "}":
            out.append(raw[quote_start:pos + 1].decode("utf-8"))
            in_quote = False
        elif not in_quote:
            out.append(char)

        if not in_quote and newline_due:
            out.append("\n")
            newline_due = False

    return "".join(out)


def contents_print(*args):
    """Print one wrapped entry, or several as a numbered list."""
    if len(args) == 1:
        print(split_line(args[0]))
        return
    for number, content in enumerate(args, start=1):
        print(split_line(f"{number}. {content}\n"))