PRINTABLE_FIRST = " "
PRINTABLE_LAST = "~"

# Printable ASCII: space through tilde
ASCII_PRINTABLE = "".join(chr(i) for i in range(ord(PRINTABLE_FIRST), ord(PRINTABLE_LAST) + 1))
PRINTABLE_SET = frozenset(ASCII_PRINTABLE)

DIGITS = "0123456789"


def parse_glyphs(arg: str) -> str:
    """Expand a shell glyph argument into the glyphs it names.

    Accepts ``all``, ``space``, a single printable character, or a range such
    as ``a-z`` (either endpoint first).
    """
    if arg == "all":
        return ASCII_PRINTABLE
    if arg == "space":
        return " "
    if len(arg) == 1 and arg in PRINTABLE_SET:
        return arg
    if len(arg) == 3 and arg[1] == "-" and arg[0] in PRINTABLE_SET and arg[2] in PRINTABLE_SET:
        start, end = sorted((arg[0], arg[2]))
        return "".join(chr(i) for i in range(ord(start), ord(end) + 1))
    raise ValueError(f"Not a glyph or glyph range: {arg!r}")
