"""Small string helpers."""


def fmt_han(width, text):
    """Right-justify ``text`` so that wide (non-ASCII) characters count twice.

    A negative resulting width left-justifies instead.
    """
    wide = sum(1 for char in text if ord(char) > 0x7F)
    target = width - wide
    if target < 0:
        return text.ljust(-target)
    return text.rjust(target)


def reverse(s):
    """Reverse a string character by character."""
    return s[::-1]


def to_upper(s):
    """Upper-case each character, keeping those with no single-character form."""

    def upper_char(char):
        upper = char.upper()
        return upper if len(upper) == 1 else char

    return "".join(upper_char(char) for char in s)