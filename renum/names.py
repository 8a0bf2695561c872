"""
Name Matching
=============
Helpers for working with raw declaration text such as ``"A = 42"``.

A raw declaration's name ends at the first name ender (``=``, space, tab,
newline) or at the end of the string. The comparators walk a raw
declaration and a clean reference name in lockstep, so lookups never need
a trimmed copy of the declaration.

Case folding is ASCII-only: ``A``-``Z`` fold to ``a``-``z`` and every
other character, including non-ASCII letters, compares as-is.
"""

NAME_ENDERS = frozenset("= \t\n")


def ends_name(text: str, index: int) -> bool:
    """True if position ``index`` of ``text`` ends the name portion.

    Past the end of ``text`` counts as an ender.
    """
    return index >= len(text) or text[index] in NAME_ENDERS


def to_lowercase_ascii(ch: str) -> str:
    if "A" <= ch <= "Z":
        return chr(ord(ch) + 0x20)
    return ch


def _match(raw: str, reference: str, fold: bool) -> bool:
    index = 0
    while True:
        if ends_name(raw, index):
            return index == len(reference)
        if index == len(reference):
            return False
        a, b = raw[index], reference[index]
        if fold:
            a, b = to_lowercase_ascii(a), to_lowercase_ascii(b)
        if a != b:
            return False
        index += 1


def names_match(raw: str, reference: str) -> bool:
    """Case-sensitive match of a raw declaration against a clean name."""
    return _match(raw, reference, fold=False)


def names_match_nocase(raw: str, reference: str) -> bool:
    """Like ``names_match``, folding ASCII letters on both sides."""
    return _match(raw, reference, fold=True)


def trimmed_length(raw: str) -> int:
    """Length of the name portion of a raw declaration."""
    index = 0
    while not ends_name(raw, index):
        index += 1
    return index
