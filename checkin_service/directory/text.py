"""Text normalization for case- and accent-insensitive matching."""
import re
import unicodedata

# Combining Diacritical Marks block
COMBINING_MARKS = re.compile("[\u0300-\u036f]")


def normalize(value: object = "") -> str:
    """
    Normalize text for comparison.

    Decomposes to NFD, strips the combining diacritical marks left behind
    and lowercases, so "José" and "JOSE" both become "jose".
    None is treated as an empty string.
    """
    if value is None:
        return ""
    decomposed = unicodedata.normalize("NFD", str(value))
    return COMBINING_MARKS.sub("", decomposed).lower()
