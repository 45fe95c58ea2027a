"""
Field name sanitization.

Turns a characteristics key such as "shRNA expression" into a column name
that is safe to use as an identifier ("shrna_expression").
"""

import keyword
import re

# Underscore is folded into the runs so that "a _ b" collapses to "a_b"
_NON_ALNUM_RUN = re.compile(r"[\W_]+")

SEPARATOR = "_"
ESCAPE_PREFIX = "x"


def make_identifier(name: str) -> str:
    """
    Build a safe, lowercase identifier from arbitrary text.

    Rules:
      - lowercase the text
      - every run of non-alphanumeric characters becomes a single "_"
      - empty results, or results starting with a digit, get an "x" prefix
      - Python keywords get a trailing "_"

    >>> make_identifier("shRNA expression")
    'shrna_expression'
    >>> make_identifier("2nd treatment")
    'x2nd_treatment'
    """
    identifier = _NON_ALNUM_RUN.sub(SEPARATOR, str(name).lower())
    if not identifier or identifier[0].isdigit():
        identifier = ESCAPE_PREFIX + identifier
    if keyword.iskeyword(identifier):
        identifier += SEPARATOR
    return identifier
