"""
recountmeta: structure free-text GEO sample characteristics into columns.
"""

from .characteristics import (
    CharacteristicsParser,
    DefaultCharacteristicsParser,
    InputValidationError,
    add_characteristics,
    combine_rows,
    parse_characteristics,
)
from .expressions import MalformedExpressionError, decode_characteristics
from .identifiers import make_identifier

__all__ = [
    "CharacteristicsParser",
    "DefaultCharacteristicsParser",
    "InputValidationError",
    "MalformedExpressionError",
    "add_characteristics",
    "combine_rows",
    "decode_characteristics",
    "make_identifier",
    "parse_characteristics",
]
