"""
Structure GEO sample characteristics into columns.

Each sample carries a list of free-text characteristics, conventionally
formatted as "key: value". The parser turns every sample into one row whose
field names are the sanitized keys. Samples with any string lacking the
": " delimiter are kept whole in a single "characteristics" field.
"""

import abc
import logging
import typing

import pandas as pd
from stairval.notepad import Notepad

from .expressions import decode_characteristics
from .identifiers import make_identifier

logger = logging.getLogger(__name__)

CHARACTERISTICS_COLUMN = "characteristics"
KEY_VALUE_DELIMITER = ": "
UNSTRUCTURED_JOINER = ", "
# suffix for derived columns that clash with columns already in the table
COLLISION_SUFFIX = "_characteristics"

SampleCharacteristics = typing.Sequence[str]
ParsedRow = dict[str, str]


class InputValidationError(ValueError):
    """Raised when the input table lacks the characteristics column."""


class CharacteristicsParser(metaclass=abc.ABCMeta):
    @abc.abstractmethod
    def parse(
            self, table: typing.Any, notepad: typing.Optional[Notepad] = None
    ) -> list[ParsedRow]:
        # one parsed row per input sample, in input order
        raise NotImplementedError


class DefaultCharacteristicsParser(CharacteristicsParser):
    def __init__(self, delimiter: typing.Optional[str] = None):
        """
        - None: text cells are decoded as list literals, e.g. c("a: 1", "b: 2")
        - str : text cells are plain text split on this delimiter
        """
        self.delimiter = delimiter

    def parse(
            self, table: typing.Any, notepad: typing.Optional[Notepad] = None
    ) -> list[ParsedRow]:
        """
        Process:
        1) check the characteristics column exists
        2) decode every sample's cell into a list of strings
        3) split each sample into a row of field name → value

        Decoding happens for all samples before any row is built, so a
        malformed cell aborts the call without a partial result.
        """
        frame = table if isinstance(table, pd.DataFrame) else pd.DataFrame(table)
        if CHARACTERISTICS_COLUMN not in frame.columns:
            raise InputValidationError(
                f"Missing required column {CHARACTERISTICS_COLUMN!r}; "
                f"found {[str(c) for c in frame.columns]}"
            )

        samples = [
            (label, self._normalize_cell(label, cell, notepad))
            for label, cell in frame[CHARACTERISTICS_COLUMN].items()
        ]
        rows = [self.parse_sample(strings, label, notepad) for label, strings in samples]
        logger.info("Parsed characteristics for %d samples", len(rows))
        return rows

    def _normalize_cell(
            self, label: typing.Any, cell: typing.Any, notepad: typing.Optional[Notepad]
    ) -> list[str]:
        if isinstance(cell, str):
            return decode_characteristics(cell, delimiter=self.delimiter, sample=label)
        if pd.api.types.is_list_like(cell):
            return [str(item) for item in cell]
        if cell is None or pd.isna(cell):
            if notepad is not None:
                notepad.add_warning(f"Sample {label!r}: no characteristics")
            return []
        # scalars such as numbers are a single unstructured string
        return [str(cell)]

    @staticmethod
    def parse_sample(
            strings: SampleCharacteristics,
            sample: typing.Any = None,
            notepad: typing.Optional[Notepad] = None,
    ) -> ParsedRow:
        """
        Parse one sample's characteristics into a row.

        If any string lacks ": ", the whole sample is unstructured and the row is
        {"characteristics": <all strings joined by ", ">}. Otherwise every string
        is split on its first ": "; keys become identifiers and repeated keys
        keep their last value.
        """
        if not all(KEY_VALUE_DELIMITER in entry for entry in strings):
            logger.debug("Sample %r: unstructured characteristics", sample)
            return {CHARACTERISTICS_COLUMN: UNSTRUCTURED_JOINER.join(strings)}

        row: ParsedRow = {}
        for entry in strings:
            key, value = entry.split(KEY_VALUE_DELIMITER, 1)
            field_name = make_identifier(key)
            if field_name in row and notepad is not None:
                notepad.add_warning(
                    f"Sample {sample!r}: field {field_name!r} repeated; "
                    f"keeping {value!r} over {row[field_name]!r}"
                )
            row[field_name] = value
        return row


def parse_characteristics(
        table: typing.Any,
        delimiter: typing.Optional[str] = None,
        notepad: typing.Optional[Notepad] = None,
) -> list[ParsedRow]:
    return DefaultCharacteristicsParser(delimiter).parse(table, notepad)


def combine_rows(
        rows: typing.Sequence[typing.Mapping[str, str]],
        index: typing.Optional[typing.Sequence] = None,
) -> pd.DataFrame:
    """
    Stack parsed rows into one sparse table.

    Columns are the union of all field names in first-seen order; a row that
    lacks a field gets a missing cell (None) there.
    """
    columns = list(dict.fromkeys(name for row in rows for name in row))
    if index is None:
        index = pd.RangeIndex(len(rows))
    data = {column: [row.get(column) for row in rows] for column in columns}
    return pd.DataFrame(data, index=index, columns=columns)


def add_characteristics(
        table: typing.Any,
        parser: typing.Optional[CharacteristicsParser] = None,
        notepad: typing.Optional[Notepad] = None,
) -> pd.DataFrame:
    """
    Return a copy of `table` with the parsed characteristics appended as columns.
    Derived names already used by `table` get the "_characteristics" suffix,
    repeated until the name is free.
    """
    frame = table if isinstance(table, pd.DataFrame) else pd.DataFrame(table)
    parser = parser or DefaultCharacteristicsParser()
    derived = combine_rows(parser.parse(frame, notepad), index=frame.index)
    taken = set(frame.columns) | set(derived.columns)
    result = frame.copy()
    for name in derived.columns:
        target = name
        if name in frame.columns:
            target = name + COLLISION_SUFFIX
            while target in taken:
                target += COLLISION_SUFFIX
            taken.add(target)
        result[target] = derived[name].to_numpy()
    return result
