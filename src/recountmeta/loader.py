import pathlib
import typing

import pandas as pd

# File extension → column separator for delimited text
SEPARATORS = {
    ".tsv": "\t",
    ".txt": "\t",
    ".csv": ",",
}
EXCEL_SUFFIXES = {".xlsx"}


def load_metadata_table(path: str, sep: typing.Optional[str] = None) -> pd.DataFrame:
    """
    Read a sample metadata table into a DataFrame:
      - first row = header
      - every cell read as text, empty cells stay missing
      - normalize all headers to snake_case lowercase
    Excel workbooks are read from their first sheet.
    """
    suffix = pathlib.Path(path).suffix.lower()

    if suffix in EXCEL_SUFFIXES:
        df = pd.read_excel(path, sheet_name=0, header=0, dtype=str, engine="openpyxl")
    elif sep is not None or suffix in SEPARATORS:
        df = pd.read_csv(path, sep=sep or SEPARATORS[suffix], header=0, dtype=str)
    else:
        raise ValueError(f"Unsupported metadata file type {suffix!r} for {path!r}")

    # CLEAN & NORMALIZE headers:
    df.columns = (
        df.columns.astype(str)
        .str.strip()
        .str.replace(r"\s+", "_", regex=True)  # spaces → underscore
        .str.lower()
    )
    return df
