from __future__ import annotations

import io
import logging
from typing import Any, BinaryIO, Sequence

import pandas as pd

logger = logging.getLogger(__name__)

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def write_workbook(rows: Sequence[Sequence[Any]], sheet_name: str) -> io.BytesIO:
    """Write header-first rows into an in-memory .xlsx with one named sheet."""

    header, *body = rows
    df = pd.DataFrame(list(body), columns=list(header))

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=sheet_name)
    output.seek(0)
    return output


def read_first_sheet(source: BinaryIO | str) -> list[dict]:
    """Read the first sheet as a list of dicts keyed by header.

    Empty cells come back as None rather than NaN.
    """

    df = pd.read_excel(source, sheet_name=0, dtype=object, engine="openpyxl")
    df.columns = [str(c).strip() for c in df.columns]
    df = df.astype(object).where(pd.notnull(df), None)
    logger.debug("Read %d rows from uploaded workbook", len(df))
    return df.to_dict(orient="records")
