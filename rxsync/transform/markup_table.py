"""Flattens MedicalDocument XML into CSV rows for tabular export."""

import csv
import re
import xml.etree.ElementTree as ET

import pandas as pd

from rxsync.logging.logger import Log

DOCUMENT_TAG = "MedicalDocument"
ORDER_ID_PREFIX = "Order ID:"

COLUMNS: tuple[str, ...] = (
    "Order ID",
    "Patient Name",
    "DOB",
    "Gender",
    "Doctor Name",
    "License",
    "Clinic",
    "Medicine",
    "Dosage",
    "Frequency",
    "Duration",
    "Height",
    "Weight",
    "Blood Type",
    "BP",
)

# Order ID is derived from Notes separately.
FIELD_PATHS: tuple[str, ...] = (
    "Patient/Name",
    "Patient/DOB",
    "Patient/Gender",
    "Doctor/Name",
    "Doctor/LicenseNumber",
    "Doctor/Clinic",
    "Prescription/Medicine/Name",
    "Prescription/Medicine/Dosage",
    "Prescription/Medicine/Frequency",
    "Prescription/Medicine/Duration",
    "Vitals/Height",
    "Vitals/Weight",
    "Vitals/BloodType",
    "Vitals/BloodPressure",
)

_SENTINELS = re.compile(r"MISSING|UNREADABLE")
_XML_DECLARATION = re.compile(r"<\?xml[^>]*\?>")


def to_rows(markup: str) -> list[list[str]]:
    """Extract one row of column values per MedicalDocument.

    Raises:
        xml.etree.ElementTree.ParseError: if the wrapped markup is not well-formed.
    """
    root = ET.fromstring(f"<Root>{_XML_DECLARATION.sub('', markup)}</Root>")
    return [
        _document_row(document)
        for document in root.iterfind(f".//{_any_namespace(DOCUMENT_TAG)}")
    ]


def to_frame(markup: str) -> pd.DataFrame:
    """Same rows as ``to_rows`` as a DataFrame with the export column names."""
    return pd.DataFrame(to_rows(markup), columns=list(COLUMNS), dtype=str)


def to_table(markup: str) -> str:
    """Convert concatenated MedicalDocument fragments into CSV text.

    The header row is emitted as-is, every data cell is quoted with inner
    quotes doubled. Returns an empty string when the markup cannot be parsed;
    callers report that as a failed conversion.
    """
    try:
        frame = to_frame(markup)
    except (ET.ParseError, ValueError) as exc:
        Log.error(f"CSV conversion failed: {exc}")
        return ""

    body = frame.to_csv(
        index=False,
        header=False,
        quoting=csv.QUOTE_ALL,
        lineterminator="\n",
    )
    lines = [",".join(COLUMNS)]
    if body:
        lines.append(body[:-1] if body.endswith("\n") else body)
    return "\n".join(lines)


def _document_row(document: ET.Element) -> list[str]:
    order_id = _field_text(document, "Notes").replace(ORDER_ID_PREFIX, "", 1).strip()
    return [order_id, *(_field_text(document, path) for path in FIELD_PATHS)]


def _field_text(document: ET.Element, path: str) -> str:
    element = document.find(f".//{_any_namespace(path)}")
    if element is None:
        return ""
    return _SENTINELS.sub("", "".join(element.itertext())).strip()


def _any_namespace(path: str) -> str:
    """Let each step of ``path`` match its tag with or without a namespace."""
    return "/".join(f"{{*}}{step}" for step in path.split("/"))
