"""Decode raw query rows into report rows."""

import json
from datetime import datetime
from typing import Any, Mapping, Optional

from pydantic import BaseModel

from ..utils.logging import get_logger

logger = get_logger(__name__)

IDENTIFIER_SEPARATOR = "-"


class AccessionReportRow(BaseModel):
    """One report line; field order matches the report headers."""
    identifier: str = ""
    donor_name: Optional[str] = None
    donor_number: Optional[str] = None
    accession_date: Optional[datetime] = None
    content_description: Optional[str] = None
    processing_status: Optional[str] = None
    processing_priority: Optional[str] = None
    classifications: Optional[str] = None
    extent_number_type: Optional[str] = None
    location: Optional[str] = None


def decode_identifier(raw: Optional[str]) -> str:
    """
    Join the stored identifier parts for display.

    The store keeps identifiers as a JSON array (e.g. '["2020","001",null,null]').
    Parts are trimmed; null, empty and whitespace-only parts are dropped and
    the rest joined with '-'.

    Returns:
        Display identifier, '' when absent, or the raw text if it is not a JSON array
    """
    if not raw:
        return ""
    try:
        parts = json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        logger.warning("Identifier is not a JSON array, showing as stored: %r", raw)
        return str(raw)
    if not isinstance(parts, list):
        logger.warning("Identifier is not a JSON array, showing as stored: %r", raw)
        return str(raw)
    texts = (str(part).strip() for part in parts if part is not None)
    return IDENTIFIER_SEPARATOR.join(text for text in texts if text)


def decode_row(row: Any) -> AccessionReportRow:
    """Build a report row from a query result row (Row or mapping)."""
    values: Mapping[str, Any] = row._mapping if hasattr(row, "_mapping") else row
    fields = {
        name: values.get(name)
        for name in AccessionReportRow.model_fields
        if name != "identifier"
    }
    return AccessionReportRow(identifier=decode_identifier(values.get("identifier")), **fields)
