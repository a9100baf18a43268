"""Tests for row decoding."""

from datetime import datetime

import pytest

from accession_report.report.definition import HEADERS
from accession_report.report.rows import AccessionReportRow, decode_identifier, decode_row


@pytest.mark.parametrize(
    "raw, expected",
    [
        ('["2020","001"]', "2020-001"),
        ('["2020","","3"]', "2020-3"),
        ('["2020"," ","3"]', "2020-3"),
        ('[" 2020 ","001\\t"]', "2020-001"),
        ('["2020","001",null,null]', "2020-001"),
        ("[]", ""),
        (None, ""),
        ("", ""),
    ],
)
def test_decode_identifier(raw, expected):
    """Test that identifier parts are trimmed and joined with '-' after dropping blank parts."""
    assert decode_identifier(raw) == expected


def test_malformed_identifier_is_shown_as_stored(caplog):
    """Test that text which is not a JSON array is passed through with a warning."""
    with caplog.at_level("WARNING", logger="accession_report"):
        assert decode_identifier("2020.001") == "2020.001"
        assert decode_identifier('{"part": 1}') == '{"part": 1}'
    assert "not a JSON array" in caplog.text


def test_row_fields_match_report_headers():
    """Test that the row model exposes exactly the report headers, in order."""
    assert tuple(AccessionReportRow.model_fields) == HEADERS


def test_decode_row_passes_other_columns_through():
    """Test that only the identifier is transformed."""
    row = {
        "accession_id": 1,
        "accession_date": datetime(2020, 1, 15),
        "identifier": '["2020","001",null,null]',
        "content_description": "Correspondence",
        "location": "Shelf A",
        "processing_status": "Active",
        "processing_priority": None,
        "classifications": "Maps",
        "extent_number_type": "2.5 linear feet",
        "donor_name": "Doe, Jane",
        "donor_number": "D-100",
    }

    decoded = decode_row(row)

    assert decoded.identifier == "2020-001"
    assert decoded.accession_date == datetime(2020, 1, 15)
    assert decoded.content_description == "Correspondence"
    assert decoded.processing_priority is None
    assert decoded.donor_name == "Doe, Jane"
    assert "accession_id" not in decoded.model_dump()
