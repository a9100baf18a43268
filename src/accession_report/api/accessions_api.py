"""Accessions API: canonical entry point for the accessions report."""

from datetime import datetime
from typing import Any, List, Mapping, Optional, Sequence

from sqlalchemy.orm import Session

from ..database.accession_repo import fetch_accession_rows
from ..report.enrichers import FieldEnricher
from ..report.filters import ReportFilters, build_filters
from ..report.params import resolve_params
from ..report.rows import AccessionReportRow, decode_row


def resolve_report_filters(
    raw_params: Mapping[str, Any] | None,
    repo_id: int,
    now: Optional[datetime] = None,
) -> ReportFilters:
    """Resolve raw parameters into filters; raises before any query runs."""
    return build_filters(resolve_params(raw_params, repo_id, now=now))


def generate_accessions_report(
    session: Session,
    raw_params: Mapping[str, Any] | None,
    repo_id: int,
    enrichers: Optional[Sequence[FieldEnricher]] = None,
    now: Optional[datetime] = None,
) -> List[AccessionReportRow]:
    """
    Generate the accessions report rows.

    Args:
        session: SQLAlchemy session
        raw_params: from, to, processing_status, processing_priority,
            classification, donor ({"ref": ...}); all optional
        repo_id: Repository the report is scoped to
        enrichers: Derived column family (defaults to portable sub-selects)
        now: Upper bound when 'to' is absent (defaults to current local time)

    Returns:
        Report rows in accession id order

    Raises:
        ReportValidationError: If a parameter cannot be interpreted
        ReportConfigurationError: If the store lacks the donor role
    """
    filters = resolve_report_filters(raw_params, repo_id, now=now)
    return [decode_row(row) for row in fetch_accession_rows(session, filters, enrichers)]
