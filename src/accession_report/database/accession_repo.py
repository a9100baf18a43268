"""Run the composed accessions query."""

from typing import List, Optional, Sequence

from sqlalchemy.engine import Row
from sqlalchemy.orm import Session

from ..report.composer import compose_accessions_query
from ..report.enrichers import FieldEnricher
from ..report.filters import ReportFilters
from ..report.predicates import apply_predicates
from ..utils.logging import get_logger

logger = get_logger(__name__)


def fetch_accession_rows(
    session: Session,
    filters: ReportFilters,
    enrichers: Optional[Sequence[FieldEnricher]] = None,
) -> List[Row]:
    """
    Compose, filter and execute the accessions query.

    Args:
        session: SQLAlchemy session (only read from)
        filters: Resolved filter dimensions, including the repository scope
        enrichers: Derived columns to attach (defaults to portable sub-selects)

    Returns:
        Result rows, one per accession, ordered by accession id
    """
    composed = compose_accessions_query(session, filters.repo_id, enrichers)
    query = apply_predicates(composed, filters)
    logger.debug("Running accessions query with filters %s", filters.describe())

    rows = query.all()
    logger.info("Accessions query returned %d rows for repository %s", len(rows), filters.repo_id)
    return rows
