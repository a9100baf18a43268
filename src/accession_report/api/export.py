"""Export API: the report as a JSON payload for external consumption."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from sqlalchemy.orm import Session

from ..database.accession_repo import fetch_accession_rows
from ..report.definition import HEADERS, REPORT_CODE, REPORT_TITLE
from ..report.enrichers import FieldEnricher
from ..report.rows import decode_row
from ..utils.time import utc_now_z
from .accessions_api import resolve_report_filters


def export_accessions(
    session: Session,
    raw_params: Mapping[str, Any] | None,
    repo_id: int,
    enrichers: Optional[Sequence[FieldEnricher]] = None,
    out: Path | None = None,
    now: Optional[datetime] = None,
) -> str:
    """
    Export the accessions report as JSON.

    Args:
        session: SQLAlchemy session
        raw_params: Report parameters (see generate_accessions_report)
        repo_id: Repository the report is scoped to
        enrichers: Derived column family
        out: Output file path (if None, returns as string)
        now: Upper bound when 'to' is absent

    Returns:
        Exported data as string (if out is None) or a confirmation message
    """
    filters = resolve_report_filters(raw_params, repo_id, now=now)
    rows = [decode_row(row) for row in fetch_accession_rows(session, filters, enrichers)]

    export_data = {
        "export_schema_version": "1",
        "exported_at_utc": utc_now_z(),
        "report": {
            "code": REPORT_CODE,
            "title": REPORT_TITLE,
            "headers": list(HEADERS),
            "params": filters.describe(),
        },
        "data": [row.model_dump(mode="json") for row in rows],
    }
    output = json.dumps(export_data, indent=2)
    if out:
        out.write_text(output, encoding="utf-8")
        return f"Exported to {out}"
    return output
