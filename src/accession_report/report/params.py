"""Resolve raw report parameters into a typed bundle."""

import re
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Optional, Tuple

from pydantic import BaseModel

from ..errors import ReportValidationError
from ..utils.logging import get_logger
from ..utils.time import HISTORICAL_EPOCH, local_now, parse_report_timestamp, to_local_naive

logger = get_logger(__name__)


class DonorKind(str, Enum):
    PERSON = "person"
    FAMILY = "family"
    CORPORATE_ENTITY = "corporate_entity"

    @property
    def relationship_column(self) -> str:
        """Column of linked_agents_rlshp holding this kind of agent id."""
        return f"agent_{self.value}_id"


# Evaluated in order; first substring match wins
DONOR_KIND_RULES: Tuple[Tuple[str, DonorKind], ...] = (
    ("people", DonorKind.PERSON),
    ("families", DonorKind.FAMILY),
    ("corporate_entities", DonorKind.CORPORATE_ENTITY),
)

_AGENT_SEGMENTS = {kind: segment for segment, kind in DONOR_KIND_RULES}


class DonorReference(BaseModel):
    """Donor as given by its agent reference; kind/id are None when unrecognized."""
    ref: str
    kind: Optional[DonorKind] = None
    id: Optional[int] = None

    @property
    def is_resolved(self) -> bool:
        return self.kind is not None and self.id is not None


class ResolvedParams(BaseModel):
    repo_id: int
    date_from: datetime
    date_to: datetime
    processing_status: Optional[str] = None
    processing_priority: Optional[str] = None
    classification: Optional[str] = None
    donor: Optional[DonorReference] = None


def classify_donor_ref(ref: str) -> Optional[DonorKind]:
    """Infer the agent kind of a donor reference, or None if no rule matches."""
    for segment, kind in DONOR_KIND_RULES:
        if segment in ref:
            return kind
    return None


def resolve_agent_id(kind: DonorKind, ref: str) -> int:
    """
    Extract the numeric agent id from a reference like '/agents/people/5'.

    Raises:
        ReportValidationError: If the reference does not end in an id for this kind
    """
    match = re.search(rf"/agents/{_AGENT_SEGMENTS[kind]}/(\d+)/?$", ref)
    if not match:
        raise ReportValidationError(f"Cannot resolve {kind.value} id from donor reference {ref!r}")
    return int(match.group(1))


def _present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, Mapping):
        return bool(value)
    return True


def _optional_text(raw: Mapping[str, Any], key: str) -> Optional[str]:
    value = raw.get(key)
    if not _present(value):
        return None
    return str(value).strip()


def _resolve_timestamp(raw: Mapping[str, Any], key: str, default: datetime) -> datetime:
    value = raw.get(key)
    if not _present(value):
        return default
    if isinstance(value, datetime):
        return to_local_naive(value)
    try:
        return parse_report_timestamp(str(value).strip())
    except ValueError as e:
        raise ReportValidationError(f"Invalid '{key}' date: {value!r}") from e


def resolve_donor(value: Any) -> Optional[DonorReference]:
    """
    Decompose a donor parameter ({"ref": "/agents/people/5"} or a bare ref).

    Returns:
        DonorReference (kind/id unset when the reference shape is unknown),
        or None when no donor was given
    """
    if not _present(value):
        return None
    ref = value.get("ref") if isinstance(value, Mapping) else value
    if not _present(ref):
        return None
    ref = str(ref).strip()

    kind = classify_donor_ref(ref)
    if kind is None:
        logger.warning("Donor reference %r matches no agent kind; donor filter not applied", ref)
        return DonorReference(ref=ref)
    return DonorReference(ref=ref, kind=kind, id=resolve_agent_id(kind, ref))


def resolve_params(
    raw: Mapping[str, Any] | None,
    repo_id: int,
    now: Optional[datetime] = None,
) -> ResolvedParams:
    """
    Normalize raw report parameters.

    Args:
        raw: Parameter mapping; every key is optional
        repo_id: Repository the report is scoped to
        now: Upper bound used when 'to' is absent (defaults to current local time)

    Returns:
        ResolvedParams with date defaults applied and the donor decomposed

    Raises:
        ReportValidationError: If a date cannot be parsed or a donor id cannot be resolved
    """
    raw = raw or {}
    return ResolvedParams(
        repo_id=repo_id,
        date_from=_resolve_timestamp(raw, "from", HISTORICAL_EPOCH),
        date_to=_resolve_timestamp(raw, "to", now or local_now()),
        processing_status=_optional_text(raw, "processing_status"),
        processing_priority=_optional_text(raw, "processing_priority"),
        classification=_optional_text(raw, "classification"),
        donor=resolve_donor(raw.get("donor")),
    )
