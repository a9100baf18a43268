"""Turn report filters into WHERE predicates on the composed query."""

from typing import Any, List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Query
from sqlalchemy.sql.elements import ColumnElement

from ..database.enumeration_repo import enumeration_value_of
from .composer import ComposedQuery
from .filters import FilterSpec, FilterState, ReportFilters
from .params import DonorReference

CLASSIFICATION_SLOTS = ("enum_1_id", "enum_2_id", "enum_3_id")


def enumeration_value_predicate(spec: FilterSpec, value_column: ColumnElement) -> Optional[ColumnElement]:
    """Predicate for a status/priority style filter, or None when unconstrained."""
    if spec.state == FilterState.MUST_BE_UNSET:
        return value_column.is_(None)
    if spec.state == FilterState.MUST_BE_SET:
        return value_column.is_not(None)
    if spec.state == FilterState.EQUALS:
        return value_column == spec.value
    return None


def classification_predicate(spec: FilterSpec, user_defined: Any) -> Optional[ColumnElement]:
    """Match when any of the classification slots resolves to the value."""
    if spec.state != FilterState.EQUALS:
        return None
    return or_(
        *[enumeration_value_of(getattr(user_defined, slot)) == spec.value for slot in CLASSIFICATION_SLOTS]
    )


def donor_predicate(donor: Optional[DonorReference], source_link: Any) -> Optional[ColumnElement]:
    """Restrict to accessions whose source-role link points at this agent."""
    if donor is None or not donor.is_resolved:
        return None
    return getattr(source_link, donor.kind.relationship_column) == donor.id


def date_range_predicate(filters: ReportFilters, accession: Any) -> ColumnElement:
    return accession.accession_date.between(filters.date_from, filters.date_to)


def assemble_predicates(composed: ComposedQuery, filters: ReportFilters) -> List[ColumnElement]:
    """Active predicates in a fixed order: status, priority, classification, donor, date."""
    candidates = [
        enumeration_value_predicate(filters.processing_status, composed.processing_status_value),
        enumeration_value_predicate(filters.processing_priority, composed.processing_priority_value),
        classification_predicate(filters.classification, composed.user_defined),
        donor_predicate(filters.donor, composed.source_link),
        date_range_predicate(filters, composed.accession),
    ]
    return [predicate for predicate in candidates if predicate is not None]


def apply_predicates(composed: ComposedQuery, filters: ReportFilters) -> Query:
    """Narrow the composed query by every active predicate (AND)."""
    query = composed.query
    for predicate in assemble_predicates(composed, filters):
        query = query.filter(predicate)
    return query
