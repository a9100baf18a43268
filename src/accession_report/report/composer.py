"""Compose the base accessions query: joins, repository scope, derived columns."""

from dataclasses import dataclass
from typing import Any, Optional, Sequence

from sqlalchemy import and_
from sqlalchemy.orm import Query, Session, aliased
from sqlalchemy.sql.elements import ColumnElement

from ..database.enumeration_repo import get_enumeration_value_id
from ..database.schema import (
    Accession,
    CollectionManagement,
    Enumeration,
    EnumerationValue,
    LinkedAgentsRlshp,
    UserDefined,
)
from ..errors import ReportConfigurationError
from .enrichers import AGENT_ROLE_ENUMERATION, SOURCE_ROLE, FieldEnricher, subquery_enrichers

PROCESSING_STATUS_ENUMERATION = "collection_management_processing_status"
PROCESSING_PRIORITY_ENUMERATION = "collection_management_processing_priority"


@dataclass(frozen=True)
class ComposedQuery:
    """Base query plus the joined entities predicates are written against."""
    query: Query
    accession: Any
    source_link: Any
    user_defined: Any
    processing_status_value: ColumnElement
    processing_priority_value: ColumnElement


def get_source_role_id(session: Session) -> int:
    """
    Look up the enumeration value id of the donor ("source") agent role.

    Raises:
        ReportConfigurationError: If the role is not defined in the store
    """
    role_id = get_enumeration_value_id(session, AGENT_ROLE_ENUMERATION, SOURCE_ROLE)
    if role_id is None:
        raise ReportConfigurationError(
            f"Enumeration '{AGENT_ROLE_ENUMERATION}' has no '{SOURCE_ROLE}' value; "
            "cannot join accessions to their donors"
        )
    return role_id


def compose_accessions_query(
    session: Session,
    repo_id: int,
    enrichers: Optional[Sequence[FieldEnricher]] = None,
) -> ComposedQuery:
    """
    Build the unfiltered, repository-scoped accessions query.

    Collection management and user-defined fields are one row per accession
    at most; only the source agent join fans out, and grouping collapses the
    result back to one row per accession, ordered by accession id.

    Args:
        session: SQLAlchemy session
        repo_id: Repository scope
        enrichers: Derived columns to attach (defaults to portable sub-selects)

    Returns:
        ComposedQuery exposing accession_id, accession_date, identifier,
        content_description and one column per enricher

    Raises:
        ReportConfigurationError: If the source agent role is missing
    """
    if enrichers is None:
        enrichers = subquery_enrichers()
    source_role_id = get_source_role_id(session)

    enum_processing_status = aliased(Enumeration, name="enum_processing_status")
    enum_processing_priority = aliased(Enumeration, name="enum_processing_priority")
    enumvals_processing_status = aliased(EnumerationValue, name="enumvals_processing_status")
    enumvals_processing_priority = aliased(EnumerationValue, name="enumvals_processing_priority")

    query = (
        session.query(
            Accession.id.label("accession_id"),
            Accession.accession_date.label("accession_date"),
            Accession.identifier.label("identifier"),
            Accession.content_description.label("content_description"),
            *[enricher.column(Accession.id) for enricher in enrichers],
        )
        .select_from(Accession)
        .outerjoin(
            LinkedAgentsRlshp,
            and_(
                LinkedAgentsRlshp.accession_id == Accession.id,
                LinkedAgentsRlshp.role_id == source_role_id,
            ),
        )
        .outerjoin(CollectionManagement, CollectionManagement.accession_id == Accession.id)
        .join(enum_processing_status, enum_processing_status.name == PROCESSING_STATUS_ENUMERATION)
        .join(enum_processing_priority, enum_processing_priority.name == PROCESSING_PRIORITY_ENUMERATION)
        .outerjoin(
            enumvals_processing_status,
            and_(
                enumvals_processing_status.enumeration_id == enum_processing_status.id,
                CollectionManagement.processing_status_id == enumvals_processing_status.id,
            ),
        )
        .outerjoin(
            enumvals_processing_priority,
            and_(
                enumvals_processing_priority.enumeration_id == enum_processing_priority.id,
                CollectionManagement.processing_priority_id == enumvals_processing_priority.id,
            ),
        )
        .outerjoin(UserDefined, UserDefined.accession_id == Accession.id)
        .filter(Accession.repo_id == repo_id)
        .group_by(Accession.id)
        .order_by(Accession.id)
    )

    return ComposedQuery(
        query=query,
        accession=Accession,
        source_link=LinkedAgentsRlshp,
        user_defined=UserDefined,
        processing_status_value=enumvals_processing_status.value,
        processing_priority_value=enumvals_processing_priority.value,
    )
