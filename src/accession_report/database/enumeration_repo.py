"""Lookups against controlled-vocabulary enumerations."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, aliased
from sqlalchemy.sql.elements import ColumnElement

from ..database.schema import Enumeration, EnumerationValue


def get_enumeration_value_id(
    session: Session,
    enumeration_name: str,
    value: str,
) -> Optional[int]:
    """
    Find the id of a value within a named enumeration domain.

    Args:
        session: SQLAlchemy session
        enumeration_name: Domain name (e.g. "linked_agent_role")
        value: Value within the domain (e.g. "source")

    Returns:
        EnumerationValue id, or None if the domain or value is missing
    """
    row = (
        session.query(EnumerationValue.id)
        .join(Enumeration, Enumeration.id == EnumerationValue.enumeration_id)
        .filter(Enumeration.name == enumeration_name, EnumerationValue.value == value)
        .order_by(EnumerationValue.id)
        .first()
    )
    return row[0] if row else None


def enumeration_value_of(enum_id: ColumnElement) -> ColumnElement:
    """Correlated sub-select resolving an enumeration value id column to its value."""
    value_row = aliased(EnumerationValue)
    return (
        select(value_row.value)
        .where(value_row.id == enum_id)
        .scalar_subquery()
    )
