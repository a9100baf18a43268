"""Derived report columns computed per accession id.

Each enricher turns the accession id column into a labelled column
expression, so the composer can attach them uniformly. Two families exist:
portable correlated sub-selects over the mapped schema, and calls to stored
functions that the production store provides.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional

from sqlalchemy import and_, func, literal, or_, select
from sqlalchemy.orm import aliased
from sqlalchemy.sql.elements import ColumnElement

from ..database.enumeration_repo import enumeration_value_of
from ..database.schema import (
    CollectionManagement,
    DonorDetail,
    Enumeration,
    EnumerationValue,
    Extent,
    LinkedAgentsRlshp,
    NameCorporateEntity,
    NameFamily,
    NamePerson,
    UserDefined,
)

AGENT_ROLE_ENUMERATION = "linked_agent_role"
SOURCE_ROLE = "source"

# Derived columns in the order the composer selects them
DERIVED_FIELDS = (
    "location",
    "processing_status",
    "processing_priority",
    "classifications",
    "extent_number_type",
    "donor_name",
    "donor_number",
)

# Stored functions shipped with the production store, one per derived column
DEFAULT_STORED_FUNCTIONS: Dict[str, str] = {
    "location": "GetAccessionLocationUserDefined",
    "processing_status": "GetAccessionProcessingStatus",
    "processing_priority": "GetAccessionProcessingPriority",
    "classifications": "GetAccessionClassificationsUserDefined",
    "extent_number_type": "GetAccessionExtentNumberType",
    "donor_name": "GetAccessionSourceName",
    "donor_number": "GetAccessionDonorNumbers",
}


@dataclass(frozen=True)
class FieldEnricher:
    """A named derived value, built from the accession id column."""
    name: str
    build: Callable[[ColumnElement], ColumnElement]

    def column(self, accession_id: ColumnElement) -> ColumnElement:
        return self.build(accession_id).label(self.name)


def _location(accession_id: ColumnElement) -> ColumnElement:
    ud = aliased(UserDefined)
    return (
        select(ud.text_1)
        .where(ud.accession_id == accession_id)
        .order_by(ud.id)
        .limit(1)
        .scalar_subquery()
    )


def _collection_management_value(reference: str) -> Callable[[ColumnElement], ColumnElement]:
    def build(accession_id: ColumnElement) -> ColumnElement:
        cm = aliased(CollectionManagement)
        return (
            select(enumeration_value_of(getattr(cm, reference)))
            .where(cm.accession_id == accession_id)
            .order_by(cm.id)
            .limit(1)
            .scalar_subquery()
        )
    return build


def _classifications(accession_id: ColumnElement) -> ColumnElement:
    ud = aliased(UserDefined)
    value = aliased(EnumerationValue)
    return (
        select(func.aggregate_strings(value.value, ", "))
        .select_from(ud)
        .join(value, value.id.in_([ud.enum_1_id, ud.enum_2_id, ud.enum_3_id]))
        .where(ud.accession_id == accession_id)
        .scalar_subquery()
    )


def _extent_number_type(accession_id: ColumnElement) -> ColumnElement:
    ext = aliased(Extent)
    extent_type = aliased(EnumerationValue)
    label = ext.number + literal(" ") + func.coalesce(extent_type.value, "")
    return (
        select(func.aggregate_strings(func.trim(label), "; "))
        .select_from(ext)
        .outerjoin(extent_type, extent_type.id == ext.extent_type_id)
        .where(ext.accession_id == accession_id)
        .scalar_subquery()
    )


def _source_relationships(accession_id: ColumnElement, column: ColumnElement):
    """Select over the accession's source-role agent links; returns (select, link alias)."""
    link = aliased(LinkedAgentsRlshp)
    role = aliased(EnumerationValue)
    domain = aliased(Enumeration)
    stmt = (
        select(column)
        .select_from(link)
        .join(role, role.id == link.role_id)
        .join(domain, and_(domain.id == role.enumeration_id, domain.name == AGENT_ROLE_ENUMERATION))
        .where(link.accession_id == accession_id, role.value == SOURCE_ROLE)
    )
    return stmt, link


def _donor_name(accession_id: ColumnElement) -> ColumnElement:
    person = aliased(NamePerson)
    family = aliased(NameFamily)
    corporate = aliased(NameCorporateEntity)
    name = func.coalesce(person.sort_name, family.sort_name, corporate.sort_name)

    stmt, link = _source_relationships(accession_id, func.aggregate_strings(name, "; "))
    return (
        stmt.outerjoin(person, and_(person.agent_person_id == link.agent_person_id, person.is_display_name == 1))
        .outerjoin(family, and_(family.agent_family_id == link.agent_family_id, family.is_display_name == 1))
        .outerjoin(
            corporate,
            and_(
                corporate.agent_corporate_entity_id == link.agent_corporate_entity_id,
                corporate.is_display_name == 1,
            ),
        )
        .scalar_subquery()
    )


def _donor_number(accession_id: ColumnElement) -> ColumnElement:
    detail = aliased(DonorDetail)
    stmt, link = _source_relationships(accession_id, func.aggregate_strings(detail.number, "; "))
    return stmt.join(
        detail,
        or_(
            detail.agent_person_id == link.agent_person_id,
            detail.agent_family_id == link.agent_family_id,
            detail.agent_corporate_entity_id == link.agent_corporate_entity_id,
        ),
    ).scalar_subquery()


def subquery_enrichers() -> List[FieldEnricher]:
    """Derived columns as portable correlated sub-selects."""
    builders = {
        "location": _location,
        "processing_status": _collection_management_value("processing_status_id"),
        "processing_priority": _collection_management_value("processing_priority_id"),
        "classifications": _classifications,
        "extent_number_type": _extent_number_type,
        "donor_name": _donor_name,
        "donor_number": _donor_number,
    }
    return [FieldEnricher(name, builders[name]) for name in DERIVED_FIELDS]


def stored_function_enrichers(function_names: Optional[Mapping[str, str]] = None) -> List[FieldEnricher]:
    """Derived columns as calls to stored database functions taking the accession id."""
    names = {**DEFAULT_STORED_FUNCTIONS, **(function_names or {})}

    def call(function_name: str) -> Callable[[ColumnElement], ColumnElement]:
        return lambda accession_id: getattr(func, function_name)(accession_id)

    return [FieldEnricher(name, call(names[name])) for name in DERIVED_FIELDS]


def build_enrichers(settings: Mapping) -> List[FieldEnricher]:
    """Choose the enricher family named by the report settings."""
    mode = settings.get("derived_fields", "subquery")
    if mode == "stored_function":
        return stored_function_enrichers(settings.get("stored_functions"))
    return subquery_enrichers()
