"""ORM mapping of the archival store tables the accessions report reads.

Only the columns the report touches are mapped; the store owns the schema.
"""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class Enumeration(Base):
    __tablename__ = "enumeration"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False, unique=True)  # e.g. linked_agent_role


class EnumerationValue(Base):
    __tablename__ = "enumeration_value"

    id = Column(Integer, primary_key=True)
    enumeration_id = Column(Integer, ForeignKey("enumeration.id"), nullable=False, index=True)
    value = Column(String, nullable=False)


class Accession(Base):
    __tablename__ = "accession"

    id = Column(Integer, primary_key=True)
    repo_id = Column(Integer, nullable=False, index=True)
    accession_date = Column(DateTime, nullable=True)
    content_description = Column(Text, nullable=True)
    identifier = Column(Text, nullable=True)  # JSON array of up to four parts, nulls allowed


class LinkedAgentsRlshp(Base):
    """Accession-to-agent link; exactly one agent_*_id column is set per row."""
    __tablename__ = "linked_agents_rlshp"

    id = Column(Integer, primary_key=True)
    accession_id = Column(Integer, ForeignKey("accession.id"), nullable=True, index=True)
    agent_person_id = Column(Integer, nullable=True)
    agent_family_id = Column(Integer, nullable=True)
    agent_corporate_entity_id = Column(Integer, nullable=True)
    role_id = Column(Integer, ForeignKey("enumeration_value.id"), nullable=False)


class CollectionManagement(Base):
    __tablename__ = "collection_management"

    id = Column(Integer, primary_key=True)
    accession_id = Column(Integer, ForeignKey("accession.id"), nullable=True, unique=True)  # one row per accession
    processing_status_id = Column(Integer, ForeignKey("enumeration_value.id"), nullable=True)
    processing_priority_id = Column(Integer, ForeignKey("enumeration_value.id"), nullable=True)


class UserDefined(Base):
    __tablename__ = "user_defined"

    id = Column(Integer, primary_key=True)
    accession_id = Column(Integer, ForeignKey("accession.id"), nullable=True, unique=True)  # one row per accession
    # Classification slots
    enum_1_id = Column(Integer, ForeignKey("enumeration_value.id"), nullable=True)
    enum_2_id = Column(Integer, ForeignKey("enumeration_value.id"), nullable=True)
    enum_3_id = Column(Integer, ForeignKey("enumeration_value.id"), nullable=True)
    text_1 = Column(Text, nullable=True)  # shelf location note


class Extent(Base):
    __tablename__ = "extent"

    id = Column(Integer, primary_key=True)
    accession_id = Column(Integer, ForeignKey("accession.id"), nullable=True, index=True)
    number = Column(String, nullable=False)  # free text, e.g. "2.5"
    extent_type_id = Column(Integer, ForeignKey("enumeration_value.id"), nullable=True)


class NamePerson(Base):
    __tablename__ = "name_person"

    id = Column(Integer, primary_key=True)
    agent_person_id = Column(Integer, nullable=False, index=True)
    sort_name = Column(String, nullable=False)
    is_display_name = Column(Integer, nullable=True)  # 1 or null


class NameFamily(Base):
    __tablename__ = "name_family"

    id = Column(Integer, primary_key=True)
    agent_family_id = Column(Integer, nullable=False, index=True)
    sort_name = Column(String, nullable=False)
    is_display_name = Column(Integer, nullable=True)


class NameCorporateEntity(Base):
    __tablename__ = "name_corporate_entity"

    id = Column(Integer, primary_key=True)
    agent_corporate_entity_id = Column(Integer, nullable=False, index=True)
    sort_name = Column(String, nullable=False)
    is_display_name = Column(Integer, nullable=True)


class DonorDetail(Base):
    """Donor numbers assigned to an agent."""
    __tablename__ = "donor_detail"

    id = Column(Integer, primary_key=True)
    agent_person_id = Column(Integer, nullable=True, index=True)
    agent_family_id = Column(Integer, nullable=True, index=True)
    agent_corporate_entity_id = Column(Integer, nullable=True, index=True)
    number = Column(String, nullable=False)

