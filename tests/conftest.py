"""Pytest configuration and fixtures."""

import json
import logging
from datetime import datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from accession_report.database.schema import (
    Accession,
    Base,
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

REPO_ID = 2
OTHER_REPO_ID = 3

# Enumeration value ids used throughout the tests
CREATOR_ROLE = 10
SOURCE_ROLE = 11
STATUS_ACTIVE = 20
STATUS_COMPLETED = 21
PRIORITY_HIGH = 30
PRIORITY_LOW = 31
CLASS_MAPS = 40
CLASS_PHOTOGRAPHS = 41
CLASS_RECORDS = 42
EXTENT_LINEAR_FEET = 50
EXTENT_BOXES = 51


def _identifier(*parts):
    return json.dumps(list(parts))


def seed_enumerations(session) -> None:
    """Enumeration domains without any accessions."""
    session.add_all([
        Enumeration(id=1, name="linked_agent_role"),
        Enumeration(id=2, name="collection_management_processing_status"),
        Enumeration(id=3, name="collection_management_processing_priority"),
        Enumeration(id=4, name="user_defined_enum_1"),
        Enumeration(id=5, name="extent_extent_type"),
        EnumerationValue(id=CREATOR_ROLE, enumeration_id=1, value="creator"),
        EnumerationValue(id=SOURCE_ROLE, enumeration_id=1, value="source"),
        EnumerationValue(id=STATUS_ACTIVE, enumeration_id=2, value="Active"),
        EnumerationValue(id=STATUS_COMPLETED, enumeration_id=2, value="Completed"),
        EnumerationValue(id=PRIORITY_HIGH, enumeration_id=3, value="high"),
        EnumerationValue(id=PRIORITY_LOW, enumeration_id=3, value="low"),
        EnumerationValue(id=CLASS_MAPS, enumeration_id=4, value="Maps"),
        EnumerationValue(id=CLASS_PHOTOGRAPHS, enumeration_id=4, value="Photographs"),
        EnumerationValue(id=CLASS_RECORDS, enumeration_id=4, value="Records"),
        EnumerationValue(id=EXTENT_LINEAR_FEET, enumeration_id=5, value="linear feet"),
        EnumerationValue(id=EXTENT_BOXES, enumeration_id=5, value="boxes"),
    ])
    session.flush()


def seed_archive(session) -> None:
    """
    Accessions used by the report tests.

    1  2020-01-15  Active/high, Maps in slot 1, source person 5, creator person 6
    2  2021-06-01  Completed/no priority, Photographs + Maps (slot 2), source family 7
    3  1900-05-05  no collection management, sources corporate 9 and person 5
    4  2022-03-03  other repository, Active
    5  2019-12-31  management record without status, low priority, Records in slot 3
    """
    seed_enumerations(session)
    session.add_all([
        Accession(
            id=1,
            repo_id=REPO_ID,
            accession_date=datetime(2020, 1, 15),
            identifier=_identifier("2020", "001", None, None),
            content_description="Correspondence",
        ),
        Accession(
            id=2,
            repo_id=REPO_ID,
            accession_date=datetime(2021, 6, 1),
            identifier=_identifier("2021", "", "3"),
            content_description="Photographs of campus",
        ),
        Accession(
            id=3,
            repo_id=REPO_ID,
            accession_date=datetime(1900, 5, 5),
            identifier=_identifier("1900", "007"),
            content_description="Ledgers",
        ),
        Accession(
            id=4,
            repo_id=OTHER_REPO_ID,
            accession_date=datetime(2022, 3, 3),
            identifier=_identifier("2022", "010"),
            content_description="Elsewhere",
        ),
        Accession(
            id=5,
            repo_id=REPO_ID,
            accession_date=datetime(2019, 12, 31, 23, 59, 59),
            identifier=None,
            content_description="Minutes",
        ),
    ])
    session.flush()

    session.add_all([
        CollectionManagement(accession_id=1, processing_status_id=STATUS_ACTIVE, processing_priority_id=PRIORITY_HIGH),
        CollectionManagement(accession_id=2, processing_status_id=STATUS_COMPLETED),
        CollectionManagement(accession_id=4, processing_status_id=STATUS_ACTIVE),
        CollectionManagement(accession_id=5, processing_priority_id=PRIORITY_LOW),
        UserDefined(accession_id=1, enum_1_id=CLASS_MAPS, text_1="Shelf A"),
        UserDefined(accession_id=2, enum_1_id=CLASS_PHOTOGRAPHS, enum_2_id=CLASS_MAPS),
        UserDefined(accession_id=5, enum_3_id=CLASS_RECORDS, text_1="Vault"),
        Extent(accession_id=1, number="2.5", extent_type_id=EXTENT_LINEAR_FEET),
        Extent(accession_id=3, number="4", extent_type_id=EXTENT_BOXES),
        LinkedAgentsRlshp(accession_id=1, agent_person_id=5, role_id=SOURCE_ROLE),
        LinkedAgentsRlshp(accession_id=1, agent_person_id=6, role_id=CREATOR_ROLE),
        LinkedAgentsRlshp(accession_id=2, agent_family_id=7, role_id=SOURCE_ROLE),
        LinkedAgentsRlshp(accession_id=3, agent_corporate_entity_id=9, role_id=SOURCE_ROLE),
        LinkedAgentsRlshp(accession_id=3, agent_person_id=5, role_id=SOURCE_ROLE),
        NamePerson(agent_person_id=5, sort_name="Doe, Jane", is_display_name=1),
        NamePerson(agent_person_id=5, sort_name="Doe, J.", is_display_name=None),
        NamePerson(agent_person_id=6, sort_name="Roe, Richard", is_display_name=1),
        NameFamily(agent_family_id=7, sort_name="Smith family", is_display_name=1),
        NameCorporateEntity(agent_corporate_entity_id=9, sort_name="Acme Corp", is_display_name=1),
        DonorDetail(agent_person_id=5, number="D-100"),
        DonorDetail(agent_family_id=7, number="D-200"),
    ])
    session.flush()


@pytest.fixture
def session():
    """Create a temporary in-memory database session for testing."""
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)

    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def archive(session):
    """In-memory session holding the seeded accessions."""
    seed_archive(session)
    return session


@pytest.fixture
def archive_db_path(tmp_path):
    """SQLite file with the seeded accessions, for CLI tests."""
    db_path = tmp_path / "archive.db"
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)
    with sessionmaker(bind=engine)() as seed_session:
        seed_archive(seed_session)
        seed_session.commit()
    engine.dispose()
    return db_path


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Put the package root logger back the way the test found it."""
    root = logging.getLogger("accession_report")
    level, handlers = root.level, list(root.handlers)
    yield
    root.setLevel(level)
    root.handlers[:] = handlers
