"""Shared test fixtures."""

from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from src.api.combat import router as combat_router
from src.api.health import router as health_router
from src.core.event_bus import EventBus
from src.db.database import enable_sqlite_foreign_keys, get_db
from src.db.models import Base
from src.services.encounter_service import EncounterService
from src.services.repository import SqlCombatRepository
from src.services.seed import load_seed

SEED_ENCOUNTER_PATH = Path("src/data/seed_encounter.json")


@pytest.fixture()
def db_session() -> Session:
    """In-memory SQLite session with all tables created."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(engine)
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture()
def repository(db_session: Session) -> SqlCombatRepository:
    return SqlCombatRepository(db_session)


@pytest.fixture()
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture()
def seeded_repository(repository: SqlCombatRepository) -> SqlCombatRepository:
    """Repository holding the demo encounter (Sir Aldric, Grubnik, Snivvet)."""
    load_seed(repository, SEED_ENCOUNTER_PATH)
    return repository


@pytest.fixture()
def ids(seeded_repository: SqlCombatRepository) -> dict[str, int]:
    """Character name -> id for the seeded encounter."""
    return {c.name: c.id for c in seeded_repository.list_characters()}


@pytest.fixture()
def service(
    seeded_repository: SqlCombatRepository, event_bus: EventBus
) -> EncounterService:
    return EncounterService(seeded_repository, event_bus)


@pytest.fixture()
def client(db_session: Session, service: EncounterService) -> TestClient:
    """TestClient wired to the seeded in-memory encounter."""
    app = FastAPI()
    app.include_router(health_router)
    app.include_router(combat_router)
    app.state.encounter_service = service

    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    return TestClient(app)
