"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI

from src.api.combat import router as combat_router
from src.api.health import router as health_router
from src.config import settings
from src.core.combat.narration import describe_attack
from src.core.combat.models import AttackOutcome
from src.core.event_bus import ALL_EVENTS, EventBus, GameEvent
from src.core.event_types import EventTypes
from src.core.logging import get_logger, setup_logging
from src.db.database import SessionLocal, engine as db_engine
from src.db.models import Base
from src.services.encounter_service import EncounterService
from src.services.repository import SqlCombatRepository
from src.services.seed import load_seed

setup_logging(settings.LOG_LEVEL, sql_echo=settings.DEBUG)
logger = get_logger(__name__)

narration_logger = get_logger("combat.narration")


def _narrate(event: GameEvent) -> None:
    """Reporting collaborator: write every encounter event to the log."""
    if event.event_type == EventTypes.ATTACK_RESOLVED:
        narration_logger.info(describe_attack(AttackOutcome(**event.data)))
    elif event.event_type == EventTypes.ACTION_REJECTED:
        narration_logger.info(event.data["description"])
    else:
        narration_logger.info("%s: %s", event.event_type, event.data)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=db_engine)
    logger.info("Database tables created.")

    event_bus = EventBus()
    event_bus.subscribe(ALL_EVENTS, _narrate)

    db_session = SessionLocal()
    repository = SqlCombatRepository(db_session)

    seed_path = Path(settings.SEED_DATA_PATH)
    if settings.SEED_ON_STARTUP and repository.count_characters() == 0:
        if seed_path.exists():
            load_seed(repository, seed_path)
        else:
            logger.warning("Seed file not found: %s", seed_path)

    logger.info("Initializing EncounterService...")
    app.state.event_bus = event_bus
    app.state.encounter_service = EncounterService(
        repository,
        event_bus,
        unarmed_attack_power=settings.UNARMED_ATTACK_POWER,
    )
    logger.info("EncounterService initialized.")

    yield

    logger.info("Shutting down...")
    db_session.close()


app = FastAPI(title="Equipment Combat", lifespan=lifespan)

app.include_router(health_router)
app.include_router(combat_router)
