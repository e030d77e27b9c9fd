"""
Database management for the Student Records module
Engine/session factory plus the EntityStore used by the services
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.exc import SQLAlchemyError
from config import Config
import logging

logger = logging.getLogger(__name__)

# Global engine and session factory
ENGINE = None
SessionLocal = None


class NotFoundError(Exception):
    """Raised when an identifier does not resolve to a stored entity"""
    def __init__(self, model, entity_id):
        self.model = model
        self.entity_id = entity_id
        super().__init__(f"{model.__name__} {entity_id} not found")


class PersistenceError(Exception):
    """Raised when pending changes could not be committed"""


def init_database(config=None):
    """Initialize database engine and session factory"""
    global ENGINE, SessionLocal

    config = config or Config()
    database_uri = config.get_database_uri()

    ENGINE = create_engine(
        database_uri,
        **config.SQLALCHEMY_ENGINE_OPTIONS
    )

    SessionLocal = sessionmaker(bind=ENGINE, autoflush=False, autocommit=False)

    logger.info(f"Database initialized: {ENGINE.url.render_as_string(hide_password=True)}")
    return ENGINE, SessionLocal


def get_engine():
    if ENGINE is None:
        init_database()
    return ENGINE


def get_session():
    """Get a database session"""
    if SessionLocal is None:
        init_database()
    return SessionLocal()


class EntityStore:
    """
    Thin unit-of-work wrapper around a SQLAlchemy session.
    persist()/remove() only stage changes; flush() commits them all at once.
    """

    def __init__(self, session):
        self.session = session

    def find(self, model, entity_id):
        """Return the entity or None"""
        if entity_id is None:
            return None
        return self.session.get(model, entity_id)

    def find_or_fail(self, model, entity_id):
        entity = self.find(model, entity_id)
        if entity is None:
            raise NotFoundError(model, entity_id)
        return entity

    def find_all(self, model):
        return self.session.query(model).order_by(model.id).all()

    def query(self, model):
        return self.session.query(model)

    def persist(self, entity):
        self.session.add(entity)

    def remove(self, entity):
        self.session.delete(entity)

    def flush(self):
        """Commit every pending persist/remove atomically"""
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Commit failed, changes rolled back: {e}")
            raise PersistenceError(str(e)) from e
