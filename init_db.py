"""
Database Initialization and Integrity Checker
Ensures the database and all tables exist before the app serves requests
"""

import logging
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.exc import OperationalError, ProgrammingError
from sqlalchemy.schema import sort_tables

from db_single import get_engine
# Import all models to register them with Base.metadata
from models import Base, User, Student, Professor, ClassLevel, Grade, PreviousPassword

logger = logging.getLogger(__name__)


def create_database_if_not_exists(engine):
    """Create the MySQL database if it doesn't exist (SQLite creates its file itself)"""
    url_obj = engine.url
    if url_obj.get_backend_name() != 'mysql':
        return

    db_name = url_obj.database
    temp_engine = create_engine(url_obj.set(database=None))
    try:
        with temp_engine.connect() as conn:
            conn = conn.execution_options(isolation_level="AUTOCOMMIT")
            conn.execute(text(f'CREATE DATABASE IF NOT EXISTS `{db_name}`'))
            logger.info(f"Database ready: {db_name}")
    except (OperationalError, ProgrammingError) as e:
        logger.warning(f"Could not create database {db_name}: {e}")
    finally:
        temp_engine.dispose()


def get_existing_tables(engine):
    """Get set of existing tables in database"""
    return set(inspect(engine).get_table_names())


def get_expected_tables():
    """Get set of all expected tables from models"""
    return set(Base.metadata.tables.keys())


def create_missing_tables(engine, existing_tables, expected_tables):
    """Create any missing tables in foreign-key order"""
    missing_tables = expected_tables - existing_tables

    if not missing_tables:
        logger.info("All tables exist")
        return []

    logger.info(f"Creating {len(missing_tables)} missing tables: {', '.join(sorted(missing_tables))}")

    sorted_tables = sort_tables([Base.metadata.tables[name] for name in missing_tables])

    created = []
    for table in sorted_tables:
        table.create(engine, checkfirst=True)
        created.append(table.name)

    return created


def run_on_startup(engine=None):
    """
    Main entry point: make sure the database and its tables exist
    Returns True on success, False otherwise
    """
    engine = engine or get_engine()
    try:
        create_database_if_not_exists(engine)
        existing = get_existing_tables(engine)
        created = create_missing_tables(engine, existing, get_expected_tables())
        if created:
            logger.info(f"✅ Created tables: {', '.join(created)}")
        return True
    except (OperationalError, ProgrammingError) as e:
        logger.error(f"❌ Database initialization failed: {e}")
        return False
