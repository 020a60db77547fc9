"""
Main seeding file that orchestrates all database seeding operations.

Runs seeding functions in dependency order: scholarships resolve their
university by name, so universities must exist first. Every seed skips rows
that are already present, so running it against a live database is safe.
"""

from typing import Optional

from sqlalchemy.orm import Session

from edupath.db.session import SessionLocal
from edupath.utils.logging import get_logger

from .admin_seed import seed_admin
from .universities_seed import seed_universities
from .scholarships_seed import seed_scholarships

logger = get_logger()


def seed_all_data(db_session: Optional[Session] = None):
    """Seed all reference tables; opens its own session unless one is given."""

    owns_session = db_session is None
    if owns_session:
        db_session = SessionLocal()

    try:
        logger.info("Starting database seeding...")

        logger.info("Phase 1: Seeding accounts and universities...")
        seed_admin(db_session)
        seed_universities(db_session)

        logger.info("Phase 2: Seeding scholarships...")
        seed_scholarships(db_session)

        logger.info("Database seeding completed successfully!")
        return True

    except Exception as e:
        logger.error(f"Database seeding failed: {str(e)}")
        db_session.rollback()
        raise e
    finally:
        if owns_session:
            db_session.close()
