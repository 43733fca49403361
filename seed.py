"""
Seed script to populate the database with generated listings.

Run this script after setting up the database:
    python seed.py [--scale 0.1] [--seed 42]
"""
import argparse
import sys
import os
from typing import Optional

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from property_api.database import SessionLocal, engine, Base
from property_api.factories import PropertyFactory
from property_api.logging_config import get_logger, setup_logging
from property_api.models import Property
from property_api.schemas import PropertyCreate
from property_api.services.property_service import create_property

logger = get_logger(__name__)

# Variant -> number of listings at scale 1.0
SEED_PLAN = {
    "build": 1000,
    "luxury": 500,
    "for_sale": 1110,
    "for_rent": 800,
    "sold": 300,
}


def seed_database(scale: float = 1.0, seed: Optional[int] = None) -> int:
    """Seed the database with generated listings. Returns the number created."""
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    factory = PropertyFactory(seed=seed)
    created = 0

    try:
        existing_count = db.query(Property).count()
        if existing_count > 0:
            logger.warning("seed_skipped", existing_properties=existing_count)
            return 0

        for variant, count in SEED_PLAN.items():
            for payload in factory.batch(max(1, int(count * scale)), variant):
                create_property(db, PropertyCreate(**payload))
                created += 1
            logger.info("seed_variant_done", variant=variant, total_created=created)

        logger.info("seed_complete", properties=created)
        return created

    except Exception:
        logger.exception("seed_failed", created_before_failure=created)
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the property listings database")
    parser.add_argument("--scale", type=float, default=1.0, help="Multiplier for the number of listings")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible data")
    args = parser.parse_args()

    setup_logging()
    seed_database(scale=args.scale, seed=args.seed)
