"""
Insert sample accounts into an empty database (development only):

  python -m app.scripts.seed_users
"""

import logging
import sys

from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.database import build_engine, build_session_factory
from app.core.logging import configure_logging
from app.core.security import PasswordHasher
from app.models import User
from app.services.credential_store import UserStore, parse_registration

logger = logging.getLogger(__name__)

SAMPLE_USERS = [
    {
        "email": "volunteer@example.com",
        "password": "password123",
        "userType": "volunteer",
        "firstName": "John",
        "lastName": "Doe",
        "profile": {
            "bio": "Experienced developer passionate about making a difference",
            "skills": ["JavaScript", "React", "Node.js"],
            "experience": "advanced",
            "availability": "part-time",
            "interests": ["Education", "Technology", "Environment"],
            "location": "New York, NY",
        },
    },
    {
        "email": "ngo@example.com",
        "password": "password123",
        "userType": "ngo",
        "organizationName": "Help Foundation",
        "contactPerson": "Jane Smith",
        "profile": {
            "description": "We help communities through education and technology",
            "mission": "Making the world a better place through innovation",
            "focusAreas": ["Education", "Health", "Technology"],
            "size": "medium",
            "foundedYear": 2015,
            "location": "San Francisco, CA",
            "website": "https://helpfoundation.org",
        },
    },
]


def seed_users(db: Session, hasher: PasswordHasher) -> int:
    """Create SAMPLE_USERS when the users table is empty. Returns number created."""
    existing = db.query(User).count()
    if existing:
        logger.info("Database contains %s users; not seeding.", existing)
        return 0
    store = UserStore(db, hasher)
    for body in SAMPLE_USERS:
        store.create(parse_registration(body))
    logger.info("Created %s sample users.", len(SAMPLE_USERS))
    return len(SAMPLE_USERS)


def main() -> int:
    settings = get_settings()
    configure_logging(settings)
    if settings.APP_ENV == "prod":
        logger.error("Refusing to seed sample users in prod.")
        return 1
    db = build_session_factory(build_engine(settings))()
    try:
        seed_users(db, PasswordHasher(rounds=settings.BCRYPT_ROUNDS))
        return 0
    except Exception as e:
        logger.exception("Seeding failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
