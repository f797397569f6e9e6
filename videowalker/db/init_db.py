import logging
from datetime import timedelta

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from videowalker.core.clock import utcnow
from videowalker.core.config import settings
from videowalker.core.security import hash_password
from videowalker.db.base import Base
from videowalker.models import AdminUser, Campaign

logger = logging.getLogger(__name__)


def create_tables(engine: Engine) -> None:
    # registers every model on Base.metadata
    import videowalker.models  # noqa: F401

    Base.metadata.create_all(bind=engine, checkfirst=True)


def ensure_admin(db: Session) -> None:
    username = (settings.ADMIN_USERNAME or "").strip()
    if not username:
        return

    admin = db.query(AdminUser).filter(AdminUser.username == username).first()
    if admin:
        return

    admin = AdminUser(
        username=username,
        password_hash=hash_password(settings.ADMIN_PASSWORD),
        is_active=True,
    )
    db.add(admin)
    db.commit()
    logger.info("seeded admin user %r", username)


def ensure_sample_campaign(db: Session) -> None:
    """Demo data for local development: one campaign ending in 45 minutes."""
    if db.query(Campaign).count():
        return

    now = utcnow()
    c = Campaign(
        sponsor_name="TechFlow Pro",
        sponsor_tagline="Revolutionizing Digital Innovation",
        sponsor_website="https://example.com",
        poster_url="/static/posters/techflow.png",
        secret_code="TECH2024WIN",
        mystery_description=(
            "Mystery Prize Awaits! Be the first to tell VideoWalker this secret code "
            "and win an amazing surprise gift worth over $200!"
        ),
        prize_value="$200+",
        countdown_end=now + timedelta(minutes=45),
        is_active=True,
        has_winner=False,
        created_at=now,
    )
    db.add(c)
    db.commit()
    logger.info("seeded sample campaign %s", c.id)
