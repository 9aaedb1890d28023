import logging
import os

from sqlalchemy.orm import Session

from tutor_backend.app.core.security import get_password_hash
from tutor_backend.app.core.settings import get_settings
from tutor_backend.app.models.user import User

logger = logging.getLogger(__name__)

DEFAULT_DEV_EMAIL = "tutor@example.com"
DEFAULT_DEV_PASSWORD = "Secret123!"


def ensure_default_dev_user(db: Session) -> None:
    """
    Create a default login for local development if it does not exist.
    Skips execution outside development and under pytest.
    """
    if os.getenv("PYTEST_CURRENT_TEST") or get_settings().environment != "development":
        return
    if db.query(User).filter(User.email == DEFAULT_DEV_EMAIL).first():
        return
    db.add(User(email=DEFAULT_DEV_EMAIL, hashed_password=get_password_hash(DEFAULT_DEV_PASSWORD), is_active=True))
    db.commit()
    logger.info("Created default development user %s", DEFAULT_DEV_EMAIL)
