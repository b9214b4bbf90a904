import logging
import uuid
from typing import cast

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from lms_api.auth.models.profile import Profile
from lms_api.auth.roles import is_admin
from lms_api.core import security
from lms_api.core.exceptions import ForbiddenError, UnauthorizedError
from lms_api.db.session import get_db

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """Extract the bearer token from the Authorization header"""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError()
    return credentials.credentials


async def get_current_profile(
    token: str = Depends(get_bearer_token),
    db: Session = Depends(get_db),
) -> Profile:
    """Resolve the profile the access token was issued for"""
    payload = security.decode_token(token)
    if payload is None or payload.get("type") != "access":
        raise UnauthorizedError()

    subject = payload.get("sub")
    try:
        profile_id = uuid.UUID(str(subject))
    except ValueError:
        raise UnauthorizedError() from None

    profile = db.query(Profile).filter(Profile.id == profile_id).first()
    if profile is None:
        logger.info("Token subject %s has no profile", profile_id)
        raise UnauthorizedError()

    return cast(Profile, profile)


async def require_admin(current_profile: Profile = Depends(get_current_profile)) -> Profile:
    if not is_admin(current_profile):
        logger.warning("Non-admin profile %s requested an admin route", current_profile.id)
        raise ForbiddenError("Forbidden: Admin access required")
    return current_profile


async def require_analytics_admin(
    current_profile: Profile = Depends(get_current_profile),
) -> Profile:
    """Admin gate for the analytics dashboard, which answers non-admins with 401."""
    if not is_admin(current_profile):
        logger.warning("Non-admin profile %s requested analytics", current_profile.id)
        raise UnauthorizedError()
    return current_profile
