from typing import Any

from jose import jwt

from lms_api.core.config import settings


def create_auth_headers(token: str) -> dict[str, str]:
    """Create Authorization headers with Bearer token."""
    return {"Authorization": f"Bearer {token}"}


def decode_jwt_token(token: str) -> dict[str, Any]:
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])


def assert_unauthorized(response: Any) -> None:
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}


def assert_forbidden(response: Any) -> None:
    assert response.status_code == 403
    assert response.json() == {"error": "Forbidden: Admin access required"}
