"""
Admin guard for protecting routes.

Identity is verified upstream; the verified email arrives in the
``X-User-Email`` header and is checked against ``ADMIN_EMAILS``.
"""
from typing import Optional
from fastapi import Header
from app.config import get_settings
from app.exceptions import AuthenticationRequiredError, AdminRequiredError
from app.utils.logger import get_logger

logger = get_logger(__name__)

USER_EMAIL_HEADER = "X-User-Email"


def get_current_user_email(
    x_user_email: Optional[str] = Header(default=None, alias=USER_EMAIL_HEADER)
) -> Optional[str]:
    """Email of the authenticated user, or None when the request is anonymous."""
    if not x_user_email or not x_user_email.strip():
        return None
    return x_user_email.strip().lower()


def require_admin(
    x_user_email: Optional[str] = Header(default=None, alias=USER_EMAIL_HEADER)
) -> str:
    """
    Require an authenticated admin and return their email.

    Raises:
        AuthenticationRequiredError: No authenticated identity on the request
        AdminRequiredError: The identity is not a configured admin
    """
    email = get_current_user_email(x_user_email)
    if email is None:
        raise AuthenticationRequiredError("User not authenticated")

    if not get_settings().is_admin_email(email):
        logger.warning(f"Admin access denied for {email}")
        raise AdminRequiredError("Admin access required", context={"email": email})

    return email
