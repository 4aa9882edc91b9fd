"""Admin gate for privileged operations."""

import logging

from fastapi import Depends

from dshop.api.deps import get_current_user
from dshop.config import settings
from dshop.core.exceptions import AuthorizationError
from dshop.models.user import User, normalize_email

logger = logging.getLogger(__name__)


def is_admin(user: User) -> bool:
    """Check whether a user may perform privileged operations.

    With ``settings.admin_email`` configured only that single account is an
    administrator and the stored flag is ignored; otherwise the user's own
    ``is_admin`` flag decides.
    """
    if settings.admin_email:
        return normalize_email(user.email) == normalize_email(settings.admin_email)
    return bool(user.is_admin)


def assert_admin(user: User) -> None:
    """Raise AuthorizationError unless the user passes the admin gate."""
    if not is_admin(user):
        logger.warning(f"Admin gate refused user {user.id}")
        raise AuthorizationError(f"User '{user.id}' is not an admin")


async def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Dependency returning the current user if they are an admin."""
    assert_admin(current_user)
    return current_user
