import functools
from dataclasses import dataclass
from typing import Optional

from flask import current_app, g, session

from feedhub.errors import Unauthenticated


@dataclass(frozen=True)
class User:
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    is_admin: bool = False


def current_user() -> Optional[User]:
    """
    Resolve the caller of the current request from the login session.

    The session holds {"id", "name", "email"} once the user has signed in.
    Returns None for anonymous callers. A user is an admin when their email
    or id is listed in ADMINISTRATORS.
    """
    data = session.get('user')
    if not data or not data.get('id'):
        return None

    admins = current_app.config.get('ADMINISTRATORS') or []
    user_id = str(data['id'])
    email = data.get('email')
    return User(
        id=user_id,
        name=data.get('name'),
        email=email,
        is_admin=user_id in admins or (email is not None and email in admins),
    )


def can_delete(caller: Optional[User], feed) -> bool:
    if caller is None:
        return False
    if caller.is_admin:
        return True
    # Unowned feeds (user is None) never match
    return feed.user is not None and caller.id == feed.user


def login_required(view):
    """Reject anonymous callers; the resolved user is available as g.user."""

    @functools.wraps(view)
    def wrapped(*args, **kwargs):
        user = current_user()
        if user is None:
            raise Unauthenticated('You must be logged in')
        g.user = user
        return view(*args, **kwargs)

    return wrapped
