# backend/Auth/auth.py
"""
Request dependencies that guard the API.

`get_current_user_id` is the gate every record router mounts: it turns the
bearer token into a user id (or a 401) before any handler or store call
runs. `get_current_user` and `role_required` build on it for routes that
need the full account or a senior rank.
"""
from typing import Annotated, Callable, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from Auth.database import get_session
from Auth.models import User
from Auth.sessions import SessionStore, get_session_store
from Records import storage

# no auto_error: a missing header must answer 401, not FastAPI's 403
bearer = HTTPBearer(auto_error=False)

BearerToken = Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer)]


def _unauthorized() -> HTTPException:
    return HTTPException(
        status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user_id(
    request: Request,
    creds: BearerToken,
    sessions: Annotated[SessionStore, Depends(get_session_store)],
) -> str:
    """
    Resolves the bearer token against the session store.
    401 when the token is missing, unknown or expired.
    """
    token = creds.credentials if creds else None
    user_id = sessions.resolve(token) if token else None
    if user_id is None:
        raise _unauthorized()

    request.state.user_id = user_id
    return user_id


def get_current_user(
    user_id: Annotated[str, Depends(get_current_user_id)],
    db=Depends(get_session),
) -> User:
    # a live session can outlast its account
    user = storage.get_user(db, user_id)
    if user is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


def role_required(*ranks: str) -> Callable[..., User]:
    """Dependency for routes reserved to certain ranks, e.g. the exports."""
    permitted = frozenset(ranks)

    def require_rank(user: Annotated[User, Depends(get_current_user)]) -> User:
        if user.role in permitted:
            return user
        raise HTTPException(status.HTTP_403_FORBIDDEN, detail="Insufficient role")

    return require_rank
