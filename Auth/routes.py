# backend/Auth/routes.py
import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials

from Auth.auth import bearer, get_current_user, get_current_user_id
from Auth.database import get_session
from Auth.models import User
from Auth.schemas import Credentials, LoginOut, ProfileUpdate, SignupIn, SignupOut, UserRead
from Auth.security import hash_password, verify_password
from Auth.sessions import SessionStore, get_session_store
from Records import storage
from Records.errors import not_found, storage_call
from Records.schemas import Message

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/login", response_model=LoginOut, summary="Obtain a session token")
def login(
    creds: Credentials,
    db=Depends(get_session),
    sessions: SessionStore = Depends(get_session_store),
):
    """Validate credentials and open a session bound to the user."""
    with storage_call("log in"):
        user: User | None = storage.get_user_by_email(db, creds.email)

    if not user or not verify_password(creds.password, user.password):
        logger.warning("Failed login for %s", creds.email)
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Invalid email or password")

    token = sessions.create(user.id)
    return LoginOut(session_id=token, user=UserRead.model_validate(user))


@router.post("/signup", response_model=SignupOut, summary="Register a new account")
def signup(payload: SignupIn, db=Depends(get_session)):
    with storage_call("sign up", conflict="User already exists"):
        if storage.get_user_by_email(db, payload.email):
            raise HTTPException(status.HTTP_409_CONFLICT, "User already exists")

        data = payload.model_dump()
        data["password"] = hash_password(payload.password)
        user = storage.create_user(db, data)

    logger.info("New %s account %s", user.role, user.email)
    return SignupOut(user=UserRead.model_validate(user))


@router.get("/user", response_model=UserRead)
def current_user(user: Annotated[User, Depends(get_current_user)]):
    return user


@router.post("/logout", response_model=Message)
def logout(
    creds: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer)],
    sessions: SessionStore = Depends(get_session_store),
):
    if creds is not None and creds.credentials:
        sessions.revoke(creds.credentials)
    return {"message": "Logged out successfully"}


@router.put("/profile", response_model=UserRead)
def update_profile(
    payload: ProfileUpdate,
    user_id: Annotated[str, Depends(get_current_user_id)],
    db=Depends(get_session),
):
    changes = payload.changes()
    with storage_call("update profile", conflict="Email already in use"):
        if "email" in changes:
            owner = storage.get_user_by_email(db, changes["email"])
            if owner and owner.id != user_id:
                raise HTTPException(status.HTTP_409_CONFLICT, "Email already in use")
        user = storage.update_user(db, user_id, changes)

    if user is None:
        raise not_found("User")
    return user
