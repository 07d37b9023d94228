"""Email and password authentication module.

This module handles account sign up, sign in and sign out. Passwords are
hashed with Werkzeug and sessions are signed cookies issued with
itsdangerous. The ``require_user`` dependency guards every API route.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Cookie, Depends, HTTPException
from fastapi.responses import JSONResponse
from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired
from pydantic import BaseModel
from sqlalchemy.orm import Session
from werkzeug.security import check_password_hash, generate_password_hash

from database import Profile, User, get_db
from logic.config import COOKIE_SECURE, SESSION_MAX_AGE, SESSION_SECRET_KEY
from logic.validation import sanitise_email, validate_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth")

# Session serializer for secure cookie signing
serializer = URLSafeTimedSerializer(SESSION_SECRET_KEY, salt="trapline-session")

COOKIE_NAME = "session"


class Credentials(BaseModel):
    """Request model for sign up and sign in."""

    email: str
    password: str


def create_session(user: User) -> str:
    """Create a signed session token for the user.

    Args:
        user: Signed-in user.

    Returns:
        Signed session token string.
    """
    return serializer.dumps({"uid": user.id})


def get_session_from_cookie(session_cookie: Optional[str]) -> Optional[dict]:
    """Validate and retrieve session data from signed cookie.

    Args:
        session_cookie: Signed session cookie value.

    Returns:
        Session data if valid, None otherwise.
    """
    if not session_cookie:
        return None

    try:
        return serializer.loads(session_cookie, max_age=SESSION_MAX_AGE)
    except (BadSignature, SignatureExpired):
        return None


def lookup_user(session_cookie: Optional[str], db: Session) -> Optional[User]:
    session_data = get_session_from_cookie(session_cookie)
    if not session_data or not session_data.get("uid"):
        return None
    return db.get(User, session_data["uid"])


def require_user(
    session: Optional[str] = Cookie(None, alias=COOKIE_NAME),
    db: Session = Depends(get_db),
) -> User:
    """Dependency returning the signed-in user.

    Raises:
        HTTPException: 401 if there is no valid session.
    """
    user = lookup_user(session, db)
    if user is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


def _signed_in_response(user: User, message: str) -> JSONResponse:
    response = JSONResponse({"success": True, "message": message, "user": user.to_dict()})
    response.set_cookie(
        key=COOKIE_NAME,
        value=create_session(user),
        max_age=SESSION_MAX_AGE,
        httponly=True,
        secure=COOKIE_SECURE,
        samesite="lax",
    )
    return response


@router.post("/signup")
def signup(data: Credentials, db: Session = Depends(get_db)):
    """Create a new account and sign it in.

    Args:
        data: Email and password.

    Returns:
        JSONResponse with the new user and the session cookie set.

    Raises:
        HTTPException: If the email is invalid or taken, or the password is too short.
    """
    email = sanitise_email(data.email)
    password = validate_password(data.password)

    if db.query(User).filter(User.email == email).first():
        raise HTTPException(status_code=409, detail="User already registered")

    user = User(email=email, password_hash=generate_password_hash(password))
    db.add(user)
    db.flush()
    db.add(Profile(id=user.id))
    db.commit()
    db.refresh(user)

    logger.info("Created account %s", user.id)
    return _signed_in_response(user, "Account created! Logging you in...")


@router.post("/login")
def login(data: Credentials, db: Session = Depends(get_db)):
    """Sign in an existing account.

    Raises:
        HTTPException: 401 if the email or password is wrong.
    """
    email = (data.email or "").strip().lower()
    user = db.query(User).filter(User.email == email).first()

    if user is None or not check_password_hash(user.password_hash, data.password):
        logger.info("Failed sign in for %s", email)
        raise HTTPException(status_code=401, detail="Invalid login credentials")

    logger.info("Signed in %s", user.id)
    return _signed_in_response(user, "Signed in")


@router.post("/logout")
def logout():
    """Log out the current user by clearing the session cookie.

    Returns:
        JSONResponse with success message and cleared cookie.
    """
    response = JSONResponse({"success": True, "message": "Logged out successfully"})
    response.delete_cookie(key=COOKIE_NAME)

    return response


@router.get("/me")
def get_current_user(
    session: Optional[str] = Cookie(None, alias=COOKIE_NAME),
    db: Session = Depends(get_db),
):
    """Get current authenticated user information.

    Returns:
        JSON with user data if authenticated, or null user if not.
    """
    user = lookup_user(session, db)

    if user:
        return {"authenticated": True, "user": user.to_dict()}

    return {"authenticated": False, "user": None}
