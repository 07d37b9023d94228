"""
Page routes.

This module serves the HTML screens. Every screen except the login page
requires a session and redirects to the login page without one.

Author: Matthew Picone (mail@matthewpicone.com)
Date: 2025-12-17
"""

import os
from typing import Optional

from fastapi import APIRouter, Cookie, Depends
from fastapi.responses import FileResponse, HTMLResponse, RedirectResponse
from sqlalchemy.orm import Session

from database import get_db
from server.auth import COOKIE_NAME, lookup_user

router = APIRouter()

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
STATIC_DIR = os.path.join(BASE_DIR, "static")

SCREENS = ("/", "/inventory", "/landowners", "/profile")


@router.get("/login", response_class=HTMLResponse, include_in_schema=False)
def login_page():
    """Serve the sign in / sign up page."""
    return FileResponse(os.path.join(STATIC_DIR, "login.html"))


def screen_page(
    session: Optional[str] = Cookie(None, alias=COOKIE_NAME),
    db: Session = Depends(get_db),
):
    """Serve the app shell, which renders the screen for the current path.

    Returns:
        HTML page from static/index.html, or a redirect to /login.
    """
    if lookup_user(session, db) is None:
        return RedirectResponse(url="/login", status_code=303)
    return FileResponse(os.path.join(STATIC_DIR, "index.html"))


for _path in SCREENS:
    router.add_api_route(_path, screen_page, methods=["GET"], response_class=HTMLResponse, include_in_schema=False)
