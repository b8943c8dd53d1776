from fastapi import Response

from tenantgate.app.services.session_manager import SessionCookie


def apply_cookie(response: Response, cookie: SessionCookie) -> None:
    """Write a session cookie instruction onto an HTTP response"""
    response.set_cookie(
        key=cookie.name,
        value=cookie.value,
        max_age=cookie.max_age,
        path=cookie.path,
        secure=cookie.secure,
        httponly=cookie.httponly,
        samesite=cookie.samesite,
    )
