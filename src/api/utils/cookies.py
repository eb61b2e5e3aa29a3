from fastapi import Response

from config import ApplicationConfig


def set_refresh_cookie(response: Response, value: str, max_age: int) -> None:
    """HTTP-only, same-site refresh cookie living as long as its token"""
    response.set_cookie(
        key=ApplicationConfig.REFRESH_COOKIE_NAME,
        value=value,
        max_age=max_age,
        httponly=True,
        secure=ApplicationConfig.COOKIE_SECURE,
        samesite="lax",
        path="/",
    )


def clear_refresh_cookie(response: Response) -> None:
    response.delete_cookie(
        key=ApplicationConfig.REFRESH_COOKIE_NAME,
        httponly=True,
        secure=ApplicationConfig.COOKIE_SECURE,
        samesite="lax",
        path="/",
    )
