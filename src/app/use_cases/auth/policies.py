"""Lifetimes of the credentials issued by the auth use cases."""

from datetime import timedelta

from config import ApplicationConfig


def reset_token_ttl() -> timedelta:
    return timedelta(minutes=ApplicationConfig.RESET_TOKEN_TTL_MINUTES)


def refresh_token_ttl(remember: bool) -> timedelta:
    """30 days with "remember me", otherwise 24 hours"""
    if remember:
        return timedelta(days=ApplicationConfig.REFRESH_TOKEN_REMEMBER_TTL_DAYS)
    return timedelta(hours=ApplicationConfig.REFRESH_TOKEN_TTL_HOURS)


# A session lives as long as the refresh token issued with it
session_ttl = refresh_token_ttl
