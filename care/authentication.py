"""
Token authentication for the care API.

Floor terminals are shared between shifts, so DRF tokens expire after
``AUTH_TOKEN_TTL_HOURS`` (0 disables expiry).  Kept apart from the views
so that REST framework can import the class from settings without
pulling in view modules.
"""
from __future__ import annotations

from datetime import timedelta

from django.conf import settings
from django.utils import timezone
from rest_framework import authentication, exceptions
from rest_framework.authtoken.models import Token


def token_expired(token: Token) -> bool:
    ttl = getattr(settings, 'AUTH_TOKEN_TTL_HOURS', 0)
    return bool(ttl) and token.created < timezone.now() - timedelta(hours=ttl)


def issue_token(user) -> Token:
    """Return the user's token, replacing it first if it has expired."""
    token, created = Token.objects.get_or_create(user=user)
    if not created and token_expired(token):
        token.delete()
        token = Token.objects.create(user=user)
    return token


class TokenAuthentication(authentication.TokenAuthentication):
    """``Authorization: Token <key>`` with expiry."""

    keyword = 'Token'

    def authenticate_credentials(self, key):
        user, token = super().authenticate_credentials(key)
        if token_expired(token):
            raise exceptions.AuthenticationFailed('トークンの有効期限が切れました。再度ログインしてください')
        return user, token
