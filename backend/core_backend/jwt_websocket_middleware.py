"""
JWT WebSocket Authentication Middleware for Django Channels.

Browsers cannot set headers on a websocket handshake, so staff clients pass
their access token as a `token` query parameter. Connections without a token
keep whatever user the session middleware put in the scope.
"""
from urllib.parse import parse_qs
import logging

from channels.db import database_sync_to_async
from channels.middleware import BaseMiddleware
from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken

logger = logging.getLogger(__name__)


class JWTAuthMiddleware(BaseMiddleware):

    async def __call__(self, scope, receive, send):
        # Only process WebSocket connections
        if scope["type"] != "websocket":
            return await super().__call__(scope, receive, send)

        query = parse_qs(scope.get("query_string", b"").decode("utf-8"))
        token = (query.get("token") or [None])[0]
        if token:
            scope["user"] = await self.get_user_from_jwt(token)

        return await super().__call__(scope, receive, send)

    @database_sync_to_async
    def get_user_from_jwt(self, raw_token):
        try:
            token = AccessToken(raw_token)
        except TokenError as e:
            logger.warning(f"Invalid JWT token in WebSocket connection: {e}")
            return AnonymousUser()

        user_id = token.get(api_settings.USER_ID_CLAIM)
        if not user_id:
            logger.warning("JWT payload missing user id")
            return AnonymousUser()

        User = get_user_model()
        try:
            user = User.objects.get(**{api_settings.USER_ID_FIELD: user_id, "is_active": True})
        except User.DoesNotExist:
            logger.warning(f"User {user_id} from JWT not found")
            return AnonymousUser()

        logger.info(f"WebSocket authenticated: user={user.email}, user_id={user.pk}")
        return user
