# core/supabase_auth.py
# Custom DRF authentication class to verify Supabase JWTs

import logging
import uuid

import jwt
from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction
from rest_framework.authentication import BaseAuthentication
from rest_framework.exceptions import AuthenticationFailed

from .supabase_client import fetch_supabase_user

logger = logging.getLogger("scheduler.auth")

User = get_user_model()


class SupabaseJWTAuthentication(BaseAuthentication):
    """
    Custom authentication class that validates Supabase access tokens.

    This authenticator:
    1. Extracts the JWT from the Authorization header
    2. Verifies it locally with SUPABASE_JWT_SECRET, or, when no secret is
       configured, asks the Supabase auth API
    3. Looks up or lazily creates the local profile for the Supabase user
    """
    keyword = "Bearer"

    def authenticate_header(self, request):
        # Makes DRF answer 401 (not 403) to unauthenticated requests
        return f'{self.keyword} realm="api"'

    def authenticate(self, request):
        auth_header = request.headers.get("Authorization", "")

        if not auth_header.startswith(f"{self.keyword} "):
            return None  # Let other auth backends handle it

        token = auth_header.split(" ", 1)[1].strip()
        if not token:
            raise AuthenticationFailed("No token provided")

        secret = getattr(settings, "SUPABASE_JWT_SECRET", "")
        if secret:
            identity, payload = self._verify_locally(token, secret)
        else:
            identity, payload = self._verify_remotely(token)

        if identity is None:
            return None  # Let other auth backends try

        user = self._get_or_create_user(identity["id"], identity.get("email"))
        return (user, payload)

    def _verify_locally(self, token: str, secret: str):
        try:
            # Supabase uses HS256 by default
            payload = jwt.decode(
                token,
                secret,
                algorithms=["HS256"],
                audience=getattr(settings, "SUPABASE_JWT_AUDIENCE", "authenticated"),
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationFailed("Token has expired")
        except jwt.InvalidTokenError as e:
            logger.debug(f"Invalid Supabase token: {e}")
            return None, None

        supabase_user_id = payload.get("sub")
        if not supabase_user_id:
            raise AuthenticationFailed("Invalid token: missing user ID")

        return {"id": supabase_user_id, "email": payload.get("email")}, payload

    def _verify_remotely(self, token: str):
        identity = fetch_supabase_user(token)
        if identity is None:
            return None, None
        return identity, {"sub": identity["id"], "email": identity.get("email")}

    def _get_or_create_user(self, supabase_user_id: str, email: str):
        """
        Map a Supabase identity to a local profile.

        Lookup order: Supabase id, then email (accounts created before the
        id was recorded). Unknown identities get a fresh profile.
        """
        try:
            supabase_uuid = uuid.UUID(str(supabase_user_id))
        except ValueError:
            raise AuthenticationFailed("Invalid token: malformed user ID")

        user = User.objects.filter(supabase_id=supabase_uuid).first()
        if user is not None:
            return user

        if not email:
            raise AuthenticationFailed("Token missing email claim")

        with transaction.atomic():
            user = User.objects.select_for_update().filter(email=email, supabase_id__isnull=True).first()
            if user is not None:
                user.supabase_id = supabase_uuid
                user.save(update_fields=["supabase_id"])
                return user

            # Ensure unique username
            base_username = email.split("@")[0][:140] or "user"
            username = base_username
            counter = 1
            while User.objects.filter(username=username).exists():
                username = f"{base_username}_{counter}"
                counter += 1

            user = User.objects.create(
                username=username,
                email=email,
                supabase_id=supabase_uuid,
                # Password is not used for Supabase auth
            )
            user.set_unusable_password()
            user.save(update_fields=["password"])

        logger.info(f"Created new user profile from Supabase: {email}")
        return user
