# users/models.py
from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """
    Local profile for an identity managed by Supabase.

    Rows are created lazily the first time a valid access token is seen
    (see core.supabase_auth). Passwords are unused for those accounts.
    """
    supabase_id = models.UUIDField(
        unique=True,
        null=True,
        blank=True,
        help_text="Subject (sub) claim of the Supabase access token",
    )

    def __str__(self):
        return self.email or self.username
