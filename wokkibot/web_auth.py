"""Discord OAuth2 login for the admin web interface."""

from __future__ import annotations

import base64
import secrets
from dataclasses import dataclass, field
from typing import Any, Optional
from urllib.parse import urlencode

import requests

AUTHORIZE_URL = "https://discord.com/api/oauth2/authorize"
TOKEN_URL = "https://discord.com/api/oauth2/token"
USER_URL = "https://discord.com/api/users/@me"
REQUEST_TIMEOUT = 30


@dataclass
class OAuthConfig:
    """Application credentials and the users allowed in."""

    client_id: str
    client_secret: str
    redirect_uri: str
    admin_user_ids: list[int] = field(default_factory=list)


@dataclass
class DiscordUser:
    id: str
    username: str
    avatar: str = ""


def generate_random_state() -> str:
    """A fresh URL-safe state value for one login attempt."""
    return base64.urlsafe_b64encode(secrets.token_bytes(32)).decode("ascii")


class OAuthClient:
    """Talks to Discord's OAuth2 endpoints."""

    def __init__(self, config: OAuthConfig, session: Optional[Any] = None) -> None:
        self.config = config
        self.session = session if session is not None else requests.Session()

    def authorize_url(self, state: str) -> str:
        params = {
            "client_id": self.config.client_id,
            "redirect_uri": self.config.redirect_uri,
            "response_type": "code",
            "scope": "identify",
            "state": state,
        }
        return AUTHORIZE_URL + "?" + urlencode(sorted(params.items()))

    def exchange_code(self, code: str) -> str:
        """Trade an authorization code for an access token."""
        data = {
            "client_id": self.config.client_id,
            "client_secret": self.config.client_secret,
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": self.config.redirect_uri,
        }
        response = self.session.post(TOKEN_URL, data=data, timeout=REQUEST_TIMEOUT)
        return str(response.json().get("access_token") or "")

    def get_user_info(self, token: str) -> DiscordUser:
        response = self.session.get(
            USER_URL, headers={"Authorization": "Bearer " + token}, timeout=REQUEST_TIMEOUT
        )
        payload = response.json()
        return DiscordUser(
            id=str(payload.get("id") or ""),
            username=str(payload.get("username") or ""),
            avatar=str(payload.get("avatar") or ""),
        )

    def is_admin(self, user_id: str) -> bool:
        """Whether the user may use the admin interface; raises on a malformed id."""
        return int(user_id) in self.config.admin_user_ids