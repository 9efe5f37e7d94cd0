"""Port definition for the OAuth sign-in client."""

from typing import Protocol

from starlette.requests import Request
from starlette.responses import Response

from domain.model.user import OAuthIdentity


class OAuthClientPort(Protocol):
    async def authorize_redirect(self, request: Request) -> Response: ...
    async def fetch_identity(self, request: Request) -> OAuthIdentity: ...
