"""FastAPI dependencies resolving the collaborators built in the app lifespan."""

from fastapi import HTTPException, Request

from adapter.mongodb.user_repository import MongoUserRepository
from port.oauth_client import OAuthClientPort
from port.user_repository import UserRepository
from services.token_issuer import TokenIssuer


def _get_db(request: Request):
    """Get MongoDB database, raising 503 if unavailable."""
    client = getattr(request.app.state, 'mongo_client', None)
    if client is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return client[request.app.state.settings.mongodb_database]


def get_user_repo(request: Request) -> UserRepository:
    return MongoUserRepository(_get_db(request))


def get_token_issuer(request: Request) -> TokenIssuer:
    issuer = getattr(request.app.state, 'token_issuer', None)
    if issuer is None:
        raise HTTPException(status_code=500, detail="Token signing is not configured")
    return issuer


def get_oauth_client(request: Request) -> OAuthClientPort:
    client = getattr(request.app.state, 'oauth_client', None)
    if client is None:
        raise HTTPException(status_code=503, detail="Google sign-in is not configured")
    return client
