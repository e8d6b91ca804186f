from typing import Annotated

from fastapi import Request, Depends

from errors import AuthenticationError
from models.user import TokenUser
from services.firestore import FirestoreDB
from services.posts import PostService
from services.tokens import TokenService

TOKEN_HEADER = "x-auth-token"


async def get_token_service(request: Request) -> TokenService:
    """Get token service from app state"""
    return request.app.state.token_service


async def get_firestore(request: Request) -> FirestoreDB:
    """ Get Firestore DB from app state """
    return request.app.state.firestore


async def get_current_user(
        request: Request,
        tokens: TokenService = Depends(get_token_service)
) -> TokenUser:
    """
    Verify the token from the x-auth-token header and return the identity it carries.
    The user id is also left on request.state for downstream handlers.
    """
    token = request.headers.get(TOKEN_HEADER)
    if not token:
        raise AuthenticationError("No token, authorization denied")

    user_id = tokens.verify(token)
    request.state.user_id = user_id
    return TokenUser(user_id=user_id)


async def get_post_service(db: FirestoreDB = Depends(get_firestore)) -> PostService:
    return PostService(db)


CurrentUser = Annotated[TokenUser, Depends(get_current_user)]
Firestore = Annotated[FirestoreDB, Depends(get_firestore)]
Tokens = Annotated[TokenService, Depends(get_token_service)]
Posts = Annotated[PostService, Depends(get_post_service)]
