import logging

from fastapi import APIRouter

from dependencies import CurrentUser, Firestore, Tokens
from errors import InvalidCredentialsError, NotFoundError
from models.token import TokenResponse
from models.user import LoginRequest, User
from utils.passwords import verify_password

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=User)
def get_authenticated_user(db: Firestore, current_user: CurrentUser) -> User:
    """Return the user the token belongs to, without the password"""
    user = db.get_user(current_user.user_id)
    if not user:
        raise NotFoundError("User not found")

    user.pop("password", None)
    return User(**user)


@router.post("", response_model=TokenResponse)
def login(credentials: LoginRequest, db: Firestore, tokens: Tokens) -> TokenResponse:
    """Exchange an email and password for a token"""
    user = db.get_user_by_email(credentials.email)
    if not user:
        logger.info("Login failed")
        raise InvalidCredentialsError()

    if not verify_password(credentials.password, user.get("password", "")):
        logger.info("Login failed")
        raise InvalidCredentialsError()

    return TokenResponse(token=tokens.sign(user["id"]))
