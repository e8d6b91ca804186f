import logging
from datetime import datetime, timezone

from fastapi import APIRouter

from dependencies import Firestore, Tokens
from errors import ValidationError
from models.token import TokenResponse
from models.user import RegisterRequest
from utils.gravatar import gravatar_url
from utils.passwords import hash_password

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=TokenResponse)
def register(user_data: RegisterRequest, db: Firestore, tokens: Tokens) -> TokenResponse:
    """
    Register a new user and log them in.
    The avatar is the Gravatar image for the email address.
    """
    if db.get_user_by_email(user_data.email):
        raise ValidationError.single("User already exists")

    user = db.create_user(
        name=user_data.name,
        email=user_data.email,
        password_hash=hash_password(user_data.password),
        avatar=gravatar_url(user_data.email),
        date=datetime.now(timezone.utc).isoformat(),
    )
    logger.info("Registered user %s", user["id"])

    return TokenResponse(token=tokens.sign(user["id"]))
