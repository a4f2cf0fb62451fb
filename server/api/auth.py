# server/api/auth.py

import logging
from datetime import datetime, timedelta, timezone
from jose import JWTError, jwt
from pydantic import ValidationError
from fastapi import APIRouter, Depends, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from core.config import Settings
from core.errors import UnauthorizedError
from core.token_validator import TokenValidator
from core.user_repository import UserRepository
from database import get_db
from models.schemas import AuthCredentials, JwtPayload, Token, UserRead
from models.user import User


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/signin")


# -------------------------------
# Tokens
# -------------------------------

def create_access_token(username: str, settings: Settings) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode = {"username": username, "exp": expire}
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> JwtPayload:
    """
    Verifies signature and expiry, then returns the claims the core relies on.
    """
    try:
        claims = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
        return JwtPayload.model_validate(claims)
    except (JWTError, ValidationError):
        raise UnauthorizedError("Could not validate credentials")


# -------------------------------
# Dependencies
# -------------------------------

def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_user_repository(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> UserRepository:
    return UserRepository(db, bcrypt_rounds=settings.bcrypt_rounds)


def get_token_validator(users: UserRepository = Depends(get_user_repository)) -> TokenValidator:
    return TokenValidator(users)


def get_current_user(
    token: str = Depends(oauth2_scheme),
    settings: Settings = Depends(get_app_settings),
    validator: TokenValidator = Depends(get_token_validator),
) -> User:
    payload = decode_access_token(token, settings)
    return validator.validate(payload)


# -------------------------------
# Endpoints
# -------------------------------

@router.post("/signup", status_code=status.HTTP_201_CREATED)
def signup(credentials: AuthCredentials, users: UserRepository = Depends(get_user_repository)):
    users.signup(credentials)
    return {"status": "success"}


@router.post("/signin", response_model=Token)
def signin(
    credentials: AuthCredentials,
    users: UserRepository = Depends(get_user_repository),
    settings: Settings = Depends(get_app_settings),
):
    username = users.validate_user_password(credentials)
    if username is None:
        logger.info("Failed sign-in for %r", credentials.username)
        raise UnauthorizedError("Invalid credentials")
    access_token = create_access_token(username, settings)
    return {"access_token": access_token, "token_type": "bearer"}


@router.get("/me", response_model=UserRead)
def read_users_me(current_user: User = Depends(get_current_user)):
    return {"username": current_user.username}
