# server/core/token_validator.py

import logging
from core.errors import UnauthorizedError
from core.user_repository import UserRepository
from models.schemas import JwtPayload
from models.user import User


logger = logging.getLogger(__name__)


class TokenValidator:
    """
    Turns the claims of an already verified token into a User.
    A token whose user no longer exists is rejected.
    """

    def __init__(self, users: UserRepository):
        self.users = users

    def validate(self, payload: JwtPayload) -> User:
        user = self.users.find_by_username(payload.username)
        if user is None:
            logger.warning("Token names unknown user %r", payload.username)
            raise UnauthorizedError()
        return user
