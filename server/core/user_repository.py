# server/core/user_repository.py

import logging
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from core import security
from core.errors import ConflictError, InternalError
from database import is_unique_violation
from models.schemas import AuthCredentials
from models.user import User


logger = logging.getLogger(__name__)


class UserRepository:
    """
    Persists users and checks login credentials.
    Wrong credentials are reported as None, never as an exception.
    """

    def __init__(self, db: Session, bcrypt_rounds: int = security.DEFAULT_ROUNDS):
        self.db = db
        self.bcrypt_rounds = bcrypt_rounds

    def signup(self, credentials: AuthCredentials) -> None:
        salt = security.generate_salt(self.bcrypt_rounds)
        user = User(
            username=credentials.username,
            salt=salt,
            password=self.hash_password(credentials.password, salt),
        )

        try:
            self.db.add(user)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if is_unique_violation(e):
                logger.warning("Signup rejected, username %r already exists", credentials.username)
                raise ConflictError("Username already exists") from e
            logger.exception("Failed to create user %r", credentials.username)
            raise InternalError() from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Failed to create user %r", credentials.username)
            raise InternalError() from e

        logger.info("User %r signed up", credentials.username)

    def validate_user_password(self, credentials: AuthCredentials) -> str | None:
        user = self.find_by_username(credentials.username)
        if user is None:
            return None
        if not security.verify_password(credentials.password, user.password, user.salt):
            return None
        return user.username

    def find_by_username(self, username: str) -> User | None:
        try:
            return self.db.query(User).filter_by(username=username).first()
        except SQLAlchemyError as e:
            logger.exception("Failed to look up user %r", username)
            raise InternalError() from e

    def hash_password(self, password: str, salt: str) -> str:
        return security.hash_password(password, salt)
