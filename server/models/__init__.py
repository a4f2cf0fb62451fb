# server/models/__init__.py

from sqlalchemy.orm import declarative_base


Base = declarative_base()


from . import task, user  # noqa: E402,F401
