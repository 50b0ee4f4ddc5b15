"""SQLAlchemy user repository."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from taskboard.errors import ConflictError
from taskboard.models.user import User

logger = logging.getLogger(__name__)


class SqlUserRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: int) -> User | None:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == email).first()

    def exists(self, user_id: int) -> bool:
        return self.db.query(User.id).filter(User.id == user_id).first() is not None

    def add(self, user: User) -> User:
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            # Lost a registration race: the unique index on email is authoritative
            self.db.rollback()
            logger.info(f"Duplicate registration rejected for {user.email}")
            raise ConflictError("User already exists") from e
        self.db.refresh(user)
        return user

    def save(self, user: User) -> User:
        self.db.commit()
        self.db.refresh(user)
        return user

    def list_newest_first(self) -> list[User]:
        return self.db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()
