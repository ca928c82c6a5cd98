"""User store: CRUD persistence for user records keyed by id, with unique lookup by email."""

import logging
from typing import Protocol, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from accounts.models.user import User

logger = logging.getLogger(__name__)


class UserStore(Protocol):
    """Persistence capability the account service depends on."""

    def save(self, user: User) -> User: ...

    def find_by_id(self, user_id: int) -> User | None: ...

    def find_by_email(self, email: str) -> User | None: ...

    def find_all(self) -> Sequence[User]: ...

    def delete_by_id(self, user_id: int) -> None: ...


class SqlAlchemyUserStore:
    """
    UserStore over a SQLAlchemy session.

    save and delete_by_id commit immediately. On SQLAlchemyError the session is
    rolled back and the error re-raised (e.g. IntegrityError on duplicate email).
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def save(self, user: User) -> User:
        try:
            self.session.add(user)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        self.session.refresh(user)
        return user

    def find_by_id(self, user_id: int) -> User | None:
        return self.session.query(User).filter(User.id == user_id).first()

    def find_by_email(self, email: str) -> User | None:
        return self.session.query(User).filter(User.email == email).first()

    def find_all(self) -> list[User]:
        return self.session.query(User).order_by(User.id).all()

    def delete_by_id(self, user_id: int) -> None:
        try:
            deleted = (
                self.session.query(User)
                .filter(User.id == user_id)
                .delete(synchronize_session=False)
            )
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        logger.debug("delete_by_id: user_id=%s, rows_deleted=%s", user_id, deleted)
