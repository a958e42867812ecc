"""Token persistence: issue, look up by value, and purge long-expired rows."""

from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, joinedload

from book_network.models import Token, User


class TokenRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def exists(self, value: str) -> bool:
        return self.session.scalar(select(Token.id).where(Token.token == value)) is not None

    def get_by_value(self, value: str) -> Token | None:
        """Return the token with its owning user (and the user's roles) loaded."""
        stmt = (
            select(Token)
            .options(joinedload(Token.user).selectinload(User.roles))
            .where(Token.token == value)
        )
        return self.session.scalars(stmt).first()

    def list_for_user(self, user_id: int) -> list[Token]:
        stmt = select(Token).where(Token.user_id == user_id).order_by(Token.created_at)
        return list(self.session.scalars(stmt).all())

    def create(self, user: User, value: str, created_at: datetime, expires_at: datetime) -> Token:
        token = Token(
            token=value,
            created_at=created_at,
            expires_at=expires_at,
            validated_at=None,
            user_id=user.id,
        )
        self.session.add(token)
        self.session.flush()
        return token

    def mark_validated(self, token: Token, validated_at: datetime) -> Token:
        token.validated_at = validated_at
        self.session.flush()
        return token

    def delete_expired_before(self, cutoff: datetime) -> int:
        """Delete tokens whose expires_at is before cutoff. Returns the number of rows removed."""
        result = self.session.execute(
            delete(Token).where(Token.expires_at < cutoff).execution_options(synchronize_session=False)
        )
        return result.rowcount or 0
