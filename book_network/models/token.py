"""ORM model for one-time tokens (e.g. account activation codes) owned by a user."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from book_network.models.base import Base


class Token(Base):
    """
    Opaque token belonging to exactly one user.

    Valid while now < expires_at and validated_at is unset; validated_at is
    written once, when the token is consumed.
    """

    __tablename__ = "tokens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    token = Column(String(255), nullable=False, unique=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    validated_at = Column(DateTime(timezone=True), nullable=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    user = relationship("User", back_populates="tokens")

    def __repr__(self) -> str:
        return f"<Token(id={self.id}, user_id={self.user_id}, expires_at={self.expires_at})>"
