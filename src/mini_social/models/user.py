"""SQLAlchemy model for registered users."""

from __future__ import annotations

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from mini_social.db.session import Base


class User(Base):
    """Registered identity with a salted password digest.

    The digest never leaves the service; response schemas omit it.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    firstname: Mapped[str] = mapped_column(Text, nullable=False)
    lastname: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(String(320), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)

    @property
    def display_name(self) -> str:
        """Return the user's first and last name joined by a space."""
        return f"{self.firstname} {self.lastname}"
