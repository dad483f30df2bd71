"""User model."""

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class User(Base):
    """User model - the acting user for repository provider calls."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    name: Mapped[str | None] = mapped_column(String(255))
    avatar_url: Mapped[str | None] = mapped_column(String(512))

    # Personal access tokens keyed by host, e.g. {"github.com": "ghp_..."}
    auth_tokens: Mapped[dict] = mapped_column(JSON, default=dict)

    def token_for_host(self, host: str) -> str | None:
        """Return the user's token for a hosting provider, if any."""
        return (self.auth_tokens or {}).get(host)
