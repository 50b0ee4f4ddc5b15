"""One-time passcode model."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String

from taskboard.database import Base
from taskboard.models.mixins import CreatedAtMixin


class OTP(Base, CreatedAtMixin):
    """A six-digit login code sent to a user's email.

    Rows are keyed by the email string rather than a user foreign key. A row is
    consumed once (is_used) and is otherwise left to expire; the maintenance
    worker purges stale rows.
    """

    __tablename__ = "otps"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), nullable=False, index=True)
    code = Column(String(6), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
    is_used = Column(Boolean, default=False, nullable=False)
