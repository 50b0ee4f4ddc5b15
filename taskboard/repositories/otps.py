"""SQLAlchemy one-time passcode repository."""

from datetime import datetime

from sqlalchemy import or_
from sqlalchemy.orm import Session

from taskboard.models.otp import OTP


class SqlOTPRepository:
    def __init__(self, db: Session):
        self.db = db

    def add(self, otp: OTP) -> OTP:
        self.db.add(otp)
        self.db.commit()
        self.db.refresh(otp)
        return otp

    def find_valid(self, email: str, code: str, now: datetime) -> OTP | None:
        return (
            self.db.query(OTP)
            .filter(
                OTP.email == email,
                OTP.code == code,
                OTP.is_used.is_(False),
                OTP.expires_at > now,
            )
            .order_by(OTP.created_at.desc(), OTP.id.desc())
            .first()
        )

    def consume(self, otp_id: int) -> bool:
        # Conditional update: only one concurrent verifier can flip is_used
        updated = (
            self.db.query(OTP)
            .filter(OTP.id == otp_id, OTP.is_used.is_(False))
            .update({OTP.is_used: True}, synchronize_session=False)
        )
        self.db.commit()
        return updated == 1

    def purge_stale(self, expired_before: datetime) -> int:
        deleted = (
            self.db.query(OTP)
            .filter(or_(OTP.is_used.is_(True), OTP.expires_at < expired_before))
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return deleted
