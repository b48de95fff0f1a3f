from sqlalchemy import BigInteger, Boolean, CheckConstraint, DateTime, Integer, String, false, func
from sqlalchemy.orm import Mapped, mapped_column
from dashboard.db.base import Base

class Account(Base):
    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    uuid: Mapped[str] = mapped_column(String(36), unique=True, index=True)

    username: Mapped[str | None] = mapped_column(String(32), unique=True, index=True, nullable=True)
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    google_id: Mapped[str | None] = mapped_column(String(255), unique=True, index=True, nullable=True)

    allowance_cents: Mapped[int] = mapped_column(BigInteger, default=0, server_default="0")
    logged_in: Mapped[bool] = mapped_column(Boolean, default=False, server_default=false())

    created_at: Mapped[DateTime] = mapped_column(DateTime, server_default=func.now())

    __table_args__ = (
        CheckConstraint("allowance_cents >= 0", name="ck_accounts_allowance_nonnegative"),
    )
