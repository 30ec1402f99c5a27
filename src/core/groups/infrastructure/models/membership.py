"""SQLAlchemy ORM model for the memberships table."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class MembershipModel(Base, TimestampMixin):
    """ORM model for memberships table.

    The unique constraint on (group_id, user_id) is what makes the
    registry's find-or-create safe under concurrent joins.

    ``user_id`` is not a foreign key: users belong to the user directory,
    which may live in another database.
    """

    __tablename__ = "memberships"
    __table_args__ = (
        UniqueConstraint("group_id", "user_id", name="uq_memberships_group_user"),
    )

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    group_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("groups.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(String(26), nullable=False, index=True)
    inviter_id: Mapped[str | None] = mapped_column(String(26), nullable=True)
    admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    archived_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<MembershipModel(id={self.id}, group_id={self.group_id}, "
            f"user_id={self.user_id}, admin={self.admin})>"
        )
