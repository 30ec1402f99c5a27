"""SQLAlchemy ORM model for the membership_requests table."""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class MembershipRequestModel(Base, TimestampMixin):
    """ORM model for membership_requests table.

    A request is pending while ``response`` is NULL.
    """

    __tablename__ = "membership_requests"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    group_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("groups.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str | None] = mapped_column(String(26), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    response: Mapped[str | None] = mapped_column(String(32), nullable=True)

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<MembershipRequestModel(id={self.id}, group_id={self.group_id}, "
            f"response={self.response})>"
        )
