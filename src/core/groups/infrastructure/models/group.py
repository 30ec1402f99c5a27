"""SQLAlchemy ORM model for the groups table."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class GroupModel(Base, TimestampMixin):
    """ORM model for groups table.

    ``parent_id`` is a self reference; the two-level depth limit is
    enforced by the domain, not by the schema.

    The ``memberships_count`` and ``discussions_count`` columns are
    maintained by the membership and discussion repositories with SQL
    increments. GroupRepository.save() never writes them.
    """

    __tablename__ = "groups"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    parent_id: Mapped[str | None] = mapped_column(
        String(26),
        ForeignKey("groups.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # Parent name, " - " and own name.
    full_name: Mapped[str | None] = mapped_column(String(513), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    max_size: Mapped[int | None] = mapped_column(Integer, nullable=True)
    category_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    payment_plan: Mapped[str] = mapped_column(String(32), nullable=False)
    discussion_privacy_options: Mapped[str] = mapped_column(String(32), nullable=False)
    membership_granted_upon: Mapped[str] = mapped_column(String(32), nullable=False)
    is_visible_to_public: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    is_visible_to_parent_members: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    parent_members_can_see_discussions: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    members_can_add_members: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    can_start_group: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    archived_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    setup_completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    memberships_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    discussions_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<GroupModel(id={self.id}, parent_id={self.parent_id}, name={self.name})>"
