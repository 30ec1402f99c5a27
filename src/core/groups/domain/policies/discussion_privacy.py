"""Discussion privacy policy for groups.

Derives the privacy a new discussion starts with from the group-level
``discussion_privacy_options`` setting.
"""

from __future__ import annotations

from groups.domain.exceptions import InvalidStateError
from groups.domain.value_objects import DiscussionPrivacyOption, FieldError


def default_privacy(option: DiscussionPrivacyOption | str) -> bool | None:
    """Return the default ``private`` flag for a new discussion.

    Returns:
        True for private_only, False for public_only, and None for
        public_or_private (the starter chooses per discussion)

    Raises:
        InvalidStateError: If ``option`` is not a known privacy option
    """
    match option:
        case DiscussionPrivacyOption.PUBLIC_OR_PRIVATE:
            return None
        case DiscussionPrivacyOption.PUBLIC_ONLY:
            return False
        case DiscussionPrivacyOption.PRIVATE_ONLY:
            return True
        case _:
            raise InvalidStateError(f"invalid discussion_privacy value: {option!r}")


def private_discussions_only(option: DiscussionPrivacyOption) -> bool:
    """Whether every discussion in the group must be private."""
    return option == DiscussionPrivacyOption.PRIVATE_ONLY


def public_discussions_only(option: DiscussionPrivacyOption) -> bool:
    """Whether every discussion in the group must be public."""
    return option == DiscussionPrivacyOption.PUBLIC_ONLY


def privacy_option_errors(
    option: DiscussionPrivacyOption, *, is_visible_to_public: bool
) -> list[FieldError]:
    """Check the privacy option against the group's visibility.

    A group hidden from the public cannot force its discussions public.
    """
    if option == DiscussionPrivacyOption.PUBLIC_ONLY and not is_visible_to_public:
        return [
            FieldError(
                "discussion_privacy_options",
                "public_only is not allowed for a group hidden from the public",
            )
        ]
    return []
