"""Pure rule functions for group visibility and discussion privacy."""

from groups.domain.policies.discussion_privacy import (
    default_privacy,
    privacy_option_errors,
    private_discussions_only,
    public_discussions_only,
)
from groups.domain.policies.visibility import (
    apply_visibility_term,
    derive_visibility,
    parse_visibility,
    validate_visibility,
    visibility_errors,
)

__all__ = [
    "apply_visibility_term",
    "default_privacy",
    "derive_visibility",
    "parse_visibility",
    "privacy_option_errors",
    "private_discussions_only",
    "public_discussions_only",
    "validate_visibility",
    "visibility_errors",
]
