"""Visibility policy for groups.

A group stores its visibility as two booleans, ``is_visible_to_public``
and ``is_visible_to_parent_members``. Callers work with the semantic
``Visibility`` term instead; the functions here convert between the two
representations and check that the stored flags are consistent with the
group's position in the hierarchy.
"""

from __future__ import annotations

from groups.domain.exceptions import GroupValidationError, InvalidArgumentError
from groups.domain.value_objects import FieldError, Visibility

_FLAGS_BY_TERM: dict[Visibility, tuple[bool, bool]] = {
    Visibility.PUBLIC: (True, False),
    Visibility.PARENT_MEMBERS: (False, True),
    Visibility.MEMBERS: (False, False),
}


def derive_visibility(is_public: bool, is_parent_members: bool) -> Visibility:
    """Map the stored flags to exactly one visibility term.

    Precedence is public, then parent_members, then members.
    """
    if is_public:
        return Visibility.PUBLIC
    if is_parent_members:
        return Visibility.PARENT_MEMBERS
    return Visibility.MEMBERS


def parse_visibility(term: str | Visibility) -> Visibility:
    """Coerce a raw term to a Visibility.

    Raises:
        InvalidArgumentError: If the term is not recognised
    """
    try:
        return Visibility(term)
    except ValueError as e:
        raise InvalidArgumentError(f"visible_to term not recognised: {term!r}") from e


def apply_visibility_term(term: str | Visibility) -> tuple[bool, bool]:
    """Map a visibility term to ``(is_public, is_parent_members)``.

    Args:
        term: "public", "parent_members" or "members"

    Returns:
        The flag pair to store on the group

    Raises:
        InvalidArgumentError: If the term is not recognised
    """
    return _FLAGS_BY_TERM[parse_visibility(term)]


def visibility_errors(
    *,
    is_visible_to_public: bool,
    is_visible_to_parent_members: bool,
    is_subgroup: bool,
    parent_members_can_see_discussions: bool,
) -> list[FieldError]:
    """Collect every visibility inconsistency of a group.

    Returns:
        A possibly empty list of field errors
    """
    errors: list[FieldError] = []

    if is_visible_to_parent_members:
        if is_visible_to_public:
            errors.append(
                FieldError(
                    "is_visible_to_parent_members",
                    "requires the group to be hidden from the public",
                )
            )
        if not is_subgroup:
            errors.append(
                FieldError(
                    "is_visible_to_parent_members",
                    "only applies to subgroups",
                )
            )

    if parent_members_can_see_discussions and not is_visible_to_parent_members:
        errors.append(
            FieldError(
                "parent_members_can_see_discussions",
                "requires the group to be visible to parent members",
            )
        )

    return errors


def validate_visibility(
    *,
    is_visible_to_public: bool,
    is_visible_to_parent_members: bool,
    is_subgroup: bool,
    parent_members_can_see_discussions: bool = False,
) -> None:
    """Raise if the visibility flags are inconsistent.

    Raises:
        GroupValidationError: With every problem found
    """
    errors = visibility_errors(
        is_visible_to_public=is_visible_to_public,
        is_visible_to_parent_members=is_visible_to_parent_members,
        is_subgroup=is_subgroup,
        parent_members_can_see_discussions=parent_members_can_see_discussions,
    )
    if errors:
        raise GroupValidationError(errors)
