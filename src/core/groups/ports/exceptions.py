"""Storage exceptions for the groups bounded context.

These exceptions represent errors raised by the storage collaborator.
They should be caught and handled by the application layer.
"""


class DuplicateMembershipError(Exception):
    """Raised when a membership for the same (group, user) already exists.

    This is how the storage collaborator's uniqueness constraint surfaces a
    lost find-or-create race. The application layer handles it by reading
    the membership the concurrent request created.
    """

    pass
