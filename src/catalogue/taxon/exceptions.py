"""Errors raised while maintaining taxon trees."""

from protean.exceptions import InvalidStateError, ValidationError


class UniquenessError(ValidationError):
    """A slug is already taken within its scope.

    For taxons the scope is the sibling group (same taxonomy, same parent);
    for taxonomies it is the whole catalogue.
    """


class IntegrityError(InvalidStateError):
    """The stored parent chain of a taxon loops back on itself."""
