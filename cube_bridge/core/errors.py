"""
Errors and warnings.
"""

from typing import Any, Optional


class CubeBridgeError(Exception):
    """
    Base class for bridge errors.
    """


class ConnectivityError(CubeBridgeError):
    """
    The Cube.js API could not be reached or returned an unusable body.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class SchemaMismatchError(CubeBridgeError, LookupError):
    """
    A table has no matching cube.
    """

    def __init__(self, table_name: str):
        super().__init__(f"No cube named '{table_name}'")
        self.table_name = table_name


class UnresolvedReferenceWarning(UserWarning):
    """
    A query reference could not be resolved and was dropped.

    Collected during translation, never raised.
    """

    def __init__(self, clause: str, reference: Any):
        super().__init__(f"Unresolved {clause} reference dropped: {reference!r}")
        self.clause = clause
        self.reference = reference

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UnresolvedReferenceWarning):
            return NotImplemented
        return (self.clause, self.reference) == (other.clause, other.reference)

    def __hash__(self) -> int:
        return hash((self.clause, repr(self.reference)))
