"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    AssociationNotFoundError:
        Raised when an association is not found in the data store.

    AssociationAlreadyExistsError:
        Raised when inserting an association whose long or short URL is already taken.

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection issues, timeouts, OOM, etc.).

Example:
    >>> from urlshortener.dao.exceptions import AssociationNotFoundError
    >>> raise AssociationNotFoundError("Association for 'short.ly/abc' not found.")
    Traceback (most recent call last):
        ...
    urlshortener.dao.exceptions.AssociationNotFoundError: Association for 'short.ly/abc' not found.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    error_code = 'DATA_STORE'


class AssociationNotFoundError(DAOError):
    """Exception raised when an association is not found in the data store."""

    error_code = 'NOT_FOUND'


class AssociationAlreadyExistsError(DAOError):
    """Exception raised when inserting an association whose key already exists in the data store."""

    error_code = 'DUPLICATE_KEY'


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, OOM, etc.
    """

    error_code = 'DATA_STORE'
