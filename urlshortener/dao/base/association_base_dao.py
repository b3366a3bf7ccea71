"""Abstract base class for Association data access objects (DAOs).

This class establishes a consistent contract for all Association DAO implementations,
regardless of the underlying storage mechanism (e.g., in-memory dicts, Redis).

Responsibilities:
    - Provide an interface for inserting, finding and mutating AssociationModel objects.
    - Allow lookup by either key space (long URL or short URL).
    - Standardize error handling across multiple data store implementations.

All methods are coroutines: the engine suspends only at DAO boundaries.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from urlshortener.models import AssociationModel
        >>> from urlshortener.dao import AssociationMemoryDAO

        >>> dao = AssociationMemoryDAO()

        >>> association = AssociationModel(
        ...     long_url='example.com/blog/article-123',
        ...     short_url='short.ly/1x9f3k',
        ... )
        >>> await dao.insert(association)

        >>> (await dao.find('short.ly/1x9f3k')).long_url
        'example.com/blog/article-123'

        >>> await dao.increment_queries('example.com/blog/article-123')
        1
"""

from abc import ABC, abstractmethod

from urlshortener.models import AssociationModel


class AssociationBaseDAO(ABC):
    """Interface for Association data access objects (DAOs).

    Methods:
        find(key: str) -> AssociationModel | None:
            Find the association whose long URL or short URL equals key.

        insert(association: AssociationModel) -> AssociationBaseDAO:
            Insert a new association.
            Raises AssociationAlreadyExistsError if either URL is already used.

        set_active(key: str, active: bool) -> AssociationBaseDAO:
            Activate or deactivate an association.
            Raises AssociationNotFoundError if it does not exist.

        increment_queries(key: str) -> int:
            Increment the association's query counter and return the new value.
            Raises AssociationNotFoundError if it does not exist.

        count(increment: bool) -> int:
            Return (and optionally increment) the global association counter.

        clear() -> AssociationBaseDAO:
            Remove every association and reset the counter.

        close() -> None:
            Release resources (connections) held by the DAO.

    All methods raise DataStoreError on connection or read/write failure.

    Subclassing:
        Datastore-specific implementations (e.g., AssociationRedisDAO) must
        extend this class and implement all abstract methods. Each mutation
        must be atomic with respect to a single association.
    """

    @abstractmethod
    async def find(self, key: str) -> AssociationModel | None:
        """Find an association by long URL or short URL.

        Args:
            key (str):
                Normalized long URL ('example.com/page') or short URL ('short.ly/abc').

        Returns:
            AssociationModel | None: The association if found, otherwise None.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    async def insert(self, association: AssociationModel) -> 'AssociationBaseDAO':
        """Insert a new association into the data store.

        Args:
            association (AssociationModel):
                The association to be inserted.

        Returns:
            AssociationBaseDAO: self (for method chaining)

        Raises:
            AssociationAlreadyExistsError:
                If an association with the same long URL or short URL already exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    async def set_active(self, key: str, active: bool) -> 'AssociationBaseDAO':
        """Set the active flag of an association found by either key.

        Raises:
            AssociationNotFoundError:
                If no association matches key.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    async def increment_queries(self, key: str) -> int:
        """Increment the query counter of an association found by either key.

        Returns:
            int: The new query count.

        Raises:
            AssociationNotFoundError:
                If no association matches key.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    async def count(self, increment: bool = False) -> int:
        """Retrieve the current association counter value from the data store.

        Args:
            increment (bool):
                If True, increment the counter by 1 before returning the value.

        Returns:
            int: The current counter value.
        """
        pass

    @abstractmethod
    async def clear(self) -> 'AssociationBaseDAO':
        """Remove all associations and the association counter."""
        pass

    async def close(self) -> None:
        """Release resources held by this DAO. No-op by default."""
        return None
