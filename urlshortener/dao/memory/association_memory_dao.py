"""In-memory Data Access Object (DAO) implementation for associations

Keeps two indexes (long URL -> record, short URL -> long URL) in process
memory. Intended for local runs and tests; nothing survives a restart.

Classes:
    AssociationMemoryDAO:
        DAO storing AssociationModel records in Python dicts.

Example:
    >>> dao = AssociationMemoryDAO()
    >>> await dao.insert(AssociationModel(long_url='example.com', short_url='short.ly/abc'))
    <AssociationMemoryDAO>
    >>> await dao.set_active('short.ly/abc', False)
    <AssociationMemoryDAO>
    >>> (await dao.find('example.com')).active
    False
"""

from dataclasses import replace

from beartype import beartype

from urlshortener.models import AssociationModel
from urlshortener.dao.base import AssociationBaseDAO
from urlshortener.dao.exceptions import AssociationAlreadyExistsError, AssociationNotFoundError


class AssociationMemoryDAO(AssociationBaseDAO):
    """Dict-backed Data Access Object (DAO) for associations

    No method awaits internally, so every call runs to completion without
    yielding to the event loop: each mutation is atomic.

    Attributes:
        associations (dict[str, AssociationModel]):
            Records keyed by long URL.
        short_index (dict[str, str]):
            Long URL keyed by short URL.
        counter (int):
            Global association counter.
    """

    def __init__(self):
        self.associations: dict[str, AssociationModel] = {}
        self.short_index: dict[str, str] = {}
        self.counter = 0

    def _long_url(self, key: str) -> str:
        return self.short_index.get(key, key)

    def _require(self, key: str) -> AssociationModel:
        association = self.associations.get(self._long_url(key))
        if association is None:
            raise AssociationNotFoundError(f"Association for '{key}' not found.")
        return association

    @beartype
    async def find(self, key: str) -> AssociationModel | None:
        return self.associations.get(self._long_url(key))

    @beartype
    async def insert(self, association: AssociationModel) -> 'AssociationMemoryDAO':
        taken = (association.long_url, association.short_url)
        if any(key in self.associations or key in self.short_index for key in taken):
            raise AssociationAlreadyExistsError(
                f"Association for '{association.long_url}' or '{association.short_url}' already exists."
            )

        self.associations[association.long_url] = association
        self.short_index[association.short_url] = association.long_url
        return self

    @beartype
    async def set_active(self, key: str, active: bool) -> 'AssociationMemoryDAO':
        association = self._require(key)
        self.associations[association.long_url] = replace(association, active=active)
        return self

    @beartype
    async def increment_queries(self, key: str) -> int:
        association = self._require(key)
        updated = replace(association, queries=association.queries + 1)
        self.associations[association.long_url] = updated
        return updated.queries

    async def count(self, increment: bool = False) -> int:
        if increment:
            self.counter += 1
        return self.counter

    async def clear(self) -> 'AssociationMemoryDAO':
        self.associations.clear()
        self.short_index.clear()
        self.counter = 0
        return self

    def __repr__(self) -> str:
        return '<AssociationMemoryDAO>'
