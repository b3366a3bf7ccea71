from dataclasses import dataclass


@dataclass(frozen=True)
class AssociationModel:
    """Represent a (long URL, short URL) association.

    Both URLs are stored without a scheme: the same record serves http and
    https lookups.

    Attributes:
        long_url (str):
            Normalized long URL, e.g. 'example.com/page'.
        short_url (str):
            Short URL as '<shortener base>/<token>', e.g. 'short.ly/1x9f3k'.
            Never changes once assigned.
        active (bool):
            Whether query() may resolve this association.
        queries (int):
            Number of successful query() lookups. Never reset.

    Example:
        >>> association = AssociationModel(
        ...     long_url='example.com/page',
        ...     short_url='short.ly/1x9f3k',
        ... )
        >>> association.active
        True
        >>> association.queries
        0
    """

    long_url: str
    short_url: str
    active: bool = True
    queries: int = 0
