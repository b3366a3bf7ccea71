from dataclasses import dataclass


# fmt: off
@dataclass(frozen=True)
class ParsedUrlModel:
    scheme: str              # Lower-cased scheme, e.g. 'https'
    domain: str              # Host only, no port, lower-cased
    base: str                # host[:port], lower-cased
    base_rest: str           # base + path, lower-cased (association lookup key)
    path: str | None = None  # Path as submitted (original casing), None when absent

    @property
    def url(self) -> str:
        return f'{self.scheme}://{self.base_rest}'
# fmt: on
