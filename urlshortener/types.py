from typing import Any, TypeAlias


# Type aliases for Python dictionaries
AppConfig: TypeAlias = dict[str, Any]
ComponentConfig: TypeAlias = dict[str, Any]
AssociationInfo: TypeAlias = dict[str, Any]
