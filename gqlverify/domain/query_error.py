"""
Structured error domain model.

A backend-neutral data contract for the errors an execution collaborator
returns alongside the data payload. The comparator treats records as opaque
values except for the path, which is the sort key.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple, Union

PathSegment = Union[str, int]


@dataclass(frozen=True)
class Location:
    """Line/column position of an error in the query document."""

    line: int
    column: int

    def to_dict(self) -> Dict[str, int]:
        return {"line": self.line, "column": self.column}


@dataclass(frozen=True)
class QueryError:
    """
    Query error as reported by an execution collaborator.

    Attributes:
        message: Human-readable error message
        path: Field names and list indices locating the error in the result tree
        locations: Positions in the query document the error refers to
        extensions: Backend-specific extra fields (None when absent)
    """

    message: str
    path: Tuple[PathSegment, ...] = ()
    locations: Tuple[Location, ...] = ()
    extensions: Optional[Mapping[str, Any]] = field(default=None)

    def __post_init__(self) -> None:
        # Lists and tuples, {} and None must compare equal.
        object.__setattr__(self, "path", tuple(self.path or ()))
        object.__setattr__(self, "locations", tuple(self.locations or ()))
        if not self.extensions:
            object.__setattr__(self, "extensions", None)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "QueryError":
        """
        Create QueryError from the GraphQL response error shape.

        Args:
            data: Dict with "message" and optional "path", "locations", "extensions"

        Returns:
            QueryError instance

        Raises:
            ValueError: If the message is missing or a location is incomplete
        """
        if "message" not in data:
            raise ValueError(f"Error record has no message: {data!r}")

        locations = []
        for location in data.get("locations") or ():
            try:
                locations.append(Location(line=int(location["line"]), column=int(location["column"])))
            except (KeyError, TypeError) as e:
                raise ValueError(f"Invalid error location {location!r}: {e}") from e

        extensions = data.get("extensions")
        return cls(
            message=str(data["message"]),
            path=tuple(data.get("path") or ()),
            locations=tuple(locations),
            extensions=dict(extensions) if extensions else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to the GraphQL response error shape.

        Empty path, locations and extensions are omitted.
        """
        result: Dict[str, Any] = {"message": self.message}
        if self.locations:
            result["locations"] = [location.to_dict() for location in self.locations]
        if self.path:
            result["path"] = list(self.path)
        if self.extensions:
            result["extensions"] = dict(self.extensions)
        return result

    def path_key(self) -> str:
        """String form of the path, e.g. "hero/friends/0/name"."""
        return "/".join(str(segment) for segment in self.path)

    def canonical_key(self) -> str:
        """Deterministic JSON rendering of the whole record."""
        return json.dumps(self.to_dict(), sort_keys=True, ensure_ascii=False, default=str)
