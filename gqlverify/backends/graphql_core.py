"""
graphql-core execution backend.

Adapts a graphql-core schema to the execution collaborator interface:
data comes back as JSON bytes and errors as QueryError records.
"""

import json
from typing import Any, Mapping, Optional

from graphql import GraphQLError, GraphQLSchema, build_schema, graphql_sync

from gqlverify.domain import ExecutionResult, QueryError


def to_query_error(error: GraphQLError) -> QueryError:
    """Convert a graphql-core error to the backend-neutral record."""
    return QueryError.from_dict(error.formatted)


class GraphQLCoreExecutor:
    """
    Execution collaborator backed by graphql-core's synchronous executor.

    Attributes:
        schema: Executable schema
        root_value: Root object handed to top-level resolvers
    """

    def __init__(self, schema: GraphQLSchema, root_value: Optional[Any] = None) -> None:
        self.schema = schema
        self.root_value = root_value

    @classmethod
    def from_sdl(cls, sdl: str, root_value: Optional[Any] = None) -> "GraphQLCoreExecutor":
        """
        Build an executor from schema definition language.

        Fields resolve with graphql-core's default resolver, i.e. from keys
        or attributes of root_value (callables are invoked with info and
        field arguments).
        """
        return cls(build_schema(sdl), root_value=root_value)

    def execute(
        self,
        context: Any,
        query: str,
        operation_name: str,
        variables: Mapping[str, Any],
    ) -> ExecutionResult:
        result = graphql_sync(
            self.schema,
            query,
            root_value=self.root_value,
            context_value=context,
            variable_values=dict(variables),
            operation_name=operation_name or None,
        )

        data = None
        if result.data is not None:
            data = json.dumps(result.data, ensure_ascii=False, default=str).encode("utf-8")

        errors = tuple(to_query_error(error) for error in result.errors or ())
        return ExecutionResult(data=data, errors=errors)
