"""Execution backends implementing the execution collaborator interface."""

from .graphql_core import GraphQLCoreExecutor, to_query_error

__all__ = ["GraphQLCoreExecutor", "to_query_error"]
