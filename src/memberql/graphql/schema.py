"""
Main GraphQL schema definition using Strawberry
"""

from collections.abc import Callable
from typing import Any

import strawberry
from fastapi import Request
from graphql import GraphQLError
from graphql import validate_schema as gql_validate_schema
from strawberry.fastapi import GraphQLRouter
from strawberry.schema.config import StrawberryConfig
from strawberry.types import ExecutionContext

from ..config import settings
from ..logging import get_logger
from ..repository import Repository, get_repository
from .queries.root import Query
from .scalars import UUID, UUIDScalar

logger = get_logger(__name__)


class MemberQLSchema(strawberry.Schema):
    """Strawberry schema that reports execution errors through structlog."""

    def process_errors(
        self,
        errors: list[GraphQLError],
        execution_context: ExecutionContext | None = None,
    ) -> None:
        operation = execution_context.operation_name if execution_context else None
        for error in errors:
            original = error.original_error
            if original is None:
                logger.info(
                    "GraphQL request rejected",
                    message=error.message,
                    operation=operation,
                )
            else:
                logger.error(
                    "GraphQL resolver failed",
                    message=error.message,
                    path=error.path,
                    operation=operation,
                    exc_info=original,
                )


def build_schema() -> MemberQLSchema:
    """Build the read-only schema (no mutation root) with custom scalars registered."""
    return MemberQLSchema(
        query=Query,
        config=StrawberryConfig(scalar_map={UUID: UUIDScalar}),
    )


schema = build_schema()


def validate_schema() -> None:
    """Validate the GraphQL schema at startup.

    This ensures that all type references can be resolved, causing the server
    to fail fast rather than returning errors at runtime.

    Raises:
        Exception: If the schema is invalid or has unresolved types
    """
    try:
        graphql_schema = schema._schema

        errors = gql_validate_schema(graphql_schema)
        if errors:
            error_messages = [str(e) for e in errors]
            raise Exception(f"GraphQL schema validation failed: {'; '.join(error_messages)}")

        # Check that introspection query works (catches most resolution issues)
        from graphql import get_introspection_query, graphql_sync

        result = graphql_sync(graphql_schema, get_introspection_query())
        if result.errors:
            error_messages = [str(e) for e in result.errors]
            raise Exception(f"GraphQL introspection failed: {'; '.join(error_messages)}")

        logger.info("GraphQL schema validation successful")

    except Exception as e:
        logger.error("GraphQL schema validation failed", error=str(e))
        raise


def create_graphql_router(
    repository_getter: Callable[[], Repository] = get_repository,
) -> GraphQLRouter[dict[str, Any], None]:
    """Create a GraphQL router for FastAPI.

    Args:
        repository_getter: Returns the data-access repository placed in each
            request's context.
    """

    async def get_context(request: Request) -> dict[str, Any]:
        """Get the context for GraphQL resolvers."""
        return {
            "request": request,
            "repository": repository_getter(),
        }

    return GraphQLRouter(
        schema,
        path=settings.graphql_path,
        graphql_ide="graphiql" if settings.graphiql else None,
        allow_queries_via_get=False,
        context_getter=get_context,
    )
