"""
Helpers for reading the per-request GraphQL context
"""

from typing import TYPE_CHECKING

import strawberry

from ..logging import get_logger

if TYPE_CHECKING:
    from ..repository import Repository

logger = get_logger(__name__)


def get_repository_from_info(info: strawberry.Info) -> "Repository":
    """
    Extract the data-access repository from the GraphQL info object.

    Raises:
        RuntimeError: If the context was built without a repository
    """
    repository = info.context.get("repository")
    if repository is None:
        logger.error("Repository not found in GraphQL context")
        raise RuntimeError("Repository not found in GraphQL context")
    return repository
