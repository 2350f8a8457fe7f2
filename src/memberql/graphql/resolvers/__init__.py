"""Resolver package for the GraphQL schema.

Each resolver reads the repository from the request context and issues
exactly one lookup. Nothing is batched or cached between sibling nodes.
"""
