"""GraphQL resolvers for queries, mutations, and subscriptions.

This package contains:
- queries.py: Query resolvers for users, groups and messages
- mutations.py: Mutation resolvers for messages and groups
- subscriptions.py: Subscription resolvers for real-time updates
"""

from __future__ import annotations

from chat_service.features.graphql.resolvers.mutations import Mutation
from chat_service.features.graphql.resolvers.queries import Query
from chat_service.features.graphql.resolvers.subscriptions import Subscription

__all__ = ["Mutation", "Query", "Subscription"]
