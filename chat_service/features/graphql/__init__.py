"""GraphQL feature module using Strawberry.

This module provides the chat GraphQL API at /graphql with:
- Query resolvers for users, groups and messages
- Mutations taking their payload as a single input argument
- WebSocket subscriptions for new messages and groups
- Relay-style cursor pagination through ConnectionInput
"""
