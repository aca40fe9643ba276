"""GraphQL server configuration settings.

Controls the GraphQL endpoint, IDE, subscriptions, query limits and the
connection defaults applied when a client omits pagination arguments.
Environment variables use GRAPHQL_ prefix.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_sources import create_graphql_yaml_source

GraphQLIDE = Literal["graphiql", "apollo-sandbox", "pathfinder", False]


class GraphQLSettings(BaseSettings):
    """GraphQL server configuration.

    Environment variables use GRAPHQL_ prefix.
    Example: GRAPHQL_PATH=/graphql, GRAPHQL_DEFAULT_MESSAGE_PAGE_SIZE=1
    """

    path: str = Field(
        default="/graphql",
        min_length=1,
        max_length=255,
        pattern=r"^/.*$",
        description="GraphQL endpoint path",
    )

    graphql_ide: GraphQLIDE = Field(
        default="graphiql",
        description="GraphQL IDE to serve: graphiql, apollo-sandbox, pathfinder, or false",
    )
    disable_playground: bool = Field(
        default=False,
        description="Disable the GraphQL IDE regardless of graphql_ide",
    )

    max_query_depth: int = Field(
        default=10,
        ge=1,
        le=50,
        description="Maximum query nesting depth",
    )

    # Connection defaults
    default_message_page_size: int = Field(
        default=1,
        ge=1,
        le=1000,
        description="Messages returned by Group.messages when no size is requested",
    )
    max_page_size: int = Field(
        default=100,
        ge=1,
        le=1000,
        description="Upper bound for first/last on any connection",
    )

    subscriptions_enabled: bool = Field(
        default=True,
        description="Enable GraphQL subscriptions (WebSocket)",
    )

    introspection_enabled: bool = Field(
        default=True,
        description="Enable GraphQL schema introspection",
    )

    model_config = SettingsConfigDict(
        env_prefix="GRAPHQL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: Any,
        env_settings: Any,
        dotenv_settings: Any,
        file_secret_settings: Any,
    ) -> tuple[Any, ...]:
        """Customize settings source precedence: init > yaml > env > dotenv > secrets."""
        return (
            init_settings,
            create_graphql_yaml_source(settings_cls),
            env_settings,
            dotenv_settings,
            file_secret_settings,
        )

    @model_validator(mode="after")
    def validate_page_sizes(self) -> GraphQLSettings:
        """The default page size must fit inside the maximum."""
        if self.default_message_page_size > self.max_page_size:
            msg = (
                f"default_message_page_size ({self.default_message_page_size}) "
                f"exceeds max_page_size ({self.max_page_size})"
            )
            raise ValueError(msg)
        return self

    @property
    def playground_enabled(self) -> bool:
        """Check if the GraphQL IDE is served."""
        return not self.disable_playground and self.graphql_ide is not False

    def get_graphql_ide(self) -> GraphQLIDE:
        """Get GraphQL IDE setting or False if disabled."""
        if self.disable_playground:
            return False
        return self.graphql_ide
