"""Complete Crossing Minds API client."""

from typing import TYPE_CHECKING, Any

from .accounts_client import AccountsAPIClient
from .auth_client import AuthAPIClient
from .databases_client import DatabasesAPIClient
from .interactions_client import InteractionsAPIClient
from .items_client import ItemsAPIClient
from .ratings_client import RatingsAPIClient
from .recommendations_client import RecommendationsAPIClient
from .scenarios_client import ScenariosAPIClient
from .users_client import UsersAPIClient

if TYPE_CHECKING:
    from ..config import ClientConfig


class XMindsClient(
    AuthAPIClient,
    AccountsAPIClient,
    DatabasesAPIClient,
    UsersAPIClient,
    ItemsAPIClient,
    RatingsAPIClient,
    InteractionsAPIClient,
    RecommendationsAPIClient,
    ScenariosAPIClient,
):
    """Client exposing every endpoint, sharing one token state and HTTP session.

    Example::

        async with XMindsClient(refresh_token=token) as client:
            recos = await client.get_recommendations_user_to_items("user-1", amt=10)
    """

    @classmethod
    def from_config(cls, config: "ClientConfig", **kwargs: Any) -> "XMindsClient":
        """Build a client from a loaded ``ClientConfig``; ``kwargs`` win over it."""
        settings = {
            "api_prefix": config.api_prefix,
            "user_agent": config.user_agent,
            "refresh_token": config.refresh_token,
            "timeout_seconds": config.timeout_seconds,
            "retry_policy": config.retry.to_policy(),
        }
        settings.update(kwargs)
        return cls(config.host, **settings)
