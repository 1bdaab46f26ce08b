"""Endpoint descriptors for the Crossing Minds REST API.

Each constant names one endpoint: its HTTP verb, its path template (relative
to the API prefix, placeholders in ``{braces}``) and whether it goes through
token refresh. Resource clients only shape parameters around these entries.
"""

from dataclasses import dataclass
from string import Formatter
from typing import Dict, Tuple


@dataclass(frozen=True)
class Endpoint:
    name: str
    method: str
    path: str
    authenticated: bool = True

    @property
    def path_params(self) -> Tuple[str, ...]:
        """Placeholder names used in the path template, in order."""
        return tuple(
            field_name
            for _, field_name, _, _ in Formatter().parse(self.path)
            if field_name
        )


def _endpoint(name: str, method: str, path: str, authenticated: bool = True) -> Endpoint:
    endpoint = Endpoint(name, method, path, authenticated)
    ENDPOINTS[name] = endpoint
    return endpoint


ENDPOINTS: Dict[str, Endpoint] = {}

# Accounts
CREATE_INDIVIDUAL_ACCOUNT = _endpoint("create_individual_account", "POST", "/accounts/individual/")
CREATE_SERVICE_ACCOUNT = _endpoint("create_service_account", "POST", "/accounts/service/")
RESEND_VERIFICATION_CODE = _endpoint(
    "resend_verification_code", "PUT", "/accounts/resend-verification-code/"
)
VERIFY_ACCOUNT = _endpoint("verify_account", "GET", "/accounts/verify/")
LIST_ALL_ACCOUNTS = _endpoint("list_all_accounts", "GET", "/organizations/current/accounts/")
DELETE_INDIVIDUAL_ACCOUNT = _endpoint("delete_individual_account", "DELETE", "/accounts/individual/")
DELETE_SERVICE_ACCOUNT = _endpoint("delete_service_account", "DELETE", "/accounts/service/")
DELETE_CURRENT_ACCOUNT = _endpoint("delete_current_account", "DELETE", "/accounts/")

# Login: never routed through token refresh
LOGIN_INDIVIDUAL = _endpoint("login_individual", "POST", "/login/individual/", authenticated=False)
LOGIN_SERVICE = _endpoint("login_service", "POST", "/login/service/", authenticated=False)
LOGIN_ROOT = _endpoint("login_root", "POST", "/login/root/", authenticated=False)
LOGIN_REFRESH_TOKEN = _endpoint(
    "login_refresh_token", "POST", "/login/refresh-token/", authenticated=False
)

# Databases
CREATE_DATABASE = _endpoint("create_database", "POST", "/databases/")
LIST_ALL_DATABASES = _endpoint("list_all_databases", "GET", "/databases/")
GET_CURRENT_DATABASE = _endpoint("get_current_database", "GET", "/databases/current/")
DELETE_CURRENT_DATABASE = _endpoint("delete_current_database", "DELETE", "/databases/current/")
GET_CURRENT_DATABASE_STATUS = _endpoint(
    "get_current_database_status", "GET", "/databases/current/status/"
)

# User data properties
GET_USER_PROPERTY = _endpoint("get_user_property", "GET", "/users-properties/{property_name}/")
LIST_ALL_USER_PROPERTIES = _endpoint("list_all_user_properties", "GET", "/users-properties/")
CREATE_USER_PROPERTY = _endpoint("create_user_property", "POST", "/users-properties/")
DELETE_USER_PROPERTY = _endpoint(
    "delete_user_property", "DELETE", "/users-properties/{property_name}/"
)

# Users
GET_USER = _endpoint("get_user", "GET", "/users/{user_id}/")
CREATE_OR_UPDATE_USER = _endpoint("create_or_update_user", "PUT", "/users/{user_id}/")
PARTIAL_UPDATE_USER = _endpoint("partial_update_user", "PATCH", "/users/{user_id}/")
CREATE_OR_UPDATE_USERS_BULK = _endpoint("create_or_update_users_bulk", "PUT", "/users-bulk/")
PARTIAL_UPDATE_USERS_BULK = _endpoint("partial_update_users_bulk", "PATCH", "/users-bulk/")
LIST_USERS_PAGINATED = _endpoint("list_users_paginated", "GET", "/users-bulk/")
LIST_USERS = _endpoint("list_users", "POST", "/users-bulk/list/")
DELETE_USER = _endpoint("delete_user", "DELETE", "/users/{user_id}/")
DELETE_USERS_BULK = _endpoint("delete_users_bulk", "DELETE", "/users-bulk/")

# Item data properties
GET_ITEM_PROPERTY = _endpoint("get_item_property", "GET", "/items-properties/{property_name}/")
LIST_ALL_ITEM_PROPERTIES = _endpoint("list_all_item_properties", "GET", "/items-properties/")
CREATE_ITEM_PROPERTY = _endpoint("create_item_property", "POST", "/items-properties/")
DELETE_ITEM_PROPERTY = _endpoint(
    "delete_item_property", "DELETE", "/items-properties/{property_name}/"
)

# Items
GET_ITEM = _endpoint("get_item", "GET", "/items/{item_id}/")
CREATE_OR_UPDATE_ITEM = _endpoint("create_or_update_item", "PUT", "/items/{item_id}/")
PARTIAL_UPDATE_ITEM = _endpoint("partial_update_item", "PATCH", "/items/{item_id}/")
CREATE_OR_UPDATE_ITEMS_BULK = _endpoint("create_or_update_items_bulk", "PUT", "/items-bulk/")
PARTIAL_UPDATE_ITEMS_BULK = _endpoint("partial_update_items_bulk", "PATCH", "/items-bulk/")
LIST_ITEMS_PAGINATED = _endpoint("list_items_paginated", "GET", "/items-bulk/")
LIST_ITEMS = _endpoint("list_items", "POST", "/items-bulk/list/")
DELETE_ITEM = _endpoint("delete_item", "DELETE", "/items/{item_id}/")
DELETE_ITEMS_BULK = _endpoint("delete_items_bulk", "DELETE", "/items-bulk/")

# Ratings
CREATE_OR_UPDATE_RATING = _endpoint(
    "create_or_update_rating", "PUT", "/users/{user_id}/ratings/{item_id}/"
)
DELETE_RATING = _endpoint("delete_rating", "DELETE", "/users/{user_id}/ratings/{item_id}/")
LIST_USER_RATINGS = _endpoint("list_user_ratings", "GET", "/users/{user_id}/ratings/")
CREATE_OR_UPDATE_USER_RATINGS_BULK = _endpoint(
    "create_or_update_user_ratings_bulk", "PUT", "/users/{user_id}/ratings/"
)
DELETE_USER_RATINGS = _endpoint("delete_user_ratings", "DELETE", "/users/{user_id}/ratings/")
CREATE_OR_UPDATE_RATINGS_BULK = _endpoint("create_or_update_ratings_bulk", "PUT", "/ratings-bulk/")
LIST_RATINGS = _endpoint("list_ratings", "GET", "/ratings-bulk/")

# Interactions
CREATE_INTERACTION = _endpoint(
    "create_interaction", "POST", "/users/{user_id}/interactions/{item_id}/"
)
CREATE_OR_UPDATE_USER_INTERACTIONS_BULK = _endpoint(
    "create_or_update_user_interactions_bulk", "POST", "/users/{user_id}/interactions-bulk/"
)
CREATE_OR_UPDATE_INTERACTIONS_BULK = _endpoint(
    "create_or_update_interactions_bulk", "POST", "/interactions-bulk/"
)

# Recommendations
RECOMMENDATIONS_ITEM_TO_ITEMS = _endpoint(
    "get_recommendations_item_to_items", "GET", "/recommendation/items/{item_id}/items/"
)
RECOMMENDATIONS_SESSION_TO_ITEMS = _endpoint(
    "get_recommendations_session_to_items", "POST", "/recommendation/sessions/items/"
)
RECOMMENDATIONS_USER_TO_ITEMS = _endpoint(
    "get_recommendations_user_to_items", "GET", "/recommendation/users/{user_id}/items/"
)

# Scenarios
GET_SCENARIO = _endpoint("get_scenario", "GET", "/scenarios/{reco_type}/{name}/")
CREATE_OR_REPLACE_SCENARIO = _endpoint(
    "create_or_replace_scenario", "PUT", "/scenarios/{reco_type}/{name}/"
)
DELETE_SCENARIO = _endpoint("delete_scenario", "DELETE", "/scenarios/{reco_type}/{name}/")
LIST_ALL_SCENARIOS = _endpoint("list_all_scenarios", "GET", "/scenarios/")
GET_DEFAULT_SCENARIO = _endpoint("get_default_scenario", "GET", "/scenarios-default/{reco_type}/")
SET_DEFAULT_SCENARIO = _endpoint(
    "set_default_scenario", "PATCH", "/scenarios-default/{reco_type}/"
)
UNSET_DEFAULT_SCENARIO = _endpoint(
    "unset_default_scenario", "DELETE", "/scenarios-default/{reco_type}/"
)
