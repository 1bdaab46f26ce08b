"""
xminds - async client for the Crossing Minds recommendation API.

Wraps the REST endpoints (accounts, databases, users, items, ratings,
interactions, recommendations and scenarios) behind typed coroutines with
automatic access-token refresh and retry of transient failures.
"""

__version__ = "1.0.0"
