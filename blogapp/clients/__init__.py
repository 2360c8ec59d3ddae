from blogapp.clients.api_client import ApiError, BlogApiClient, SessionExpiredError, TokenStore

__all__ = ["ApiError", "BlogApiClient", "SessionExpiredError", "TokenStore"]
