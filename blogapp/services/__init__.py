from blogapp.services.auth import AuthResult, AuthService
from blogapp.services.media import MediaService

__all__ = ["AuthResult", "AuthService", "MediaService"]
