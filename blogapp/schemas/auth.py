from uuid import UUID

from pydantic import BaseModel


class TokenData(BaseModel):
    """Claims extracted from a verified access token."""

    user_id: UUID
    email: str
