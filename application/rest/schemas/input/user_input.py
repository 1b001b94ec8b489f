"""User input schemas for API requests."""

from pydantic import BaseModel, Field
from utils.config import MAX_NAME_LENGTH


class UserCreate(BaseModel):
    """Schema for registering the authenticated user.

    The email is not part of the body; it comes from the verified principal.

    Attributes:
        name (str): Display name of the user.

    Example:
        >>> user_data = UserCreate(name="Ada Lovelace")
    """

    name: str = Field("", max_length=MAX_NAME_LENGTH, description="Display name")
