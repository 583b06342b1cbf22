from pydantic import AliasChoices, BaseModel, Field

from taskcal.core.db import JsonModel


class User(JsonModel):
    """User domain model with credentials."""

    username: str
    # bcrypt hash; older files stored it under "password"
    password_hash: str = Field(
        serialization_alias="passwordHash",
        validation_alias=AliasChoices("passwordHash", "password_hash", "password"),
    )


class UserView(BaseModel):
    """User account information (API representation)."""

    username: str = Field(..., description="Username")

    @classmethod
    def from_domain(cls, user: User) -> "UserView":
        """Create view model from domain model."""
        return cls(username=user.username)
