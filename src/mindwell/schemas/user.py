# src/mindwell/schemas/user.py
"""Account profile schemas."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ProfileUpdate(BaseModel):
    """Schema for changing the caller's display name."""

    model_config = ConfigDict(str_strip_whitespace=True)

    display_name: str = Field(
        ...,
        min_length=3,
        max_length=50,
        validation_alias=AliasChoices("displayName", "display_name"),
    )


class ProfileResponse(BaseModel):
    """The caller's profile."""

    uid: str
    email: str | None = None
    display_name: str | None = Field(None, serialization_alias="displayName")
    handle: str


class ProfileUpdated(BaseModel):
    """Acknowledgement for a profile update."""

    message: str
    user: ProfileResponse
