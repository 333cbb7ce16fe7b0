"""Language pair schema."""

from pydantic import BaseModel, ConfigDict, Field


class LanguagePair(BaseModel):
    """The user's source and target languages."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_language: str = Field(alias="fromLanguage", min_length=1)
    learning_language: str = Field(alias="learningLanguage", min_length=1)
