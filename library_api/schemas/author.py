"""
Author Pydantic Schemas
"""

from pydantic import BaseModel, Field, field_validator


class AuthorBornUpdate(BaseModel):
    """
    Input for the editAuthor mutation.

    Sets the birth year of the author with exactly this name. The name
    is matched verbatim, surrounding whitespace included.
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Name of the author to edit",
        examples=["Fyodor Dostoevsky"],
    )

    born: int = Field(
        ...,
        description="Birth year to set",
        examples=[1821],
    )

    @field_validator("name")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("cannot be empty or whitespace")
        return v
