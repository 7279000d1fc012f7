"""
Schémas de réponse d'action / Action result schemas.
Le tableau de bord suit `redirectURL` apres chaque mutation.
The dashboard follows `redirectURL` after every mutation.
"""

from pydantic import BaseModel, ConfigDict, Field


class MessageResult(BaseModel):
    """Succès / Success payload."""
    model_config = ConfigDict(populate_by_name=True)
    message: str
    redirect_url: str | None = Field(default=None, alias="redirectURL")


class ErrorResult(BaseModel):
    """Échec / Error payload."""
    model_config = ConfigDict(populate_by_name=True)
    error: str
    redirect_url: str | None = Field(default=None, alias="redirectURL")
