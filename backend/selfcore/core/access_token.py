"""
Provider access tokens and the Authorization header each provider expects
"""
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


class AccessToken(BaseModel):
    """Opaque token issued by a provider for one session"""

    model_config = ConfigDict(frozen=True)

    scheme: ClassVar[str] = "Bearer"

    value: str = Field(repr=False)

    def header(self) -> str:
        """Value of the Authorization header"""
        return f"{self.scheme} {self.value}"


class GithubToken(AccessToken):
    scheme: ClassVar[str] = "token"


class GitlabToken(AccessToken):
    scheme: ClassVar[str] = "Bearer"


class BitbucketToken(AccessToken):
    scheme: ClassVar[str] = "Bearer"
