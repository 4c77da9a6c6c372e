"""
Provider logins
"""
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field

from selfcore.models.user import User
from selfcore.providers.base import ProviderName
from selfcore.storage.base import Storage


class Login(BaseModel):
    """Identity and token obtained from a provider's OAuth flow"""

    model_config = ConfigDict(frozen=True)

    provider: ClassVar[ProviderName]

    username: str
    email: Optional[str] = None
    avatar: Optional[str] = None
    access_token: str = Field(repr=False)

    def sign_up(self, storage: Storage) -> User:
        """Register the user, or refresh its email, avatar and token"""
        return storage.users().register(
            self.username,
            self.provider.value,
            email=self.email,
            avatar=self.avatar,
            access_token=self.access_token,
        )


class GithubLogin(Login):
    provider: ClassVar[ProviderName] = ProviderName.GITHUB


class GitlabLogin(Login):
    provider: ClassVar[ProviderName] = ProviderName.GITLAB


class BitbucketLogin(Login):
    provider: ClassVar[ProviderName] = ProviderName.BITBUCKET
