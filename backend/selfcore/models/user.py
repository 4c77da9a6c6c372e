"""
User: someone who logged in to Self through a provider
"""
from typing import TYPE_CHECKING, List, Optional

from selfcore.providers import Provider, provider_for

if TYPE_CHECKING:
    from selfcore.models.project import Project
    from selfcore.storage.base import Storage


class User:
    """User identified by (username, provider)"""

    def __init__(
        self,
        username: str,
        provider: str,
        email: Optional[str],
        avatar: Optional[str],
        access_token: Optional[str],
        storage: "Storage"
    ):
        self.username = username
        self.provider_name = provider
        self.email = email
        self.avatar = avatar
        self._access_token = access_token
        self._storage = storage

    def provider(self) -> Provider:
        """The user's provider, authenticated with the user's token when there is one"""
        return provider_for(self.provider_name, self._storage.resources, self._access_token)

    def projects(self) -> List["Project"]:
        """Projects whose repositories are owned by this user"""
        return [
            project for project in self._storage.projects()
            if project.provider == self.provider_name
            and project.coordinates.owner == self.username
        ]

    def __eq__(self, other):
        return (
            isinstance(other, User)
            and other.username == self.username
            and other.provider_name == self.provider_name
        )

    def __hash__(self):
        return hash((self.username, self.provider_name))

    def __repr__(self):
        return f"<User(username={self.username}, provider={self.provider_name})>"
