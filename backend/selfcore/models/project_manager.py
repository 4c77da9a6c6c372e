"""
ProjectManager: the provider account Self uses to act on managed repositories
"""
from typing import TYPE_CHECKING, List

from selfcore.providers import Provider, provider_for

if TYPE_CHECKING:
    from selfcore.models.project import Project
    from selfcore.storage.base import Storage


class ProjectManager:
    """Project manager with its own provider access token"""

    def __init__(
        self,
        pm_id: int,
        user_id: str,
        username: str,
        provider: str,
        access_token: str,
        storage: "Storage"
    ):
        self.pm_id = pm_id
        self.user_id = user_id
        self.username = username
        self.provider_name = provider
        self._access_token = access_token
        self._storage = storage

    def provider(self) -> Provider:
        """The PM's provider, authenticated with the PM's token"""
        return provider_for(self.provider_name, self._storage.resources, self._access_token)

    def projects(self) -> List["Project"]:
        return self._storage.projects().assigned_to(self.pm_id)

    def __eq__(self, other):
        return isinstance(other, ProjectManager) and other.pm_id == self.pm_id

    def __hash__(self):
        return hash(self.pm_id)

    def __repr__(self):
        return f"<ProjectManager(id={self.pm_id}, username={self.username}, provider={self.provider_name})>"
