"""
Project: a repository managed by Self through one ProjectManager
"""
from typing import TYPE_CHECKING, List, Optional

from selfcore.providers.facades import RepoCoordinates

if TYPE_CHECKING:
    from selfcore.models.contributor import Contributor
    from selfcore.models.project_manager import ProjectManager
    from selfcore.models.task import Task
    from selfcore.providers.facades import Repo
    from selfcore.storage.base import Storage
    from selfcore.storage.contracts import ContractsView


class Project:
    """Registered project; contracts and tasks are live storage queries"""

    def __init__(
        self,
        project_id: int,
        coordinates: RepoCoordinates,
        project_manager_id: int,
        storage: "Storage"
    ):
        self._project_id = project_id
        self._coordinates = coordinates
        self._project_manager_id = project_manager_id
        self._storage = storage

    @property
    def project_id(self) -> int:
        return self._project_id

    @property
    def coordinates(self) -> RepoCoordinates:
        return self._coordinates

    @property
    def repo_full_name(self) -> str:
        return self._coordinates.full_name

    @property
    def provider(self) -> str:
        return self._coordinates.provider

    @property
    def project_manager_id(self) -> int:
        return self._project_manager_id

    def project_manager(self) -> Optional["ProjectManager"]:
        return self._storage.project_managers().get_by_id(self._project_manager_id)

    def repo(self) -> "Repo":
        """The project's repository, accessed with the project manager's token"""
        manager = self.project_manager()
        if manager is None:
            raise RuntimeError(f"Project {self._project_id} has no project manager")
        return manager.provider().repo(self._coordinates.owner, self._coordinates.name)

    def contracts(self) -> "ContractsView":
        return self._storage.contracts().of_project(self._project_id)

    def contributors(self) -> List["Contributor"]:
        return self._storage.contributors().of_project(self._project_id)

    def tasks(self) -> List["Task"]:
        return self._storage.tasks().of_project(self._project_id)

    def __eq__(self, other):
        return isinstance(other, Project) and other._project_id == self._project_id

    def __hash__(self):
        return hash(self._project_id)

    def __repr__(self):
        return f"<Project(id={self._project_id}, repo={self.provider}:{self.repo_full_name})>"
