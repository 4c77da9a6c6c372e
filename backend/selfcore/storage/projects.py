"""
In-memory projects
"""
import threading
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional, Union

from selfcore.core.errors import UnknownProjectManager
from selfcore.core.logging_config import LoggingConfig
from selfcore.models.project import Project
from selfcore.models.project_manager import ProjectManager
from selfcore.providers.facades import Repo, RepoCoordinates

if TYPE_CHECKING:
    from selfcore.storage.base import Storage

logger = LoggingConfig.get_logger(__name__)


class InMemoryProjects:
    """Projects with generated integer ids, starting at 1"""

    def __init__(self, storage: "Storage"):
        self._storage = storage
        self._projects: Dict[int, Project] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def register(self, repo: Union[Repo, RepoCoordinates], project_manager: ProjectManager) -> Project:
        """
        Register a repository as a project managed by the given PM

        Raises:
            UnknownProjectManager: If the PM is not stored
            ValueError: If the repository is already registered
                or hosted on another provider than the PM's
        """
        coordinates = repo.coordinates if isinstance(repo, Repo) else repo
        if self._storage.project_managers().get_by_id(project_manager.pm_id) is None:
            raise UnknownProjectManager(project_manager.pm_id)
        if project_manager.provider_name != coordinates.provider:
            raise ValueError(
                f"Repo {coordinates.provider}:{coordinates.full_name} cannot be managed by "
                f"a {project_manager.provider_name} project manager"
            )

        with self._lock:
            for project in self._projects.values():
                if project.coordinates == coordinates:
                    raise ValueError(
                        f"Repo {coordinates.provider}:{coordinates.full_name} is already registered"
                    )
            project = Project(self._next_id, coordinates, project_manager.pm_id, self._storage)
            self._projects[project.project_id] = project
            self._next_id += 1

        logger.info(
            f"Registered project {project.project_id} for {coordinates.provider}:{coordinates.full_name}"
        )
        return project

    def get_by_id(self, project_id: int) -> Optional[Project]:
        with self._lock:
            return self._projects.get(project_id)

    def get_by_repo(self, full_name: str, provider: str) -> Optional[Project]:
        with self._lock:
            for project in self._projects.values():
                if project.repo_full_name == full_name and project.provider == provider:
                    return project
        return None

    def assigned_to(self, pm_id: int) -> List[Project]:
        with self._lock:
            return [p for p in self._projects.values() if p.project_manager_id == pm_id]

    def all(self) -> List[Project]:
        with self._lock:
            return list(self._projects.values())

    def __iter__(self) -> Iterator[Project]:
        return iter(self.all())

    def __len__(self) -> int:
        with self._lock:
            return len(self._projects)
