"""
In-memory project managers
"""
import threading
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional

from selfcore.core.logging_config import LoggingConfig
from selfcore.models.project_manager import ProjectManager

if TYPE_CHECKING:
    from selfcore.storage.base import Storage

logger = LoggingConfig.get_logger(__name__)


class InMemoryProjectManagers:
    """Project managers with generated integer ids"""

    def __init__(self, storage: "Storage"):
        self._storage = storage
        self._managers: Dict[int, ProjectManager] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def register(self, user_id: str, username: str, provider: str, access_token: str) -> ProjectManager:
        with self._lock:
            manager = ProjectManager(
                self._next_id, user_id, username, provider, access_token, self._storage
            )
            self._managers[manager.pm_id] = manager
            self._next_id += 1
        logger.info(f"Registered project manager {username}@{provider} (id: {manager.pm_id})")
        return manager

    def get_by_id(self, pm_id: int) -> Optional[ProjectManager]:
        with self._lock:
            return self._managers.get(pm_id)

    def pick(self, provider: str) -> Optional[ProjectManager]:
        """First project manager registered for the provider"""
        with self._lock:
            for manager in self._managers.values():
                if manager.provider_name == provider:
                    return manager
        return None

    def all(self) -> List[ProjectManager]:
        with self._lock:
            return list(self._managers.values())

    def __iter__(self) -> Iterator[ProjectManager]:
        return iter(self.all())

    def __len__(self) -> int:
        with self._lock:
            return len(self._managers)
