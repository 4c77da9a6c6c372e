"""
In-memory contributors
"""
import threading
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional

from selfcore.core.logging_config import LoggingConfig
from selfcore.models.contributor import Contributor, ContributorId

if TYPE_CHECKING:
    from selfcore.storage.base import Storage

logger = LoggingConfig.get_logger(__name__)


class InMemoryContributors:
    """Contributors keyed by (username, provider)"""

    def __init__(self, storage: "Storage"):
        self._storage = storage
        self._contributors: Dict[ContributorId, Contributor] = {}
        self._lock = threading.Lock()

    def register(self, username: str, provider: str) -> Contributor:
        """Register a contributor; registering twice returns the stored one"""
        key = ContributorId(username=username, provider=provider)
        with self._lock:
            contributor = self._contributors.get(key)
            if contributor is not None:
                return contributor
            contributor = Contributor(username, provider, self._storage)
            self._contributors[key] = contributor
        logger.info(f"Registered contributor {key}")
        return contributor

    def get_by_id(self, username: str, provider: str) -> Optional[Contributor]:
        with self._lock:
            return self._contributors.get(ContributorId(username=username, provider=provider))

    def of_project(self, project_id: int) -> List[Contributor]:
        """Contributors holding at least one contract on the project"""
        seen = {}
        for contract in self._storage.contracts().of_project(project_id):
            seen.setdefault(contract.contributor_id, None)
        with self._lock:
            return [self._contributors[key] for key in seen if key in self._contributors]

    def all(self) -> List[Contributor]:
        with self._lock:
            return list(self._contributors.values())

    def __iter__(self) -> Iterator[Contributor]:
        return iter(self.all())

    def __len__(self) -> int:
        with self._lock:
            return len(self._contributors)
