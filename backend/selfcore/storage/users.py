"""
In-memory users
"""
import threading
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional, Tuple

from selfcore.core.logging_config import LoggingConfig
from selfcore.models.user import User

if TYPE_CHECKING:
    from selfcore.storage.base import Storage

logger = LoggingConfig.get_logger(__name__)


class InMemoryUsers:
    """Users keyed by (username, provider)"""

    def __init__(self, storage: "Storage"):
        self._storage = storage
        self._users: Dict[Tuple[str, str], User] = {}
        self._lock = threading.Lock()

    def register(
        self,
        username: str,
        provider: str,
        email: Optional[str] = None,
        avatar: Optional[str] = None,
        access_token: Optional[str] = None
    ) -> User:
        """Register a user, or refresh email, avatar and token of an existing one"""
        user = User(username, provider, email, avatar, access_token, self._storage)
        with self._lock:
            existed = (username, provider) in self._users
            self._users[(username, provider)] = user
        if existed:
            logger.info(f"Updated user {username}@{provider}")
        else:
            logger.info(f"Registered new user {username}@{provider}")
        return user

    def user(self, username: str, provider: str) -> Optional[User]:
        with self._lock:
            return self._users.get((username, provider))

    def all(self) -> List[User]:
        with self._lock:
            return list(self._users.values())

    def __iter__(self) -> Iterator[User]:
        return iter(self.all())

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)
