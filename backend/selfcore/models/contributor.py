"""
Contributor: a provider user who can be hired on projects
"""
from typing import TYPE_CHECKING, Any, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from selfcore.models.task import Task
    from selfcore.storage.base import Storage
    from selfcore.storage.contracts import ContractsView


class ContributorId(BaseModel):
    """A contributor is identified by username and provider"""

    model_config = ConfigDict(frozen=True)

    username: str
    provider: str

    def __str__(self):
        return f"{self.username}@{self.provider}"


def as_contributor_id(value: Union["ContributorId", "Contributor", Tuple[str, str], Any]) -> ContributorId:
    """Accept a ContributorId, a Contributor or a (username, provider) pair"""
    if isinstance(value, ContributorId):
        return value
    if isinstance(value, Contributor):
        return value.contributor_id
    if isinstance(value, tuple) and len(value) == 2:
        return ContributorId(username=value[0], provider=value[1])
    raise TypeError(f"Cannot read a contributor id from {value!r}")


class Contributor:
    """Contributor stored in Self; contracts and tasks are live storage queries"""

    def __init__(self, username: str, provider: str, storage: "Storage"):
        self._id = ContributorId(username=username, provider=provider)
        self._storage = storage

    @property
    def contributor_id(self) -> ContributorId:
        return self._id

    @property
    def username(self) -> str:
        return self._id.username

    @property
    def provider(self) -> str:
        return self._id.provider

    def contracts(self) -> "ContractsView":
        return self._storage.contracts().of_contributor(self._id)

    def contract(self, project_id: int, role: Optional[str] = None):
        """This contributor's contract on a project (first one if role is None)"""
        for contract in self.contracts():
            if contract.project_id == project_id and (role is None or contract.role == role):
                return contract
        return None

    def tasks(self) -> List["Task"]:
        return self._storage.tasks().of_contributor(self._id)

    def __eq__(self, other):
        return isinstance(other, Contributor) and other._id == self._id

    def __hash__(self):
        return hash(self._id)

    def __repr__(self):
        return f"<Contributor({self._id})>"
