"""
Contract: one contributor working on one project in one role
"""
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from pydantic import BaseModel, ConfigDict

from selfcore.models.contributor import ContributorId

if TYPE_CHECKING:
    from selfcore.models.contributor import Contributor
    from selfcore.models.invoice import Invoice
    from selfcore.models.project import Project
    from selfcore.models.task import Task
    from selfcore.storage.base import Storage


class ContractRole(str, Enum):
    """Roles a contributor can be hired for"""
    DEV = "DEV"
    REV = "REV"
    QA = "QA"
    ARCH = "ARCH"
    PO = "PO"


class ContractKey(BaseModel):
    """Identity of a contract: a contributor holds at most one contract per project per role"""

    model_config = ConfigDict(frozen=True)

    project_id: int
    contributor_id: ContributorId
    role: ContractRole = ContractRole.DEV


class Contract:
    """
    Contract stored in the Contracts Index

    Contracts are never mutated; project and contributor are looked up in
    storage on every call.
    """

    def __init__(self, key: ContractKey, hourly_rate: Decimal, storage: "Storage"):
        self._key = key
        self._hourly_rate = Decimal(hourly_rate)
        self._storage = storage

    @property
    def key(self) -> ContractKey:
        return self._key

    @property
    def project_id(self) -> int:
        return self._key.project_id

    @property
    def contributor_id(self) -> ContributorId:
        return self._key.contributor_id

    @property
    def role(self) -> ContractRole:
        return self._key.role

    @property
    def hourly_rate(self) -> Decimal:
        return self._hourly_rate

    def project(self) -> Optional["Project"]:
        return self._storage.projects().get_by_id(self.project_id)

    def contributor(self) -> Optional["Contributor"]:
        return self._storage.contributors().get_by_id(
            self.contributor_id.username, self.contributor_id.provider
        )

    def tasks(self) -> List["Task"]:
        """Tasks of the project assigned to this contributor in this role"""
        return [
            task for task in self._storage.tasks().of_contributor(self.contributor_id)
            if task.project_id == self.project_id and task.role == self.role
        ]

    def invoices(self) -> List["Invoice"]:
        return self._storage.invoices().of_contract(self._key)

    def __eq__(self, other):
        return isinstance(other, Contract) and other._key == self._key

    def __hash__(self):
        return hash(self._key)

    def __repr__(self):
        return (
            f"<Contract(project_id={self.project_id}, "
            f"contributor={self.contributor_id.username}@{self.contributor_id.provider}, "
            f"role={self.role.value})>"
        )
