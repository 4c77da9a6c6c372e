"""
Task: an issue of a managed project, optionally assigned to a contributor
"""
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, ConfigDict

from selfcore.models.contract import ContractRole
from selfcore.models.contributor import ContributorId

if TYPE_CHECKING:
    from selfcore.models.contributor import Contributor
    from selfcore.models.project import Project
    from selfcore.storage.base import Storage


class TaskKey(BaseModel):
    """An issue id is unique within its project"""

    model_config = ConfigDict(frozen=True)

    issue_id: str
    project_id: int


class Task:
    """Task snapshot; assigning or unassigning stores a new Task"""

    def __init__(
        self,
        key: TaskKey,
        role: ContractRole,
        estimation: int,
        storage: "Storage",
        assignee: Optional[ContributorId] = None,
        assignment_date: Optional[datetime] = None,
        deadline: Optional[datetime] = None
    ):
        self._key = key
        self.role = ContractRole(role)
        self.estimation = estimation
        self.assignee_id = assignee
        self.assignment_date = assignment_date
        self.deadline = deadline
        self._storage = storage

    @property
    def key(self) -> TaskKey:
        return self._key

    @property
    def issue_id(self) -> str:
        return self._key.issue_id

    @property
    def project_id(self) -> int:
        return self._key.project_id

    @property
    def is_assigned(self) -> bool:
        return self.assignee_id is not None

    def project(self) -> Optional["Project"]:
        return self._storage.projects().get_by_id(self.project_id)

    def assignee(self) -> Optional["Contributor"]:
        if self.assignee_id is None:
            return None
        return self._storage.contributors().get_by_id(
            self.assignee_id.username, self.assignee_id.provider
        )

    def __eq__(self, other):
        return isinstance(other, Task) and other._key == self._key

    def __hash__(self):
        return hash(self._key)

    def __repr__(self):
        return (
            f"<Task(issue_id={self.issue_id}, project_id={self.project_id}, "
            f"role={self.role.value}, assignee={self.assignee_id})>"
        )
