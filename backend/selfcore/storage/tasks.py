"""
In-memory tasks
"""
import threading
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional, Union

from selfcore.core.errors import UnknownContract, UnknownProject
from selfcore.core.logging_config import LoggingConfig
from selfcore.models.contract import Contract, ContractRole
from selfcore.models.contributor import as_contributor_id
from selfcore.models.task import Task, TaskKey

if TYPE_CHECKING:
    from selfcore.storage.base import Storage

logger = LoggingConfig.get_logger(__name__)


class InMemoryTasks:
    """Tasks keyed by (issue id, project id)"""

    DEFAULT_ESTIMATION = 60  # minutes
    DEFAULT_DAYS = 10

    def __init__(self, storage: "Storage"):
        self._storage = storage
        self._tasks: Dict[TaskKey, Task] = {}
        self._lock = threading.Lock()

    def register(
        self,
        project_id: int,
        issue_id,
        role: Union[str, ContractRole] = ContractRole.DEV,
        estimation: int = DEFAULT_ESTIMATION
    ) -> Task:
        """
        Register an issue of a project as a task

        Returns:
            The new task, or the stored one if the issue is already registered

        Raises:
            UnknownProject: If the project is not stored
        """
        if self._storage.projects().get_by_id(project_id) is None:
            raise UnknownProject(project_id)
        key = TaskKey(issue_id=str(issue_id), project_id=project_id)
        with self._lock:
            existing = self._tasks.get(key)
            if existing is not None:
                return existing
            task = Task(key, ContractRole(role), estimation, self._storage)
            self._tasks[key] = task
        logger.info(f"Registered task {key.issue_id} of project {project_id}")
        return task

    def get_by_id(self, issue_id, project_id: int) -> Optional[Task]:
        with self._lock:
            return self._tasks.get(TaskKey(issue_id=str(issue_id), project_id=project_id))

    def of_project(self, project_id: int) -> List[Task]:
        with self._lock:
            return [task for task in self._tasks.values() if task.project_id == project_id]

    def of_contributor(self, contributor_id) -> List[Task]:
        contributor_id = as_contributor_id(contributor_id)
        with self._lock:
            return [task for task in self._tasks.values() if task.assignee_id == contributor_id]

    def unassigned(self) -> List[Task]:
        with self._lock:
            return [task for task in self._tasks.values() if not task.is_assigned]

    def assign(self, task: Task, contract: Contract, days: int = DEFAULT_DAYS) -> Task:
        """
        Assign a task to the contributor of a contract

        Raises:
            UnknownContract: If the contract is not stored
            ValueError: If the contract is on another project or in another role,
                or the task is not stored
        """
        if self._storage.contracts().find_by_id(contract.key) is None:
            raise UnknownContract(contract.key)
        if contract.project_id != task.project_id:
            raise ValueError(
                f"Contract is on project {contract.project_id}, task {task.issue_id} "
                f"on project {task.project_id}"
            )
        if contract.role != task.role:
            raise ValueError(
                f"Task {task.issue_id} needs a {task.role.value} contract, "
                f"got a {contract.role.value} one"
            )
        now = datetime.now(timezone.utc)
        assigned = Task(
            task.key,
            task.role,
            task.estimation,
            self._storage,
            assignee=contract.contributor_id,
            assignment_date=now,
            deadline=now + timedelta(days=days),
        )
        self._replace(assigned)
        logger.info(f"Assigned task {task.issue_id} to {contract.contributor_id} for {days} days")
        return assigned

    def unassign(self, task: Task) -> Task:
        unassigned = Task(task.key, task.role, task.estimation, self._storage)
        self._replace(unassigned)
        logger.info(f"Unassigned task {task.issue_id} of project {task.project_id}")
        return unassigned

    def _replace(self, task: Task) -> None:
        with self._lock:
            if task.key not in self._tasks:
                raise ValueError(f"Task {task.issue_id} of project {task.project_id} is not stored")
            self._tasks[task.key] = task

    def all(self) -> List[Task]:
        with self._lock:
            return list(self._tasks.values())

    def __iter__(self) -> Iterator[Task]:
        return iter(self.all())

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)
