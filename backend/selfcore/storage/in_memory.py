"""
In-memory Storage
"""
from typing import Optional

from selfcore.core.json_resources import HttpJsonResources, JsonResources
from selfcore.core.logging_config import LoggingConfig
from selfcore.storage.base import Storage
from selfcore.storage.contracts import InMemoryContracts
from selfcore.storage.contributors import InMemoryContributors
from selfcore.storage.invoices import InMemoryInvoices
from selfcore.storage.project_managers import InMemoryProjectManagers
from selfcore.storage.projects import InMemoryProjects
from selfcore.storage.tasks import InMemoryTasks
from selfcore.storage.users import InMemoryUsers

logger = LoggingConfig.get_logger(__name__)


class InMemoryStorage(Storage):
    """Storage keeping every collection in process memory"""

    def __init__(self, resources: Optional[JsonResources] = None):
        self._resources = resources if resources is not None else HttpJsonResources()
        self._users = InMemoryUsers(self)
        self._project_managers = InMemoryProjectManagers(self)
        self._projects = InMemoryProjects(self)
        self._contributors = InMemoryContributors(self)
        self._contracts = InMemoryContracts(self)
        self._tasks = InMemoryTasks(self)
        self._invoices = InMemoryInvoices(self)

    @property
    def resources(self) -> JsonResources:
        return self._resources

    def users(self) -> InMemoryUsers:
        return self._users

    def project_managers(self) -> InMemoryProjectManagers:
        return self._project_managers

    def projects(self) -> InMemoryProjects:
        return self._projects

    def contributors(self) -> InMemoryContributors:
        return self._contributors

    def contracts(self) -> InMemoryContracts:
        return self._contracts

    def tasks(self) -> InMemoryTasks:
        return self._tasks

    def invoices(self) -> InMemoryInvoices:
        return self._invoices

    def close(self) -> None:
        # Nothing to release
        logger.debug("In-memory storage closed")
