"""
Storage interface

All domain collections are reached through one Storage object, so an
in-memory store and a durable one are interchangeable for callers.
"""
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from selfcore.core.json_resources import JsonResources

if TYPE_CHECKING:
    from selfcore.storage.contracts import InMemoryContracts
    from selfcore.storage.contributors import InMemoryContributors
    from selfcore.storage.invoices import InMemoryInvoices
    from selfcore.storage.project_managers import InMemoryProjectManagers
    from selfcore.storage.projects import InMemoryProjects
    from selfcore.storage.tasks import InMemoryTasks
    from selfcore.storage.users import InMemoryUsers


class Storage(ABC):
    """Entry point to every stored collection"""

    @property
    @abstractmethod
    def resources(self) -> JsonResources:
        """JSON client handed to the providers of stored users and project managers"""
        pass

    @abstractmethod
    def users(self) -> "InMemoryUsers":
        pass

    @abstractmethod
    def project_managers(self) -> "InMemoryProjectManagers":
        pass

    @abstractmethod
    def projects(self) -> "InMemoryProjects":
        pass

    @abstractmethod
    def contributors(self) -> "InMemoryContributors":
        pass

    @abstractmethod
    def contracts(self) -> "InMemoryContracts":
        pass

    @abstractmethod
    def tasks(self) -> "InMemoryTasks":
        pass

    @abstractmethod
    def invoices(self) -> "InMemoryInvoices":
        pass

    @abstractmethod
    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
