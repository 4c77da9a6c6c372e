"""
Storage of the domain objects
"""
from selfcore.storage.base import Storage
from selfcore.storage.contracts import ContractsView, InMemoryContracts
from selfcore.storage.in_memory import InMemoryStorage

__all__ = ["ContractsView", "InMemoryContracts", "InMemoryStorage", "Storage"]
