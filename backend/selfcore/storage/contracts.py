"""
Contracts Index

One owned map of Contract records plus two derived lookups (project id ->
keys, contributor id -> keys). All three change together under one lock, so
a contract is visible from its project and its contributor at the same time
or not at all.

Every filter, whether called on the index or on a view it returned, is
computed against the complete index: views never narrow each other.
"""
import threading
from decimal import Decimal
from typing import TYPE_CHECKING, Dict, Iterable, Iterator, List, Optional, Union

from selfcore.core.errors import UnknownContributor, UnknownProject
from selfcore.core.logging_config import LoggingConfig
from selfcore.models.contract import Contract, ContractKey, ContractRole
from selfcore.models.contributor import ContributorId, as_contributor_id

if TYPE_CHECKING:
    from selfcore.storage.base import Storage

logger = LoggingConfig.get_logger(__name__)


class ContractsView:
    """Read-only snapshot of contracts taken at the moment of the query"""

    def __init__(self, index: "InMemoryContracts", contracts: Iterable[Contract]):
        self._index = index
        self._contracts = tuple(contracts)

    def of_project(self, project_id: int) -> "ContractsView":
        return self._index.of_project(project_id)

    def of_contributor(self, contributor_id) -> "ContractsView":
        return self._index.of_contributor(contributor_id)

    def of_role(self, role: Union[str, ContractRole]) -> "ContractsView":
        return self._index.of_role(role)

    def __iter__(self) -> Iterator[Contract]:
        return iter(self._contracts)

    def __len__(self) -> int:
        return len(self._contracts)

    def __contains__(self, contract) -> bool:
        return contract in self._contracts

    def __eq__(self, other):
        if isinstance(other, ContractsView):
            return self._contracts == other._contracts
        return NotImplemented

    def __repr__(self):
        return f"<ContractsView(size={len(self._contracts)})>"


class InMemoryContracts:
    """All contracts of the storage"""

    def __init__(self, storage: "Storage"):
        self._storage = storage
        self._contracts: Dict[ContractKey, Contract] = {}
        # Dicts with None values keep insertion order
        self._by_project: Dict[int, Dict[ContractKey, None]] = {}
        self._by_contributor: Dict[ContributorId, Dict[ContractKey, None]] = {}
        self._lock = threading.Lock()

    def add_contract(
        self,
        project_id: int,
        contributor_id,
        role: Union[str, ContractRole] = ContractRole.DEV,
        hourly_rate: Decimal = Decimal("0")
    ) -> Contract:
        """
        Register a contract

        Args:
            project_id: Id of a stored project
            contributor_id: ContributorId, Contributor or (username, provider) of a stored contributor
            role: Contract role (default: DEV)
            hourly_rate: Hourly rate recorded on the contract

        Returns:
            The new contract, or the existing one with the same key

        Raises:
            UnknownProject: If the project is not stored
            UnknownContributor: If the contributor is not stored
        """
        contributor_id = as_contributor_id(contributor_id)
        if self._storage.projects().get_by_id(project_id) is None:
            raise UnknownProject(project_id)
        if self._storage.contributors().get_by_id(
            contributor_id.username, contributor_id.provider
        ) is None:
            raise UnknownContributor(contributor_id)

        key = ContractKey(
            project_id=project_id,
            contributor_id=contributor_id,
            role=ContractRole(role),
        )
        with self._lock:
            existing = self._contracts.get(key)
            if existing is not None:
                return existing
            contract = Contract(key, hourly_rate, self._storage)
            self._contracts[key] = contract
            self._by_project.setdefault(project_id, {})[key] = None
            self._by_contributor.setdefault(contributor_id, {})[key] = None

        logger.info(
            f"Registered contract of {contributor_id} on project {project_id} as {key.role.value}"
        )
        return contract

    def remove(self, contract: Union[Contract, ContractKey]) -> bool:
        """Remove a contract from the index and both lookups; False if it was not stored"""
        key = contract.key if isinstance(contract, Contract) else contract
        with self._lock:
            if self._contracts.pop(key, None) is None:
                return False
            self._discard(self._by_project, key.project_id, key)
            self._discard(self._by_contributor, key.contributor_id, key)
        logger.info(f"Removed contract of {key.contributor_id} on project {key.project_id}")
        return True

    @staticmethod
    def _discard(lookup: Dict, lookup_key, key: ContractKey) -> None:
        keys = lookup.get(lookup_key)
        if keys is None:
            return
        keys.pop(key, None)
        if not keys:
            del lookup[lookup_key]

    def find_by_id(self, key: ContractKey) -> Optional[Contract]:
        with self._lock:
            return self._contracts.get(key)

    def of_project(self, project_id: int) -> ContractsView:
        with self._lock:
            keys = list(self._by_project.get(project_id, ()))
            return ContractsView(self, [self._contracts[key] for key in keys])

    def of_contributor(self, contributor_id) -> ContractsView:
        contributor_id = as_contributor_id(contributor_id)
        with self._lock:
            keys = list(self._by_contributor.get(contributor_id, ()))
            return ContractsView(self, [self._contracts[key] for key in keys])

    def of_role(self, role: Union[str, ContractRole]) -> ContractsView:
        role = ContractRole(role)
        with self._lock:
            return ContractsView(
                self, [contract for contract in self._contracts.values() if contract.role == role]
            )

    def all(self) -> List[Contract]:
        with self._lock:
            return list(self._contracts.values())

    def __iter__(self) -> Iterator[Contract]:
        return iter(self.all())

    def __len__(self) -> int:
        with self._lock:
            return len(self._contracts)
