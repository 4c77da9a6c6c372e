"""
In-memory invoices
"""
import threading
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional

from selfcore.core.errors import UnknownContract
from selfcore.core.logging_config import LoggingConfig
from selfcore.models.contract import Contract, ContractKey
from selfcore.models.invoice import Invoice

if TYPE_CHECKING:
    from selfcore.storage.base import Storage

logger = LoggingConfig.get_logger(__name__)


class InMemoryInvoices:
    """Invoices with generated integer ids"""

    def __init__(self, storage: "Storage"):
        self._storage = storage
        self._invoices: Dict[int, Invoice] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def register(self, contract: Contract) -> Invoice:
        """
        Open a new invoice for a contract

        Raises:
            UnknownContract: If the contract is not stored
        """
        if self._storage.contracts().find_by_id(contract.key) is None:
            raise UnknownContract(contract.key)
        with self._lock:
            invoice = Invoice(
                self._next_id, contract.key, datetime.now(timezone.utc), self._storage
            )
            self._invoices[invoice.invoice_id] = invoice
            self._next_id += 1
        logger.info(f"Registered invoice {invoice.invoice_id} for project {contract.project_id}")
        return invoice

    def get_by_id(self, invoice_id: int) -> Optional[Invoice]:
        with self._lock:
            return self._invoices.get(invoice_id)

    def of_contract(self, contract_key: ContractKey) -> List[Invoice]:
        with self._lock:
            return [i for i in self._invoices.values() if i.contract_key == contract_key]

    def active(self, contract: Contract) -> Invoice:
        """Latest unpaid invoice of the contract, opened on demand"""
        unpaid = [invoice for invoice in self.of_contract(contract.key) if not invoice.is_paid]
        if unpaid:
            return unpaid[-1]
        return self.register(contract)

    def all(self) -> List[Invoice]:
        with self._lock:
            return list(self._invoices.values())

    def __iter__(self) -> Iterator[Invoice]:
        return iter(self.all())

    def __len__(self) -> int:
        with self._lock:
            return len(self._invoices)
