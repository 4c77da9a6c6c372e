"""
Invoice of a contract and the tasks invoiced on it

Values are recorded as given; no pricing rules are applied here.
"""
import threading
from datetime import datetime, timezone
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from pydantic import BaseModel, ConfigDict

from selfcore.models.contract import ContractKey
from selfcore.models.task import TaskKey

if TYPE_CHECKING:
    from selfcore.models.contract import Contract
    from selfcore.models.task import Task
    from selfcore.storage.base import Storage


class InvoicedTask(BaseModel):
    """A task recorded on an invoice with its value"""

    model_config = ConfigDict(frozen=True)

    invoice_id: int
    task: TaskKey
    value: Decimal
    invoiced_at: datetime


class Invoice:
    """Invoice; accepts tasks until it is paid"""

    def __init__(
        self,
        invoice_id: int,
        contract_key: ContractKey,
        created_at: datetime,
        storage: "Storage"
    ):
        self.invoice_id = invoice_id
        self.contract_key = contract_key
        self.created_at = created_at
        self._paid_at: Optional[datetime] = None
        self._tasks: List[InvoicedTask] = []
        self._storage = storage
        self._lock = threading.Lock()

    @property
    def paid_at(self) -> Optional[datetime]:
        return self._paid_at

    @property
    def is_paid(self) -> bool:
        return self._paid_at is not None

    def contract(self) -> Optional["Contract"]:
        return self._storage.contracts().find_by_id(self.contract_key)

    def register_task(self, task: "Task", value: Decimal) -> InvoicedTask:
        """
        Record a task on this invoice

        Raises:
            ValueError: If the invoice is paid or the task belongs to another project
        """
        if task.project_id != self.contract_key.project_id:
            raise ValueError(
                f"Task {task.issue_id} belongs to project {task.project_id}, "
                f"not to project {self.contract_key.project_id}"
            )
        with self._lock:
            if self._paid_at is not None:
                raise ValueError(f"Invoice {self.invoice_id} is already paid")
            invoiced = InvoicedTask(
                invoice_id=self.invoice_id,
                task=task.key,
                value=Decimal(value),
                invoiced_at=datetime.now(timezone.utc),
            )
            self._tasks.append(invoiced)
        return invoiced

    def tasks(self) -> List[InvoicedTask]:
        with self._lock:
            return list(self._tasks)

    def total_amount(self) -> Decimal:
        return sum((task.value for task in self.tasks()), Decimal("0"))

    def pay(self, paid_at: Optional[datetime] = None) -> None:
        with self._lock:
            if self._paid_at is not None:
                raise ValueError(f"Invoice {self.invoice_id} is already paid")
            self._paid_at = paid_at or datetime.now(timezone.utc)

    def __repr__(self):
        return f"<Invoice(id={self.invoice_id}, project_id={self.contract_key.project_id}, paid={self.is_paid})>"
