"""
Domain objects
"""
from selfcore.models.contract import Contract, ContractKey, ContractRole
from selfcore.models.contributor import Contributor, ContributorId, as_contributor_id
from selfcore.models.invoice import Invoice, InvoicedTask
from selfcore.models.project import Project
from selfcore.models.project_manager import ProjectManager
from selfcore.models.task import Task, TaskKey
from selfcore.models.user import User

__all__ = [
    "Contract",
    "ContractKey",
    "ContractRole",
    "Contributor",
    "ContributorId",
    "Invoice",
    "InvoicedTask",
    "Project",
    "ProjectManager",
    "Task",
    "TaskKey",
    "User",
    "as_contributor_id",
]
