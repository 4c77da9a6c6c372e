"""
Tests for the in-memory collections around contracts
"""
from decimal import Decimal

import pytest

from selfcore.core.errors import UnknownContract, UnknownProject, UnknownProjectManager
from selfcore.models import ContractRole
from selfcore.providers.facades import RepoCoordinates


def test_users_register_and_refresh(storage):
    users = storage.users()

    first = users.register("mihai", "github", email="m@example.com", access_token="t1")
    second = users.register("mihai", "github", email="new@example.com", access_token="t2")

    assert first == second
    assert len(users) == 1
    assert users.user("mihai", "github").email == "new@example.com"
    assert users.user("mihai", "gitlab") is None


def test_user_projects_are_owned_repos(storage, register_project):
    user = storage.users().register("amihaiemil", "github")
    project = register_project("repo")

    assert user.projects() == [project]


def test_project_managers(storage, project_manager):
    other = storage.project_managers().register("456", "selfgl", "gitlab", "gl-token")

    assert project_manager.pm_id == 1
    assert other.pm_id == 2
    assert storage.project_managers().get_by_id(2) == other
    assert storage.project_managers().pick("gitlab") == other
    assert storage.project_managers().pick("bitbucket") is None


def test_projects_get_sequential_ids(storage, project_manager, register_project):
    first = register_project("repo")
    second = register_project("other")

    assert (first.project_id, second.project_id) == (1, 2)
    assert storage.projects().get_by_repo("amihaiemil/other", "github") == second
    assert project_manager.projects() == [first, second]


def test_project_registered_twice(register_project):
    register_project("repo")

    with pytest.raises(ValueError):
        register_project("repo")


def test_project_on_other_provider_than_manager(storage, project_manager):
    gitlab_repo = RepoCoordinates(owner="amihaiemil", name="repo", provider="gitlab")

    with pytest.raises(ValueError):
        storage.projects().register(gitlab_repo, project_manager)

    assert len(storage.projects()) == 0


def test_project_registered_with_picked_manager(storage, project_manager):
    gitlab_manager = storage.project_managers().register("456", "selfgl", "gitlab", "gl-token")
    gitlab_repo = RepoCoordinates(owner="amihaiemil", name="repo", provider="gitlab")

    project = storage.projects().register(
        gitlab_repo, storage.project_managers().pick(gitlab_repo.provider)
    )
    project.repo().json()

    assert project.project_manager() == gitlab_manager
    request = storage.resources.requests[0]
    assert request.uri == "https://gitlab.com/api/v4/projects/amihaiemil%2Frepo"
    assert request.access_token.header() == "Bearer gl-token"


def test_project_needs_stored_manager(storage):
    from selfcore.models import ProjectManager

    stranger = ProjectManager(99, "999", "nobody", "github", "tok", storage)

    with pytest.raises(UnknownProjectManager):
        storage.projects().register(
            RepoCoordinates(owner="amihaiemil", name="repo", provider="github"), stranger
        )


def test_project_repo_uses_manager_token(storage, register_project):
    project = register_project("repo")

    assert project.repo().json() is None

    request = storage.resources.requests[0]
    assert request.uri == "https://api.github.com/repos/amihaiemil/repo"
    assert request.access_token.header() == "token pm-token"


def test_contributors_of_project(storage, register_project):
    project = register_project("repo")
    mihai = storage.contributors().register("mihai", "github")
    storage.contributors().register("vlad", "github")
    storage.contracts().add_contract(project.project_id, mihai, ContractRole.DEV)
    storage.contracts().add_contract(project.project_id, mihai, ContractRole.REV)

    assert storage.contributors().register("mihai", "github") is mihai
    assert project.contributors() == [mihai]
    assert mihai.contract(project.project_id, "REV").role == ContractRole.REV


def test_tasks_register(storage, register_project):
    project = register_project("repo")
    tasks = storage.tasks()

    task = tasks.register(project.project_id, 12)

    assert task.issue_id == "12"
    assert task.estimation == 60
    assert task.is_assigned is False
    assert tasks.register(project.project_id, "12") is task
    assert tasks.get_by_id(12, project.project_id) == task
    assert project.tasks() == [task]
    assert tasks.unassigned() == [task]
    with pytest.raises(UnknownProject):
        tasks.register(42, 1)


def test_tasks_assign_and_unassign(storage, register_project):
    project = register_project("repo")
    contributor = storage.contributors().register("mihai", "github")
    contract = storage.contracts().add_contract(project.project_id, contributor)
    task = storage.tasks().register(project.project_id, 7)

    assigned = storage.tasks().assign(task, contract, days=3)

    assert assigned.assignee() == contributor
    assert (assigned.deadline - assigned.assignment_date).days == 3
    assert contributor.tasks() == [assigned]
    assert contract.tasks() == [assigned]
    assert storage.tasks().unassigned() == []

    storage.tasks().unassign(assigned)

    assert storage.tasks().get_by_id(7, project.project_id).is_assigned is False
    assert contributor.tasks() == []


def test_assign_with_removed_contract(storage, register_project):
    project = register_project("repo")
    contributor = storage.contributors().register("mihai", "github")
    contract = storage.contracts().add_contract(project.project_id, contributor)
    task = storage.tasks().register(project.project_id, 7)
    storage.contracts().remove(contract)

    with pytest.raises(UnknownContract):
        storage.tasks().assign(task, contract)


def test_assign_contract_of_other_project(storage, register_project):
    project = register_project("repo")
    other = register_project("other")
    contributor = storage.contributors().register("mihai", "github")
    contract = storage.contracts().add_contract(other.project_id, contributor)
    task = storage.tasks().register(project.project_id, 7)

    with pytest.raises(ValueError):
        storage.tasks().assign(task, contract)


def test_assign_contract_in_other_role(storage, register_project):
    project = register_project("repo")
    contributor = storage.contributors().register("mihai", "github")
    contract = storage.contracts().add_contract(project.project_id, contributor, ContractRole.DEV)
    review = storage.tasks().register(project.project_id, 7, ContractRole.REV)

    with pytest.raises(ValueError):
        storage.tasks().assign(review, contract)

    assert storage.tasks().get_by_id(7, project.project_id).is_assigned is False
    assert contributor.tasks() == []


def test_invoices(storage, register_project):
    project = register_project("repo")
    contributor = storage.contributors().register("mihai", "github")
    contract = storage.contracts().add_contract(
        project.project_id, contributor, hourly_rate=Decimal("25")
    )
    first = storage.tasks().register(project.project_id, 1)
    second = storage.tasks().register(project.project_id, 2)

    invoice = storage.invoices().active(contract)
    invoice.register_task(first, Decimal("12.50"))
    invoice.register_task(second, Decimal("7.50"))

    assert storage.invoices().active(contract) is invoice
    assert invoice.total_amount() == Decimal("20.00")
    assert [t.task for t in invoice.tasks()] == [first.key, second.key]
    assert contract.invoices() == [invoice]
    assert invoice.contract() == contract

    invoice.pay()

    assert invoice.is_paid
    with pytest.raises(ValueError):
        invoice.register_task(first, Decimal("1"))
    with pytest.raises(ValueError):
        invoice.pay()
    assert storage.invoices().active(contract).invoice_id == 2


def test_invoice_rejects_task_of_other_project(storage, register_project):
    project = register_project("repo")
    other = register_project("other")
    contributor = storage.contributors().register("mihai", "github")
    contract = storage.contracts().add_contract(project.project_id, contributor)
    task = storage.tasks().register(other.project_id, 1)

    with pytest.raises(ValueError):
        storage.invoices().register(contract).register_task(task, Decimal("5"))


def test_invoice_for_unknown_contract(storage, register_project):
    project = register_project("repo")
    contributor = storage.contributors().register("mihai", "github")
    contract = storage.contracts().add_contract(project.project_id, contributor)
    storage.contracts().remove(contract.key)

    with pytest.raises(UnknownContract):
        storage.invoices().register(contract)
