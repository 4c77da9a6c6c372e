"""
Repo, Collaborators and Issues facades

Thin views with a fixed owner/name context; every call is delegated to the
bound Provider. No local state, no caching.
"""
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional

from pydantic import BaseModel, ConfigDict

from selfcore.providers.base import IssueInfo

if TYPE_CHECKING:
    from selfcore.providers.base import Provider


class RepoCoordinates(BaseModel):
    """Location of a repository: owner, name and provider"""

    model_config = ConfigDict(frozen=True)

    owner: str
    name: str
    provider: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


class Repo:
    """A repository on a provider"""

    def __init__(self, provider: "Provider", owner: str, name: str):
        self._provider = provider
        self.owner = owner
        self.name = name

    @property
    def provider(self) -> "Provider":
        return self._provider

    @property
    def coordinates(self) -> RepoCoordinates:
        return RepoCoordinates(owner=self.owner, name=self.name, provider=self._provider.name.value)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    def json(self) -> Optional[Dict[str, Any]]:
        """Repository payload as returned by the provider (None if not found)"""
        return self._provider.repo_json(self.owner, self.name)

    def collaborators(self) -> "Collaborators":
        return Collaborators(self)

    def issues(self) -> "Issues":
        return Issues(self)

    def __repr__(self):
        return f"<Repo({self._provider.name.value}:{self.full_name})>"


class Collaborators:
    """Collaborators of one repository"""

    def __init__(self, repo: Repo):
        self.repo = repo

    def invite(self, user: str, permission: Optional[str] = None) -> bool:
        """
        Invite a user to the repository

        Args:
            user: Provider-specific user reference (username or numeric user id)
            permission: Provider-specific permission or access level

        Returns:
            True if invited or already invited, False if user or repo are not found
        """
        return self.repo.provider.invite_collaborator(
            self.repo.owner, self.repo.name, user, permission
        )

    def remove(self, user: str) -> bool:
        return self.repo.provider.remove_collaborator(self.repo.owner, self.repo.name, user)

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        return iter(self.repo.provider.collaborators(self.repo.owner, self.repo.name))


class Issue:
    """One issue, read from its provider payload"""

    def __init__(self, repo: Repo, data: Dict[str, Any]):
        self.repo = repo
        self._data = data
        self._info: IssueInfo = repo.provider.describe_issue(data)

    @property
    def issue_id(self) -> str:
        return self._info.issue_id

    @property
    def title(self) -> Optional[str]:
        return self._info.title

    @property
    def author(self) -> Optional[str]:
        return self._info.author

    @property
    def state(self) -> str:
        return self._info.state

    @property
    def is_closed(self) -> bool:
        return self._info.closed

    def json(self) -> Dict[str, Any]:
        return dict(self._data)

    def close(self) -> bool:
        return self.repo.provider.close_issue(self.repo.owner, self.repo.name, self.issue_id)

    def comment(self, body: str) -> Dict[str, Any]:
        return self.repo.provider.comment_issue(self.repo.owner, self.repo.name, self.issue_id, body)

    def __repr__(self):
        return f"<Issue({self.repo.full_name}#{self.issue_id}, state={self.state})>"


class Issues:
    """Issues of one repository"""

    def __init__(self, repo: Repo):
        self.repo = repo

    def get_by_id(self, issue_id: Any) -> Optional[Issue]:
        data = self.repo.provider.issue_json(self.repo.owner, self.repo.name, issue_id)
        return Issue(self.repo, data) if data is not None else None

    def open(self, title: str, body: str = "") -> Issue:
        data = self.repo.provider.open_issue(self.repo.owner, self.repo.name, title, body)
        return Issue(self.repo, data)

    def __repr__(self):
        return f"<Issues({self.repo.full_name})>"
