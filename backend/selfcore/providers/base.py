"""
Provider abstraction layer

Every Git host is one Provider variant. A variant only knows how to build
host-specific URIs and payloads and how to read the host's status codes;
the request/response cycle itself is shared:

    build request -> JsonResources call -> status table -> domain result
"""
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Type, Union

from pydantic import BaseModel, ConfigDict

from selfcore.core.access_token import AccessToken
from selfcore.core.errors import UnexpectedStatus
from selfcore.core.json_resources import HttpJsonResources, JsonBody, JsonResources, Resource
from selfcore.core.logging_config import LoggingConfig

logger = LoggingConfig.get_logger(__name__)

# (HTTP method, URI, JSON body or None)
Request = Tuple[str, str, Optional[JsonBody]]


class ProviderName(str, Enum):
    """Supported Git hosts"""
    GITHUB = "github"
    GITLAB = "gitlab"
    BITBUCKET = "bitbucket"


class Operation(str, Enum):
    """Provider operations, each with its own status table"""
    FETCH_REPO = "fetch_repo"
    LIST_COLLABORATORS = "list_collaborators"
    INVITE_COLLABORATOR = "invite_collaborator"
    REMOVE_COLLABORATOR = "remove_collaborator"
    FETCH_ISSUE = "fetch_issue"
    OPEN_ISSUE = "open_issue"
    CLOSE_ISSUE = "close_issue"
    COMMENT_ISSUE = "comment_issue"


# Status tables shared by all hosts; variants override single operations
DEFAULT_STATUS_TABLES: Dict[Operation, Dict[int, bool]] = {
    Operation.FETCH_REPO: {200: True, 404: False},
    Operation.LIST_COLLABORATORS: {200: True, 404: False},
    Operation.INVITE_COLLABORATOR: {201: True, 404: False},
    Operation.REMOVE_COLLABORATOR: {204: True, 404: False},
    Operation.FETCH_ISSUE: {200: True, 404: False},
    Operation.OPEN_ISSUE: {201: True},
    Operation.CLOSE_ISSUE: {200: True, 404: False},
    Operation.COMMENT_ISSUE: {201: True},
}


class IssueInfo(BaseModel):
    """Host-independent view of an issue payload"""

    model_config = ConfigDict(frozen=True)

    issue_id: str
    title: Optional[str] = None
    author: Optional[str] = None
    state: str
    closed: bool


class Provider(ABC):
    """
    Git hosting provider

    Instances are immutable: authenticated() returns a new provider bound to
    the given token, leaving the original untouched.
    """

    name: ClassVar[ProviderName]
    token_class: ClassVar[Type[AccessToken]] = AccessToken
    status_overrides: ClassVar[Dict[Operation, Dict[int, bool]]] = {}

    def __init__(self, resources: Optional[JsonResources] = None, api_uri: Optional[str] = None):
        self._resources = resources if resources is not None else HttpJsonResources()
        self.api_uri = (api_uri or self.default_api_uri()).rstrip("/")

    @classmethod
    @abstractmethod
    def default_api_uri(cls) -> str:
        """REST API root taken from settings"""
        pass

    @property
    def resources(self) -> JsonResources:
        return self._resources

    def authenticated(self, access_token: Union[str, AccessToken]) -> "Provider":
        """Return a provider whose calls carry the given token"""
        if not isinstance(access_token, AccessToken):
            access_token = self.token_class(value=access_token)
        return type(self)(self._resources.authenticated(access_token), self.api_uri)

    # ------------------------------------------------------------------ URIs

    def build_uri(self, *segments: Any) -> str:
        """Join already encoded path segments onto the API root"""
        return "/".join([self.api_uri, *(str(segment) for segment in segments)])

    @abstractmethod
    def repo_segments(self, owner: str, name: str) -> List[str]:
        """Path segments addressing a repository on this host"""
        pass

    def repo_uri(self, owner: str, name: str) -> str:
        return self.build_uri(*self.repo_segments(owner, name))

    # --------------------------------------------------------- status tables

    def status_table(self, operation: Operation) -> Dict[int, bool]:
        return self.status_overrides.get(operation, DEFAULT_STATUS_TABLES[operation])

    def interpret_status(self, operation: Operation, status_code: int, uri: str = "") -> bool:
        """
        Map a status code to the operation's outcome

        Raises:
            UnexpectedStatus: If the status is not in the operation's table
        """
        table = self.status_table(operation)
        if status_code in table:
            return table[status_code]
        logger.warning(
            f"{self.name.value}: unexpected status {status_code} for {operation.value} [{uri}]"
        )
        raise UnexpectedStatus(operation.value, status_code, uri)

    # ------------------------------------------------------------ transport

    def _execute(self, operation: Operation, request: Request) -> Tuple[bool, Resource]:
        method, uri, body = request
        call = getattr(self._resources, method.lower())
        resource = call(uri) if body is None else call(uri, body)
        return self.interpret_status(operation, resource.status_code, uri), resource

    # --------------------------------------------------- host-specific shape

    @abstractmethod
    def invite_request(self, owner: str, name: str, user: str, permission: Optional[str]) -> Request:
        pass

    @abstractmethod
    def remove_collaborator_request(self, owner: str, name: str, user: str) -> Request:
        pass

    @abstractmethod
    def collaborators_uri(self, owner: str, name: str) -> str:
        pass

    @abstractmethod
    def issue_uri(self, owner: str, name: str, issue_id: Any) -> str:
        pass

    @abstractmethod
    def open_issue_request(self, owner: str, name: str, title: str, body: str) -> Request:
        pass

    @abstractmethod
    def close_issue_request(self, owner: str, name: str, issue_id: Any) -> Request:
        pass

    @abstractmethod
    def comment_request(self, owner: str, name: str, issue_id: Any, body: str) -> Request:
        pass

    @abstractmethod
    def describe_issue(self, data: Dict[str, Any]) -> IssueInfo:
        """Read the host-specific issue payload"""
        pass

    def collaborators_from(self, resource: Resource) -> List[Any]:
        return resource.as_array()

    # ------------------------------------------------------------ operations

    def repo(self, owner: str, name: str):
        """Repo facade bound to this provider"""
        from selfcore.providers.facades import Repo

        return Repo(self, owner, name)

    def repo_json(self, owner: str, name: str) -> Optional[Dict[str, Any]]:
        """Repository payload, or None if the host does not know it"""
        found, resource = self._execute(
            Operation.FETCH_REPO, ("GET", self.repo_uri(owner, name), None)
        )
        return resource.as_object() if found else None

    def collaborators(self, owner: str, name: str) -> List[Any]:
        found, resource = self._execute(
            Operation.LIST_COLLABORATORS, ("GET", self.collaborators_uri(owner, name), None)
        )
        return self.collaborators_from(resource) if found else []

    def invite_collaborator(
        self,
        owner: str,
        name: str,
        user: str,
        permission: Optional[str] = None
    ) -> bool:
        """
        Invite a user to collaborate on a repository

        Returns:
            True if the invitation was sent or already exists, False if the
            user or the repository is unknown to the host

        Raises:
            UnexpectedStatus: For any status outside the invite table
        """
        invited, _ = self._execute(
            Operation.INVITE_COLLABORATOR,
            self.invite_request(owner, name, user, permission),
        )
        if invited:
            logger.info(f"{self.name.value}: invited {user} to {owner}/{name}")
        else:
            logger.info(f"{self.name.value}: could not invite {user} to {owner}/{name} (not found)")
        return invited

    def remove_collaborator(self, owner: str, name: str, user: str) -> bool:
        removed, _ = self._execute(
            Operation.REMOVE_COLLABORATOR,
            self.remove_collaborator_request(owner, name, user),
        )
        return removed

    def issue_json(self, owner: str, name: str, issue_id: Any) -> Optional[Dict[str, Any]]:
        found, resource = self._execute(
            Operation.FETCH_ISSUE, ("GET", self.issue_uri(owner, name, issue_id), None)
        )
        return resource.as_object() if found else None

    def open_issue(self, owner: str, name: str, title: str, body: str = "") -> Dict[str, Any]:
        _, resource = self._execute(
            Operation.OPEN_ISSUE, self.open_issue_request(owner, name, title, body)
        )
        return resource.as_object()

    def close_issue(self, owner: str, name: str, issue_id: Any) -> bool:
        closed, _ = self._execute(
            Operation.CLOSE_ISSUE, self.close_issue_request(owner, name, issue_id)
        )
        return closed

    def comment_issue(self, owner: str, name: str, issue_id: Any, body: str) -> Dict[str, Any]:
        _, resource = self._execute(
            Operation.COMMENT_ISSUE, self.comment_request(owner, name, issue_id, body)
        )
        return resource.as_object()

    def __repr__(self):
        return f"<{type(self).__name__}(api_uri={self.api_uri})>"
