"""
Bitbucket Cloud REST API 2.0 adapter
"""
from typing import Any, Dict, List, Optional

from selfcore.core.access_token import BitbucketToken
from selfcore.core.config import get_settings
from selfcore.core.json_resources import Resource
from selfcore.core.utils import path_segment, safe_get_nested
from selfcore.providers.base import IssueInfo, Operation, Provider, ProviderName, Request


class Bitbucket(Provider):
    """api.bitbucket.org/2.0: /repositories/<workspace>/<slug>/..."""

    name = ProviderName.BITBUCKET
    token_class = BitbucketToken
    status_overrides = {
        # 200: permission updated, 201: permission granted
        Operation.INVITE_COLLABORATOR: {200: True, 201: True, 404: False},
        Operation.REMOVE_COLLABORATOR: {200: True, 204: True, 404: False},
    }

    DEFAULT_PERMISSION = "write"
    CLOSED_STATES = {"resolved", "closed", "invalid", "duplicate", "wontfix"}

    @classmethod
    def default_api_uri(cls) -> str:
        return get_settings().bitbucket_api_url

    def repo_segments(self, owner: str, name: str) -> List[str]:
        return ["repositories", path_segment(owner), path_segment(name)]

    def _user_permission_uri(self, owner: str, name: str, user: str) -> str:
        return self.build_uri(
            *self.repo_segments(owner, name), "permissions-config", "users", path_segment(user)
        )

    def invite_request(self, owner: str, name: str, user: str, permission: Optional[str]) -> Request:
        uri = self._user_permission_uri(owner, name, user)
        return "PUT", uri, {"permission": permission or self.DEFAULT_PERMISSION}

    def remove_collaborator_request(self, owner: str, name: str, user: str) -> Request:
        return "DELETE", self._user_permission_uri(owner, name, user), None

    def collaborators_uri(self, owner: str, name: str) -> str:
        return self.build_uri(*self.repo_segments(owner, name), "permissions-config", "users")

    def collaborators_from(self, resource: Resource) -> List[Any]:
        # Paginated: {"values": [...], "next": ...}
        return resource.as_object().get("values", [])

    def issue_uri(self, owner: str, name: str, issue_id: Any) -> str:
        return self.build_uri(*self.repo_segments(owner, name), "issues", path_segment(issue_id))

    def open_issue_request(self, owner: str, name: str, title: str, body: str) -> Request:
        uri = self.build_uri(*self.repo_segments(owner, name), "issues")
        return "POST", uri, {"title": title, "content": {"raw": body}}

    def close_issue_request(self, owner: str, name: str, issue_id: Any) -> Request:
        return "PUT", self.issue_uri(owner, name, issue_id), {"state": "resolved"}

    def comment_request(self, owner: str, name: str, issue_id: Any, body: str) -> Request:
        return "POST", self.issue_uri(owner, name, issue_id) + "/comments", {"content": {"raw": body}}

    def describe_issue(self, data: Dict[str, Any]) -> IssueInfo:
        state = data.get("state", "new")
        return IssueInfo(
            issue_id=str(data.get("id")),
            title=data.get("title"),
            author=safe_get_nested(data, "reporter", "nickname"),
            state=state,
            closed=state in self.CLOSED_STATES,
        )
