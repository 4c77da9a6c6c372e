"""
GitLab REST API v4 adapter

GitLab addresses a project by its URL-encoded full path, so owner and name
travel as one segment: /projects/<owner>%2F<name>.
"""
from typing import Any, Dict, List, Optional

from selfcore.core.access_token import GitlabToken
from selfcore.core.config import get_settings
from selfcore.core.utils import path_segment, safe_get_nested
from selfcore.providers.base import IssueInfo, Operation, Provider, ProviderName, Request


class Gitlab(Provider):
    """gitlab.com/api/v4: /projects/<owner>%2F<name>/..."""

    name = ProviderName.GITLAB
    token_class = GitlabToken
    status_overrides = {
        # 409: the user is already a member
        Operation.INVITE_COLLABORATOR: {201: True, 409: True, 404: False},
    }

    ACCESS_LEVELS = {
        "guest": 10,
        "reporter": 20,
        "developer": 30,
        "maintainer": 40,
        "owner": 50,
    }
    DEFAULT_ACCESS_LEVEL = 30

    @classmethod
    def default_api_uri(cls) -> str:
        return get_settings().gitlab_api_url

    def repo_segments(self, owner: str, name: str) -> List[str]:
        return ["projects", path_segment(f"{owner}/{name}")]

    def access_level(self, permission: Optional[str]) -> int:
        """Numeric access level from a number ("30") or a role name ("developer")"""
        if permission is None or str(permission).strip() == "":
            return self.DEFAULT_ACCESS_LEVEL
        value = str(permission).strip()
        if value.isdigit():
            return int(value)
        try:
            return self.ACCESS_LEVELS[value.lower()]
        except KeyError:
            raise ValueError(f"Unknown GitLab access level '{permission}'")

    def invite_request(self, owner: str, name: str, user: str, permission: Optional[str]) -> Request:
        uri = self.build_uri(*self.repo_segments(owner, name), "members")
        return "POST", uri, {"user_id": user, "access_level": self.access_level(permission)}

    def remove_collaborator_request(self, owner: str, name: str, user: str) -> Request:
        uri = self.build_uri(*self.repo_segments(owner, name), "members", path_segment(user))
        return "DELETE", uri, None

    def collaborators_uri(self, owner: str, name: str) -> str:
        return self.build_uri(*self.repo_segments(owner, name), "members")

    def issue_uri(self, owner: str, name: str, issue_id: Any) -> str:
        return self.build_uri(*self.repo_segments(owner, name), "issues", path_segment(issue_id))

    def open_issue_request(self, owner: str, name: str, title: str, body: str) -> Request:
        uri = self.build_uri(*self.repo_segments(owner, name), "issues")
        return "POST", uri, {"title": title, "description": body}

    def close_issue_request(self, owner: str, name: str, issue_id: Any) -> Request:
        return "PUT", self.issue_uri(owner, name, issue_id), {"state_event": "close"}

    def comment_request(self, owner: str, name: str, issue_id: Any, body: str) -> Request:
        return "POST", self.issue_uri(owner, name, issue_id) + "/notes", {"body": body}

    def describe_issue(self, data: Dict[str, Any]) -> IssueInfo:
        state = data.get("state", "opened")
        return IssueInfo(
            issue_id=str(data.get("iid")),
            title=data.get("title"),
            author=safe_get_nested(data, "author", "username"),
            state=state,
            closed=state == "closed",
        )
