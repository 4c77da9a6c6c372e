"""
GitHub REST API v3 adapter
"""
from typing import Any, Dict, List, Optional

from selfcore.core.access_token import GithubToken
from selfcore.core.config import get_settings
from selfcore.core.utils import path_segment, safe_get_nested
from selfcore.providers.base import IssueInfo, Operation, Provider, ProviderName, Request


class Github(Provider):
    """api.github.com: /repos/<owner>/<name>/..."""

    name = ProviderName.GITHUB
    token_class = GithubToken
    status_overrides = {
        # 204: the user already is a collaborator
        Operation.INVITE_COLLABORATOR: {201: True, 204: True, 404: False},
    }

    DEFAULT_PERMISSION = "push"

    @classmethod
    def default_api_uri(cls) -> str:
        return get_settings().github_api_url

    def repo_segments(self, owner: str, name: str) -> List[str]:
        return ["repos", path_segment(owner), path_segment(name)]

    def invite_request(self, owner: str, name: str, user: str, permission: Optional[str]) -> Request:
        uri = self.build_uri(*self.repo_segments(owner, name), "collaborators", path_segment(user))
        return "PUT", uri, {"permission": permission or self.DEFAULT_PERMISSION}

    def remove_collaborator_request(self, owner: str, name: str, user: str) -> Request:
        uri = self.build_uri(*self.repo_segments(owner, name), "collaborators", path_segment(user))
        return "DELETE", uri, None

    def collaborators_uri(self, owner: str, name: str) -> str:
        return self.build_uri(*self.repo_segments(owner, name), "collaborators")

    def issue_uri(self, owner: str, name: str, issue_id: Any) -> str:
        return self.build_uri(*self.repo_segments(owner, name), "issues", path_segment(issue_id))

    def open_issue_request(self, owner: str, name: str, title: str, body: str) -> Request:
        uri = self.build_uri(*self.repo_segments(owner, name), "issues")
        return "POST", uri, {"title": title, "body": body}

    def close_issue_request(self, owner: str, name: str, issue_id: Any) -> Request:
        return "PATCH", self.issue_uri(owner, name, issue_id), {"state": "closed"}

    def comment_request(self, owner: str, name: str, issue_id: Any, body: str) -> Request:
        return "POST", self.issue_uri(owner, name, issue_id) + "/comments", {"body": body}

    def describe_issue(self, data: Dict[str, Any]) -> IssueInfo:
        state = data.get("state", "open")
        return IssueInfo(
            issue_id=str(data.get("number")),
            title=data.get("title"),
            author=safe_get_nested(data, "user", "login"),
            state=state,
            closed=state == "closed",
        )
