"""
Tests for GitLab collaborator invitations
"""
import json

import pytest

from selfcore.core.access_token import GitlabToken
from selfcore.core.errors import UnexpectedStatus
from selfcore.core.json_resources import JsonResponse
from selfcore.providers import Gitlab

MEMBERS_URI = "https://gitlab.com/api/v4/projects/amihaiemil%2Frepo/members"


def _invite(mock_resources, status_code, user_id="1234"):
    """Invite a user and check the request GitLab receives"""
    seen = []

    def handler(request):
        seen.append(request)
        return JsonResponse(status_code, json.dumps({}))

    provider = Gitlab(mock_resources(handler)).authenticated(GitlabToken(value="gitlab123"))
    result = provider.repo("amihaiemil", "repo").collaborators().invite(user_id, "30")

    request = seen[0]
    assert request.access_token.value == "gitlab123"
    assert request.method == "POST"
    assert request.body == {"user_id": user_id, "access_level": 30}
    assert request.uri == MEMBERS_URI
    return result


def test_sends_invitation_created(mock_resources):
    """A new invitation is sent (201 Created)"""
    assert _invite(mock_resources, 201) is True


def test_sends_invitation_conflict(mock_resources):
    """An existing invitation counts as success (409 Conflict)"""
    assert _invite(mock_resources, 409) is True


def test_sends_invitation_not_found(mock_resources):
    """Unknown user or repo gives False (404 Not Found)"""
    assert _invite(mock_resources, 404, user_id="534534") is False


def test_unexpected_status_is_raised(mock_resources):
    provider = Gitlab(mock_resources(status_code=500)).authenticated("gitlab123")

    with pytest.raises(UnexpectedStatus) as error:
        provider.repo("amihaiemil", "repo").collaborators().invite("1234", "30")

    assert error.value.status_code == 500
    assert error.value.uri == MEMBERS_URI


def test_access_level_names_and_default(mock_resources):
    resources = mock_resources(status_code=201)
    collaborators = Gitlab(resources).repo("amihaiemil", "repo").collaborators()

    collaborators.invite("1234", "maintainer")
    collaborators.invite("1234")

    assert resources.requests[0].body["access_level"] == 40
    assert resources.requests[1].body["access_level"] == 30


def test_unknown_access_level(mock_resources):
    collaborators = Gitlab(mock_resources(status_code=201)).repo("amihaiemil", "repo").collaborators()

    with pytest.raises(ValueError):
        collaborators.invite("1234", "superuser")


def test_remove_member(mock_resources):
    resources = mock_resources(status_code=204)
    collaborators = Gitlab(resources).repo("amihaiemil", "repo").collaborators()

    assert collaborators.remove("1234") is True
    assert resources.requests[0].method == "DELETE"
    assert resources.requests[0].uri == MEMBERS_URI + "/1234"


def test_list_members(mock_resources):
    members = [{"id": 1, "username": "mihai"}, {"id": 2, "username": "vlad"}]
    resources = mock_resources(status_code=200, body=members)

    listed = list(Gitlab(resources).repo("amihaiemil", "repo").collaborators())

    assert listed == members
    assert resources.requests[0].method == "GET"
    assert resources.requests[0].uri == MEMBERS_URI
