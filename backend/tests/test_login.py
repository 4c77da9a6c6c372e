"""
Tests for provider logins and the SelfCore entry point
"""
import pytest

from selfcore import BitbucketLogin, GithubLogin, GitlabLogin, SelfCore
from selfcore.core.logging_config import LoggingConfig, request_context
from selfcore.providers import Bitbucket, Github, Gitlab


@pytest.fixture
def self_core(storage):
    core = SelfCore(storage, configure_logging=False)
    yield core
    LoggingConfig.clear_context()


@pytest.mark.parametrize("login_class, provider_class, header", [
    (GithubLogin, Github, "token gh-token"),
    (GitlabLogin, Gitlab, "Bearer gh-token"),
    (BitbucketLogin, Bitbucket, "Bearer gh-token"),
])
def test_login_registers_user(self_core, storage, login_class, provider_class, header):
    login = login_class(
        username="mihai", email="m@example.com", avatar="https://a/1.png", access_token="gh-token"
    )

    user = self_core.login(login)

    assert storage.users().user("mihai", login_class.provider.value) == user
    assert user.email == "m@example.com"
    assert isinstance(user.provider(), provider_class)

    user.provider().repo_json("mihai", "repo")

    assert storage.resources.requests[0].access_token.header() == header


def test_login_again_refreshes_token(self_core, storage):
    self_core.login(GithubLogin(username="mihai", access_token="old"))
    user = self_core.login(GithubLogin(username="mihai", avatar="new.png", access_token="new"))

    user.provider().repo_json("mihai", "repo")

    assert len(storage.users()) == 1
    assert storage.users().user("mihai", "github").avatar == "new.png"
    assert storage.resources.requests[0].access_token.header() == "token new"


def test_login_sets_logging_context(self_core):
    self_core.login(GitlabLogin(username="vlad", access_token="tok"))

    assert request_context.get() == {"username": "vlad", "provider": "gitlab"}


def test_login_hides_token_in_repr():
    login = GithubLogin(username="mihai", access_token="secret-value")

    assert "secret-value" not in repr(login)


def test_close_clears_context(storage):
    with SelfCore(storage, configure_logging=False) as core:
        core.login(GithubLogin(username="mihai", access_token="tok"))

    assert request_context.get() == {}
