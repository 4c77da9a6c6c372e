"""
Git hosting providers
"""
from typing import Dict, Optional, Type, Union

from selfcore.core.access_token import AccessToken
from selfcore.core.errors import UnknownProvider
from selfcore.core.json_resources import JsonResources
from selfcore.providers.base import IssueInfo, Operation, Provider, ProviderName
from selfcore.providers.bitbucket import Bitbucket
from selfcore.providers.facades import Collaborators, Issue, Issues, Repo, RepoCoordinates
from selfcore.providers.github import Github
from selfcore.providers.gitlab import Gitlab

PROVIDERS: Dict[ProviderName, Type[Provider]] = {
    ProviderName.GITHUB: Github,
    ProviderName.GITLAB: Gitlab,
    ProviderName.BITBUCKET: Bitbucket,
}


def provider_for(
    name: Union[str, ProviderName],
    resources: Optional[JsonResources] = None,
    access_token: Optional[Union[str, AccessToken]] = None,
) -> Provider:
    """
    Build the adapter registered under a provider name

    Raises:
        UnknownProvider: If no adapter exists for the name
    """
    try:
        provider_class = PROVIDERS[ProviderName(str(getattr(name, "value", name)).lower())]
    except ValueError:
        raise UnknownProvider(str(name))
    provider = provider_class(resources)
    if access_token:
        provider = provider.authenticated(access_token)
    return provider


__all__ = [
    "Bitbucket",
    "Collaborators",
    "Github",
    "Gitlab",
    "Issue",
    "IssueInfo",
    "Issues",
    "Operation",
    "Provider",
    "ProviderName",
    "PROVIDERS",
    "Repo",
    "RepoCoordinates",
    "provider_for",
]
