"""
selfcore: provider resource access and in-memory storage for the Self platform
"""
from selfcore.services.login import BitbucketLogin, GithubLogin, GitlabLogin, Login
from selfcore.services.self_core import SelfCore
from selfcore.storage import InMemoryStorage, Storage

__version__ = "0.1.0"

__all__ = [
    "BitbucketLogin",
    "GithubLogin",
    "GitlabLogin",
    "InMemoryStorage",
    "Login",
    "SelfCore",
    "Storage",
]
