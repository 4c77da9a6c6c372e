"""
Entry point of the platform core
"""
from selfcore.core.logging_config import LoggingConfig
from selfcore.models.user import User
from selfcore.services.login import Login
from selfcore.storage.base import Storage

logger = LoggingConfig.get_logger(__name__)


class SelfCore:
    """Logs users in and exposes the storage they work with"""

    def __init__(self, storage: Storage, configure_logging: bool = True):
        """
        Args:
            storage: Storage the platform works with
            configure_logging: Attach selfcore's handlers (see LoggingConfig.configure)
        """
        if configure_logging:
            LoggingConfig.configure()
        self.storage = storage

    def login(self, login: Login) -> User:
        """
        Sign up or refresh a user coming from a provider login

        Args:
            login: GithubLogin, GitlabLogin or BitbucketLogin

        Returns:
            The stored User, whose provider() is bound to the login's token
        """
        user = login.sign_up(self.storage)
        LoggingConfig.set_context(username=user.username, provider=user.provider_name)
        logger.info(f"User {user.username} logged in with {user.provider_name}")
        return user

    def close(self) -> None:
        LoggingConfig.clear_context()
        self.storage.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
