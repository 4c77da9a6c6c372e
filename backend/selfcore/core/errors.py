"""
Error taxonomy shared by the resource client, the provider adapters and the storage
"""
from typing import Any


class SelfCoreError(Exception):
    """Base class for every error raised by selfcore"""
    pass


class TransportFailure(SelfCoreError):
    """An HTTP call could not be completed (connection error, timeout, interruption)"""

    def __init__(self, method: str, uri: str, reason: str = ""):
        self.method = method
        self.uri = uri
        message = f"Couldn't {method} [{uri}]"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class MalformedBody(SelfCoreError):
    """A response body could not be decoded as the requested JSON shape"""
    pass


class UnexpectedStatus(SelfCoreError):
    """A provider answered with a status the operation's decision table does not cover"""

    def __init__(self, operation: str, status_code: int, uri: str = ""):
        self.operation = operation
        self.status_code = status_code
        self.uri = uri
        target = f" from [{uri}]" if uri else ""
        super().__init__(f"Unexpected status {status_code} for '{operation}'{target}")


class UnknownProvider(SelfCoreError):
    """No adapter is registered under the given provider name"""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown provider '{name}'")


class UnknownEntity(SelfCoreError):
    """A storage mutation referenced an entity that is not stored"""

    entity = "Entity"

    def __init__(self, identifier: Any):
        self.identifier = identifier
        super().__init__(f"{self.entity} {identifier} is not in storage")


class UnknownProject(UnknownEntity):
    entity = "Project"


class UnknownContributor(UnknownEntity):
    entity = "Contributor"


class UnknownContract(UnknownEntity):
    entity = "Contract"


class UnknownProjectManager(UnknownEntity):
    entity = "ProjectManager"
