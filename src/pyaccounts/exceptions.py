"""Custom exception hierarchy for pyaccounts."""

from __future__ import annotations


class AccountStoreError(Exception):
    """Base exception for all pyaccounts errors."""


class AccountStoreConfigError(AccountStoreError):
    """Invalid or missing configuration."""


class AccountStoreDependencyError(AccountStoreError):
    """A required external provider has not been linked to the store.

    This is a wiring defect rather than a data problem: restriction,
    sleep and container queries need a user provider.
    """

    def __init__(self, message: str, *, dependency: str = "") -> None:
        self.dependency = dependency
        super().__init__(message)


class AccountPayloadError(AccountStoreError):
    """A load payload could not be turned into a snapshot.

    Raised for schema failures (wrapping the pydantic ``ValidationError``)
    and for relational violations such as a service whose parent mailbox
    is missing.  The store keeps its previous state when this is raised.
    """

    def __init__(self, message: str, *, entity_id: str = "") -> None:
        self.entity_id = entity_id
        super().__init__(message)
