"""Store configuration for pyaccounts."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyaccounts.exceptions import AccountStoreConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class AccountStoreConfig:
    """Store configuration.

    Parameters
    ----------
    strict_load : bool
        Reject load payloads that break the relational invariants
        (dangling parent mailbox, mailbox index entry without a mailbox,
        service listed under a mailbox that is not its parent).  When
        disabled such payloads are accepted and the offending entries are
        skipped during traversal.
    trace_load : bool
        Log every load payload at DEBUG level after redaction.
    trace_max_string : int
        Maximum length of any string in the load trace.  Avatar data URIs
        are the usual offenders.
    """

    strict_load: bool = True
    trace_load: bool = False
    trace_max_string: int = 256

    def __post_init__(self) -> None:
        if self.trace_max_string <= 0:
            raise AccountStoreConfigError(f"trace_max_string must be positive, got {self.trace_max_string}")

    @classmethod
    def from_env(cls, **overrides: Any) -> AccountStoreConfig:
        """Create configuration from environment variables.

        Reads ``PYACCOUNTS_STRICT_LOAD``, ``PYACCOUNTS_TRACE_LOAD`` and
        ``PYACCOUNTS_TRACE_MAX_STRING``.  Explicit keyword arguments
        override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        AccountStoreConfig
            Populated configuration.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        if "strict_load" not in overrides:
            config_kwargs["strict_load"] = _env_bool(env.get("PYACCOUNTS_STRICT_LOAD"), True)

        if "trace_load" not in overrides:
            config_kwargs["trace_load"] = _env_bool(env.get("PYACCOUNTS_TRACE_LOAD"), False)

        max_string_env = env.get("PYACCOUNTS_TRACE_MAX_STRING")
        if max_string_env is not None and "trace_max_string" not in overrides:
            try:
                config_kwargs["trace_max_string"] = int(max_string_env)
            except ValueError as exc:
                raise AccountStoreConfigError(
                    f"PYACCOUNTS_TRACE_MAX_STRING must be an integer, got {max_string_env!r}"
                ) from exc

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
