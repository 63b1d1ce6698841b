"""Immutable configuration snapshot shared by every call of a client."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field

from ..base.resilience.backoff import DEFAULT_BACKOFF_POLICY, BackoffPolicy
from ..base.timeouts import TimeoutConfig, get_timeout_config
from .defaults import API_BASE
from .env import resolve_api_base, resolve_api_key, resolve_org_id


@dataclass(frozen=True)
class ClientConfig:
    """Read-only container for credentials, endpoint and retry policy.

    Never mutated after construction, so concurrent calls share it without
    synchronization. The ``with_*`` helpers return modified copies.
    """

    api_key: str = ""
    api_base: str = API_BASE
    org_id: str = ""
    backoff: BackoffPolicy = DEFAULT_BACKOFF_POLICY
    timeouts: TimeoutConfig = field(default_factory=TimeoutConfig)

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Build a snapshot from ``OPENAI_*`` environment variables."""
        return cls(
            api_key=resolve_api_key(),
            api_base=resolve_api_base(),
            org_id=resolve_org_id(),
            timeouts=get_timeout_config(),
        )

    def with_api_key(self, api_key: str) -> "ClientConfig":
        return dataclasses.replace(self, api_key=api_key)

    def with_org_id(self, org_id: str) -> "ClientConfig":
        return dataclasses.replace(self, org_id=org_id)

    def with_api_base(self, api_base: str) -> "ClientConfig":
        return dataclasses.replace(self, api_base=api_base)

    def with_backoff(self, backoff: BackoffPolicy) -> "ClientConfig":
        """Replace the retry schedule. Multipart submissions are never retried."""
        return dataclasses.replace(self, backoff=backoff)

    def with_timeouts(self, timeouts: TimeoutConfig) -> "ClientConfig":
        return dataclasses.replace(self, timeouts=timeouts)

    def __repr__(self) -> str:
        masked = f"{self.api_key[:3]}***" if self.api_key else ""
        return (
            f"ClientConfig(api_key={masked!r}, api_base={self.api_base!r}, "
            f"org_id={self.org_id!r}, backoff={self.backoff!r})"
        )


__all__ = ["ClientConfig"]
