"""Per-request caller context passed explicitly to every service call."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RequestContext:
    """Identity of the caller on whose behalf a service call runs."""

    login: str
    request_id: str | None = None
