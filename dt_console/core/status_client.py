"""
Remote status client.

Fetches the platform status document and parses it into a StatusSnapshot.
No retry is done here, the poller simply tries again on its next tick.
"""

from typing import Any

from aiohttp import ClientError, ClientSession

from dt_console import config
from dt_console.core.exceptions import FetchError
from dt_console.core.models import ComponentStatus, Indicator, StatusSnapshot

CLASSIFICATIONS = {
    Indicator.NONE: "operational",
    Indicator.MINOR: "minor",
    Indicator.MAJOR: "major",
    Indicator.CRITICAL: "critical",
}


def classify(indicator: Any) -> str:
    """Map an indicator (enum or raw value) to its display classification."""
    return CLASSIFICATIONS.get(Indicator.parse(indicator), "unknown")


def parse_status(data: Any) -> StatusSnapshot:
    if not isinstance(data, dict) or not isinstance(data.get("status"), dict):
        raise FetchError("Malformed status document: missing status")
    status = data["status"]
    components = data.get("components") or []
    if not isinstance(components, list):
        raise FetchError("Malformed status document: components is not a list")
    return StatusSnapshot(
        indicator=Indicator.parse(status.get("indicator")),
        description=status.get("description") or "",
        components=tuple(
            ComponentStatus(name=str(c.get("name", "")), status=str(c.get("status", "")))
            for c in components
            if isinstance(c, dict)
        ),
    )


class StatusClient:
    """Fetches the status document from the configured endpoint."""

    def __init__(self, session: ClientSession, endpoint: str | None = None):
        self.session = session
        self.endpoint = endpoint or config.STATUS_ENDPOINT

    async def fetch_status(self) -> StatusSnapshot:
        """
        Fetch and parse the current status.

        Raises:
            FetchError: on transport failure, non-success HTTP status or unparseable body
        """
        try:
            async with self.session.get(self.endpoint) as res:
                if not res.ok:
                    raise FetchError(f"Failed to fetch status: HTTP {res.status}")
                try:
                    data = await res.json(content_type=None)
                except ValueError as e:
                    raise FetchError("Failed to fetch status: invalid JSON body") from e
        except ClientError as e:
            raise FetchError(f"Failed to fetch status: {e}") from e
        except TimeoutError as e:
            raise FetchError("Failed to fetch status: request timed out") from e
        return parse_status(data)
