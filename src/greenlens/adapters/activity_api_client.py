"""HTTP client for the GreenLens activity and emissions API."""

from dataclasses import dataclass

import httpx

from greenlens.adapters.activity_payloads import (
    ActivityInput,
    ActivityPayloadError,
    parse_activities,
    parse_period_emissions,
)
from greenlens.domain.activities import Activity, PeriodEmission
from greenlens.services.history import ActivityStore, PeriodEmissionsSource


@dataclass
class HttpxActivityApiClient(ActivityStore, PeriodEmissionsSource):
    """HTTPX-backed client for the activity store and period feed."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout: float = 15

    @classmethod
    def create(cls, base_url: str, timeout: float = 15) -> "HttpxActivityApiClient":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            timeout=timeout,
        )

    async def list_activities(
        self, limit: int = 1000, activity_type: str | None = None
    ) -> list[Activity]:
        """Fetch activities from the store, optionally of one type."""
        params: dict[str, str | int] = {"limit": limit}
        if activity_type:
            params["activityType"] = activity_type
        response = await self.http_client.get(
            f"{self.base_url}/activities",
            params=params,
            timeout=self.timeout,
        )
        response.raise_for_status()
        try:
            payload = response.json()
        except ValueError as exc:
            raise ActivityPayloadError(f"Invalid activity list: {exc}") from exc
        if not isinstance(payload, dict) or not payload.get("success"):
            return []
        rows = payload.get("activities") or payload.get("data") or []
        return parse_activities(rows)

    async def create_activity(self, activity: ActivityInput) -> Activity:
        """Create an activity and return the stored record."""
        response = await self.http_client.post(
            f"{self.base_url}/activities",
            json=activity.model_dump(mode="json", by_alias=True, exclude_none=True),
            timeout=self.timeout,
        )
        response.raise_for_status()
        payload = response.json()
        row = payload.get("activity") or payload.get("data") or payload
        return parse_activities([row])[0]

    async def delete_activity(self, activity_id: str) -> bool:
        """Delete an activity and report whether the store accepted it."""
        response = await self.http_client.delete(
            f"{self.base_url}/activities/{activity_id}",
            timeout=self.timeout,
        )
        response.raise_for_status()
        if response.status_code == httpx.codes.NO_CONTENT:
            return True
        try:
            payload = response.json()
        except ValueError:
            return False
        return isinstance(payload, dict) and bool(payload.get("success"))

    async def get_emissions_by_period(
        self, period: str = "day", days: int = 7
    ) -> list[PeriodEmission]:
        """Fetch pre-aggregated emissions per period."""
        response = await self.http_client.get(
            f"{self.base_url}/emissions/period",
            params={"period": period, "days": days},
            timeout=self.timeout,
        )
        response.raise_for_status()
        payload = response.json()
        if isinstance(payload, list):
            return parse_period_emissions(payload)
        data = payload.get("data") if payload.get("success") else None
        return parse_period_emissions(data if isinstance(data, list) else [])

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
