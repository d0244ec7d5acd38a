"""Domain models for usage events and aggregate usage statistics."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from core.constants import DEFAULT_PROVIDERS, DEFAULT_TASK_TYPE, UNKNOWN
from core.utils import get_current_timestamp


class UsageEvent(BaseModel):
    """A single model invocation reported by a client."""

    timestamp: str = Field(
        default_factory=get_current_timestamp, description="ISO8601 time of logging"
    )
    provider: str = Field(default=UNKNOWN, description="Provider name")
    model: str = Field(default=UNKNOWN, description="Model name")
    tokens_in: int = Field(default=0, description="Input tokens")
    tokens_out: int = Field(default=0, description="Output tokens")
    cost: float = Field(default=0.0, description="Actual cost in USD")
    task_type: str = Field(default=DEFAULT_TASK_TYPE, description="Task category")
    success: bool = Field(default=True, description="Whether the call succeeded")

    @property
    def total_tokens(self) -> int:
        return self.tokens_in + self.tokens_out


class UsageTotals(BaseModel):
    """Running totals for one aggregation bucket."""

    requests: int = 0
    tokens_in: int = 0
    tokens_out: int = 0
    cost: float = 0.0

    def add(self, event: UsageEvent) -> None:
        """Fold one event into the totals."""
        self.requests += 1
        self.tokens_in += event.tokens_in
        self.tokens_out += event.tokens_out
        self.cost += event.cost


class GrandTotals(UsageTotals):
    """Totals across every event, plus savings against the reference tier."""

    savings: float = 0.0


def _default_providers() -> dict[str, UsageTotals]:
    return {provider: UsageTotals() for provider in DEFAULT_PROVIDERS}


class AggregateStats(BaseModel):
    """Singleton record of aggregated usage.

    ``totals.requests`` equals the sum of requests over ``providers``, and
    independently over ``models`` and ``task_types``.
    """

    model_config = ConfigDict(populate_by_name=True)

    providers: dict[str, UsageTotals] = Field(default_factory=_default_providers)
    models: dict[str, UsageTotals] = Field(default_factory=dict)
    task_types: dict[str, UsageTotals] = Field(default_factory=dict)
    model_task_matrix: dict[str, dict[str, int]] = Field(default_factory=dict)
    daily: dict[str, UsageTotals] = Field(default_factory=dict)
    totals: GrandTotals = Field(default_factory=GrandTotals)
    last_updated: str = Field(
        default_factory=get_current_timestamp, alias="lastUpdated"
    )

    def to_record(self) -> dict[str, Any]:
        """Serialize with the persisted key names."""
        return self.model_dump(by_alias=True)
