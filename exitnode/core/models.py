"""Core Pydantic models for Exit Node Picker.
"""

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field


class ViewState(str, Enum):
    """States of the selection UI."""

    BROWSING_PRIMARY = "browsing_primary"
    BROWSING_SECONDARY = "browsing_secondary"
    FILTER_EDITING = "filter_editing"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        """Confirmed and cancelled accept no further input."""
        return self in (ViewState.CONFIRMED, ViewState.CANCELLED)


class DisplayShape(str, Enum):
    """How the choices are presented."""

    FLAT = "flat"
    DRILL_DOWN = "drill_down"
    TABLE = "table"


ANY_CITY = "Any"


class ExitNode(BaseModel):
    """One row of the exit node listing."""

    address: str
    hostname: str
    country: str
    city: str
    status: str = ""

    model_config = ConfigDict(frozen=True)

    @property
    def fields(self) -> Tuple[str, str, str, str]:
        """Ordered display fields."""
        return (self.address, self.hostname, self.country, self.city)

    @computed_field
    @property
    def label(self) -> str:
        """Human readable location."""
        return f"{self.country}, {self.city}"

    @property
    def target(self) -> str:
        """Value passed to the set command."""
        return self.address

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on country or city.

        ``query`` must already be lower-cased.
        """
        return query in self.country.lower() or query in self.city.lower()


class ApplyResult(BaseModel):
    """Outcome of one invocation of the set command."""

    target: str
    success: bool
    message: str = ""
    return_code: Optional[int] = None

    model_config = ConfigDict(frozen=True)


class AppliedChoice(BaseModel):
    """The last confirmed selection and what happened when applying it."""

    label: str
    success: bool = True
    message: str = ""

    model_config = ConfigDict(frozen=True)


class ExitNodeSummary(BaseModel):
    """Flattened exit node used by the CLI formatters."""

    ip: str = Field(alias="address")
    hostname: str
    country: str
    city: str

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_node(cls, node: ExitNode) -> "ExitNodeSummary":
        return cls(
            address=node.address,
            hostname=node.hostname,
            country=node.country,
            city=node.city,
        )
