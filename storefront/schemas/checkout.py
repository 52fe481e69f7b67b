from dataclasses import dataclass
from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from storefront.schemas.cart import CartLineItem


class CheckoutRequest(BaseModel):
    items: List[CartLineItem]
    total: float = Field(ge=0)
    name: str
    phone: str
    email: str

    @field_validator("name", "phone", "email")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v


@dataclass(frozen=True)
class Delivered:
    channel: str

    @property
    def delivered(self) -> bool:
        return True

    def describe(self) -> str:
        return f"Delivered via {self.channel}"


@dataclass(frozen=True)
class Failed:
    channel: str
    reason: str

    @property
    def delivered(self) -> bool:
        return False

    def describe(self) -> str:
        return f"Failed via {self.channel} ({self.reason})"


ChannelOutcome = Union[Delivered, Failed]


class ChannelOutcomeOut(BaseModel):
    channel: str
    delivered: bool
    reason: Optional[str] = None


class CheckoutResult(BaseModel):
    success: bool
    message: str
    outcomes: List[ChannelOutcomeOut] = Field(default_factory=list)

    @classmethod
    def from_outcomes(cls, outcomes: List[ChannelOutcome]) -> "CheckoutResult":
        return cls(
            success=any(o.delivered for o in outcomes),
            message=", ".join(o.describe() for o in outcomes),
            outcomes=[
                ChannelOutcomeOut(
                    channel=o.channel,
                    delivered=o.delivered,
                    reason=getattr(o, "reason", None),
                )
                for o in outcomes
            ],
        )
