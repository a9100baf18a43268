"""Filter states for the optional report dimensions."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator

from .params import DonorReference, ResolvedParams

# Reserved parameter values for the enumeration-backed filters
NO_DEFINED_VALUE = "No Defined Value"
ANY_DEFINED_VALUE = "Any Defined Value"


class FilterState(str, Enum):
    UNCONSTRAINED = "unconstrained"
    MUST_BE_UNSET = "must_be_unset"
    MUST_BE_SET = "must_be_set"
    EQUALS = "equals"


class FilterSpec(BaseModel):
    """One filter dimension: a state plus the value for EQUALS."""
    model_config = ConfigDict(frozen=True)

    state: FilterState = FilterState.UNCONSTRAINED
    value: Optional[str] = None

    @model_validator(mode="after")
    def check_value_matches_state(self) -> "FilterSpec":
        """Only EQUALS carries a value, and it always does."""
        if self.state == FilterState.EQUALS and self.value is None:
            raise ValueError("EQUALS filter requires a value")
        if self.state != FilterState.EQUALS and self.value is not None:
            raise ValueError(f"{self.state.value} filter takes no value")
        return self

    @classmethod
    def unconstrained(cls) -> "FilterSpec":
        return cls()

    @classmethod
    def must_be_unset(cls) -> "FilterSpec":
        return cls(state=FilterState.MUST_BE_UNSET)

    @classmethod
    def must_be_set(cls) -> "FilterSpec":
        return cls(state=FilterState.MUST_BE_SET)

    @classmethod
    def equals(cls, value: str) -> "FilterSpec":
        return cls(state=FilterState.EQUALS, value=value)

    @classmethod
    def from_param(cls, value: Optional[str]) -> "FilterSpec":
        """Interpret a parameter that may carry one of the reserved values."""
        if value is None:
            return cls.unconstrained()
        if value == NO_DEFINED_VALUE:
            return cls.must_be_unset()
        if value == ANY_DEFINED_VALUE:
            return cls.must_be_set()
        return cls.equals(value)

    @classmethod
    def exact_or_unconstrained(cls, value: Optional[str]) -> "FilterSpec":
        """Interpret a parameter that is always matched literally."""
        if value is None:
            return cls.unconstrained()
        return cls.equals(value)

    @property
    def is_active(self) -> bool:
        return self.state != FilterState.UNCONSTRAINED


class ReportFilters(BaseModel):
    """Every filter dimension of one report run."""
    model_config = ConfigDict(frozen=True)

    repo_id: int
    date_from: datetime
    date_to: datetime
    processing_status: FilterSpec = FilterSpec()
    processing_priority: FilterSpec = FilterSpec()
    classification: FilterSpec = FilterSpec()
    donor: Optional[DonorReference] = None

    def describe(self) -> dict:
        """Active filters as plain values (for logs and export metadata)."""
        described = {
            "repo_id": self.repo_id,
            "from": self.date_from.isoformat(),
            "to": self.date_to.isoformat(),
        }
        for name in ("processing_status", "processing_priority", "classification"):
            spec = getattr(self, name)
            if spec.is_active:
                described[name] = spec.value if spec.state == FilterState.EQUALS else spec.state.value
        if self.donor is not None:
            described["donor"] = self.donor.model_dump(mode="json")
        return described


def build_filters(params: ResolvedParams) -> ReportFilters:
    """Turn resolved parameters into one FilterSpec per dimension."""
    return ReportFilters(
        repo_id=params.repo_id,
        date_from=params.date_from,
        date_to=params.date_to,
        processing_status=FilterSpec.from_param(params.processing_status),
        processing_priority=FilterSpec.from_param(params.processing_priority),
        classification=FilterSpec.exact_or_unconstrained(params.classification),
        donor=params.donor,
    )
