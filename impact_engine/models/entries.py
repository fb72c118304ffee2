"""Cost and effect records as stored in a project's JSON columns.

Field names mirror the stored camelCase payload one-to-one so that records
already persisted by the portal keep parsing. Every unit-specific detail
record is optional; the unit token on the parent selects which one counts.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Optional

from .enums import CostUnit, EffectType, ValueUnit, parse_enum
from .parsing import as_mapping, as_text, optional_number, to_flag

_TEXT_FIELDS = {"timescale", "custom_unit"}


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _build(cls: type, raw: Any) -> Any:
    """Populate a flat detail dataclass from its camelCase mapping."""
    data = as_mapping(raw)
    values: dict[str, Any] = {}
    for f in fields(cls):
        stored = data.get(_camel(f.name))
        if f.name in _TEXT_FIELDS:
            values[f.name] = stored if isinstance(stored, str) else None
        else:
            values[f.name] = optional_number(stored)
    return cls(**values)


# ---------------------------------------------------------------------------
# Cost entries
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class HoursCostDetails:
    hours: Optional[float] = None
    hourly_rate: Optional[float] = None


@dataclass(frozen=True)
class FixedCostDetails:
    fixed_amount: Optional[float] = None


@dataclass(frozen=True)
class MonthlyCostDetails:
    monthly_amount: Optional[float] = None
    monthly_duration: Optional[float] = None


@dataclass(frozen=True)
class YearlyCostDetails:
    yearly_amount: Optional[float] = None
    yearly_duration: Optional[float] = None


@dataclass(frozen=True)
class CostEntry:
    """One line item of actual spend."""

    cost_unit: Optional[CostUnit]
    hours_details: HoursCostDetails = field(default_factory=HoursCostDetails)
    fixed_details: FixedCostDetails = field(default_factory=FixedCostDetails)
    monthly_details: MonthlyCostDetails = field(default_factory=MonthlyCostDetails)
    yearly_details: YearlyCostDetails = field(default_factory=YearlyCostDetails)
    cost_label: str = ""

    @classmethod
    def from_dict(cls, raw: Any) -> CostEntry:
        if isinstance(raw, CostEntry):
            return raw
        data = as_mapping(raw)
        return cls(
            cost_unit=parse_enum(CostUnit, data.get("costUnit")),
            hours_details=_build(HoursCostDetails, data.get("hoursDetails")),
            fixed_details=_build(FixedCostDetails, data.get("fixedDetails")),
            monthly_details=_build(MonthlyCostDetails, data.get("monthlyDetails")),
            yearly_details=_build(YearlyCostDetails, data.get("yearlyDetails")),
            cost_label=as_text(data.get("costLabel")),
        )


# ---------------------------------------------------------------------------
# Financial (absolute) sub-records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FinancialHoursDetails:
    affected_people: Optional[float] = None
    time_per_person: Optional[float] = None
    timescale: Optional[str] = None
    hourly_rate: Optional[float] = None
    hours: Optional[float] = None  # legacy explicit total


@dataclass(frozen=True)
class FinancialCurrencyDetails:
    amount: Optional[float] = None
    timescale: Optional[str] = None


@dataclass(frozen=True)
class FinancialPercentageDetails:
    percentage: Optional[float] = None
    base_value: Optional[float] = None
    timescale: Optional[str] = None


@dataclass(frozen=True)
class FinancialCountDetails:
    count: Optional[float] = None
    value_per_unit: Optional[float] = None
    timescale: Optional[str] = None


@dataclass(frozen=True)
class FinancialOtherDetails:
    custom_unit: Optional[str] = None
    amount: Optional[float] = None
    value_per_unit: Optional[float] = None
    timescale: Optional[str] = None


@dataclass(frozen=True)
class FinancialDetails:
    value_unit: Optional[ValueUnit]
    measurement_name: str = ""
    hours_details: FinancialHoursDetails = field(default_factory=FinancialHoursDetails)
    currency_details: FinancialCurrencyDetails = field(default_factory=FinancialCurrencyDetails)
    percentage_details: FinancialPercentageDetails = field(
        default_factory=FinancialPercentageDetails
    )
    count_details: FinancialCountDetails = field(default_factory=FinancialCountDetails)
    other_details: FinancialOtherDetails = field(default_factory=FinancialOtherDetails)
    annualization_years: Optional[float] = None

    @classmethod
    def from_dict(cls, raw: Any) -> FinancialDetails:
        data = as_mapping(raw)
        return cls(
            value_unit=parse_enum(ValueUnit, data.get("valueUnit")),
            measurement_name=as_text(data.get("measurementName")),
            hours_details=_build(FinancialHoursDetails, data.get("hoursDetails")),
            currency_details=_build(FinancialCurrencyDetails, data.get("currencyDetails")),
            percentage_details=_build(FinancialPercentageDetails, data.get("percentageDetails")),
            count_details=_build(FinancialCountDetails, data.get("countDetails")),
            other_details=_build(FinancialOtherDetails, data.get("otherDetails")),
            annualization_years=optional_number(data.get("annualizationYears")),
        )


# ---------------------------------------------------------------------------
# Redistribution (before/after) sub-records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RedistributionHoursDetails:
    affected_people: Optional[float] = None
    current_time_per_person: Optional[float] = None
    new_time_per_person: Optional[float] = None
    timescale: Optional[str] = None
    hourly_rate: Optional[float] = None
    current_hours: Optional[float] = None  # legacy explicit totals
    new_hours: Optional[float] = None


@dataclass(frozen=True)
class RedistributionCurrencyDetails:
    current_amount: Optional[float] = None
    new_amount: Optional[float] = None
    timescale: Optional[str] = None


@dataclass(frozen=True)
class RedistributionPercentageDetails:
    current_percentage: Optional[float] = None
    new_percentage: Optional[float] = None
    base_value: Optional[float] = None


@dataclass(frozen=True)
class RedistributionCountDetails:
    current_count: Optional[float] = None
    new_count: Optional[float] = None
    value_per_unit: Optional[float] = None
    timescale: Optional[str] = None


@dataclass(frozen=True)
class RedistributionOtherDetails:
    custom_unit: Optional[str] = None
    current_amount: Optional[float] = None
    new_amount: Optional[float] = None
    value_per_unit: Optional[float] = None
    timescale: Optional[str] = None


@dataclass(frozen=True)
class RedistributionDetails:
    value_unit: Optional[ValueUnit]
    resource_type: str = ""
    hours_details: RedistributionHoursDetails = field(default_factory=RedistributionHoursDetails)
    currency_details: RedistributionCurrencyDetails = field(
        default_factory=RedistributionCurrencyDetails
    )
    percentage_details: RedistributionPercentageDetails = field(
        default_factory=RedistributionPercentageDetails
    )
    count_details: RedistributionCountDetails = field(default_factory=RedistributionCountDetails)
    other_details: RedistributionOtherDetails = field(default_factory=RedistributionOtherDetails)
    annualization_years: Optional[float] = None

    @classmethod
    def from_dict(cls, raw: Any) -> RedistributionDetails:
        data = as_mapping(raw)
        return cls(
            value_unit=parse_enum(ValueUnit, data.get("valueUnit")),
            resource_type=as_text(data.get("resourceType")),
            hours_details=_build(RedistributionHoursDetails, data.get("hoursDetails")),
            currency_details=_build(RedistributionCurrencyDetails, data.get("currencyDetails")),
            percentage_details=_build(
                RedistributionPercentageDetails, data.get("percentageDetails")
            ),
            count_details=_build(RedistributionCountDetails, data.get("countDetails")),
            other_details=_build(RedistributionOtherDetails, data.get("otherDetails")),
            annualization_years=optional_number(data.get("annualizationYears")),
        )


# ---------------------------------------------------------------------------
# Effect entries
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class QualitativeDetails:
    factor: str = ""
    current_rating: Optional[float] = None
    target_rating: Optional[float] = None
    annualization_years: Optional[float] = None
    monetary_estimate: Optional[float] = None

    @classmethod
    def from_dict(cls, raw: Any) -> QualitativeDetails:
        data = as_mapping(raw)
        return cls(
            factor=as_text(data.get("factor")),
            current_rating=optional_number(data.get("currentRating")),
            target_rating=optional_number(data.get("targetRating")),
            annualization_years=optional_number(data.get("annualizationYears")),
            monetary_estimate=optional_number(data.get("monetaryEstimate")),
        )

    @property
    def is_complete(self) -> bool:
        return bool(self.factor) and self.current_rating is not None and self.target_rating is not None


@dataclass(frozen=True)
class QuantitativeDetails:
    effect_type: Optional[EffectType]
    financial_details: Optional[FinancialDetails] = None
    redistribution_details: Optional[RedistributionDetails] = None

    @classmethod
    def from_dict(cls, raw: Any) -> QuantitativeDetails:
        data = as_mapping(raw)
        financial = as_mapping(data.get("financialDetails"))
        redistribution = as_mapping(data.get("redistributionDetails"))
        return cls(
            effect_type=parse_enum(EffectType, data.get("effectType")),
            financial_details=FinancialDetails.from_dict(financial) if financial else None,
            redistribution_details=(
                RedistributionDetails.from_dict(redistribution) if redistribution else None
            ),
        )

    @property
    def is_complete(self) -> bool:
        """True when the record for the declared effect type is populated."""
        if self.effect_type is EffectType.FINANCIAL:
            return self.financial_details is not None
        if self.effect_type is EffectType.REDISTRIBUTION:
            return self.redistribution_details is not None
        return False


@dataclass(frozen=True)
class EffectEntry:
    """One reported outcome of a project, qualitative and/or quantitative."""

    value_dimension: str
    has_qualitative: bool = False
    has_quantitative: bool = False
    qualitative_details: Optional[QualitativeDetails] = None
    quantitative_details: Optional[QuantitativeDetails] = None
    effect_comment: str = ""

    @classmethod
    def from_dict(cls, raw: Any) -> EffectEntry:
        if isinstance(raw, EffectEntry):
            return raw
        if not isinstance(raw, dict):
            raise TypeError(f"Effect entry must be a mapping, got {type(raw).__name__}")
        qualitative = as_mapping(raw.get("qualitativeDetails"))
        quantitative = as_mapping(raw.get("quantitativeDetails"))
        return cls(
            value_dimension=as_text(raw.get("valueDimension")),
            has_qualitative=to_flag(raw.get("hasQualitative")),
            has_quantitative=to_flag(raw.get("hasQuantitative")),
            qualitative_details=QualitativeDetails.from_dict(qualitative) if qualitative else None,
            quantitative_details=(
                QuantitativeDetails.from_dict(quantitative) if quantitative else None
            ),
            effect_comment=as_text(raw.get("effectComment")),
        )

    @property
    def counts_qualitative(self) -> bool:
        return (
            self.has_qualitative
            and self.qualitative_details is not None
            and self.qualitative_details.is_complete
        )

    @property
    def counts_quantitative(self) -> bool:
        return (
            self.has_quantitative
            and self.quantitative_details is not None
            and self.quantitative_details.is_complete
        )
