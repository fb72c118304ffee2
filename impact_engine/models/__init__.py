from .entries import (
    CostEntry,
    EffectEntry,
    FinancialDetails,
    QualitativeDetails,
    QuantitativeDetails,
    RedistributionDetails,
)
from .enums import CostUnit, DriverType, EffectType, ReplicationMode, RiskLevel, ValueUnit
from .project import ProjectSnapshot, merge_scaled_impact
from .scaling import NormalizationConfig, ReplicationConfig, ScalingInput, ValidationConfig

__all__ = [
    "CostEntry",
    "CostUnit",
    "DriverType",
    "EffectEntry",
    "EffectType",
    "FinancialDetails",
    "NormalizationConfig",
    "ProjectSnapshot",
    "QualitativeDetails",
    "QuantitativeDetails",
    "RedistributionDetails",
    "ReplicationConfig",
    "ReplicationMode",
    "RiskLevel",
    "ScalingInput",
    "ValidationConfig",
    "ValueUnit",
    "merge_scaled_impact",
]
