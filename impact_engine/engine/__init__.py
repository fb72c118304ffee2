from .investment import compute_total_investment, cost_entry_amount
from .result import ROIMetrics, ROIOutcome, ScaledImpactResult, SensitivityReport
from .roi import ROIAggregator, ROICalculationError, calculate_roi, compute_roi_metrics
from .scaling import ScalingEngine, compute_scaled_impact
from .units import timescale_multiplier
from .valuation import calculate_annual_value, calculate_saved_amount

__all__ = [
    "ROIAggregator",
    "ROICalculationError",
    "ROIMetrics",
    "ROIOutcome",
    "ScaledImpactResult",
    "ScalingEngine",
    "SensitivityReport",
    "calculate_annual_value",
    "calculate_roi",
    "calculate_saved_amount",
    "compute_roi_metrics",
    "compute_scaled_impact",
    "compute_total_investment",
    "cost_entry_amount",
    "timescale_multiplier",
]
