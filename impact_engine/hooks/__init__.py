from .audit_hooks import CalculationAudit, log_calculation

__all__ = ["CalculationAudit", "log_calculation"]
