from .impact_orchestrator import ImpactOrchestrator

__all__ = ["ImpactOrchestrator"]
