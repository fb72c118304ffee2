from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Scaling validation caps
    max_roi: float = 1000.0
    min_cost_per_org: float = 50_000.0
    max_payback_years: float = 20.0

    # Largest organization count a scaling request may ask for
    max_orgs: int = 1000

    # Payback timeline assumptions
    orgs_per_year: int = 5
    fallback_benefit_years: float = 3.0

    # Heuristic warning thresholds
    warn_roi_above: float = 500.0
    warn_payback_above: float = 10.0
    warn_ratio_above: float = 5.0
    warn_orgs_above: int = 50

    log_level: str = "INFO"
    # Audit entries an orchestrator keeps in memory
    audit_log_size: int = 100

    # Project storage; both empty means the in-memory store
    supabase_url: str = ""
    supabase_key: str = ""
    projects_table: str = "projects"

    cors_origins: list[str] = ["http://localhost:3000"]

    class Config:
        env_file = ".env"
        env_prefix = "IMPACT_"


@lru_cache
def get_settings() -> Settings:
    return Settings()
