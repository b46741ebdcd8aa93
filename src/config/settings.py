# src/config/settings.py
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.journal.settings import TagPatternSettings
from src.scoring.settings import DynamicRiskSettings, ScoreSettings


class SystemConfig(BaseModel):
    name: str = "Trading Score Engine"
    version: str = "1.0.0"


class DynamicRiskEnvConfig(BaseSettings):
    """Account risk overrides read from DYNAMIC_RISK_* environment variables."""

    model_config = SettingsConfigDict(env_prefix="DYNAMIC_RISK_")

    account_balance: Optional[float] = None
    risk_per_trade: Optional[float] = None
    enabled: Optional[bool] = None
    increased_risk_percentage: Optional[float] = None
    profit_threshold_percentage: Optional[float] = None

    def overrides(self) -> dict:
        """Values set in the environment, keyed by DynamicRiskSettings field."""
        values = self.model_dump(exclude_none=True)
        if "enabled" in values:
            values["dynamic_risk_enabled"] = values.pop("enabled")
        return values


class Settings(BaseModel):
    system: SystemConfig = Field(default_factory=SystemConfig)
    scoring: ScoreSettings = Field(default_factory=ScoreSettings)
    tag_patterns: TagPatternSettings = Field(default_factory=TagPatternSettings)
    dynamic_risk: DynamicRiskSettings = Field(default_factory=DynamicRiskSettings)

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from YAML file with env var overrides."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        dynamic_risk = DynamicRiskSettings(
            **{**(data.pop("dynamic_risk", None) or {}), **DynamicRiskEnvConfig().overrides()}
        )

        return cls(
            **data,
            dynamic_risk=dynamic_risk,
        )
