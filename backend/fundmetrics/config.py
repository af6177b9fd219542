# backend/fundmetrics/config.py
"""
Library configuration using Pydantic Settings.

Loads configuration from environment variables with validation:
- ENVIRONMENT: Runtime mode (development, test, production)
- LOG_LEVEL / LOG_FORMAT: Logging behaviour
- RISK_FREE_RATE, MARKET_RETURN, TRADING_DAYS_PER_YEAR: Market assumptions
- SIP_*, MIN_*_DATA_POINTS: Calculator thresholds

Every value has a default taken from `fundmetrics.services.constants`, so the
library works with no environment at all. Invalid configuration raises a
ValueError with a descriptive message when the settings object is created.

Usage:
    from fundmetrics.config import settings

    rate = settings.risk_free_rate

    # Or build an isolated instance (tests)
    service = FundAnalyticsService(Settings(risk_free_rate=7.0))
"""
from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fundmetrics.services.constants import (
    DEFAULT_MARKET_RETURN,
    DEFAULT_RISK_FREE_RATE,
    DEFAULT_SIP_AMOUNT,
    DEFAULT_SIP_ANALYSIS_MONTHS,
    DEFAULT_VAR_CONFIDENCE,
    MAX_RISK_COMPARISON_FUNDS,
    MIN_PREDICTION_DATA_POINTS,
    MIN_RISK_DATA_POINTS,
    MIN_SIP_DATA_POINTS,
    TRADING_DAYS_PER_YEAR,
)


# Find the .env file in project root (parent of backend/)
_BACKEND_DIR = Path(__file__).resolve().parent.parent
_PROJECT_ROOT = _BACKEND_DIR.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """
    Library settings loaded from environment variables.

    Environment variables:
        - ENVIRONMENT: Runtime environment (development, test, production)
        - LOG_LEVEL: Logging level (default: "INFO")
        - LOG_FORMAT: "text" or "json" (default: "text")

    Analytics parameters (optional, with market-standard defaults):
        - RISK_FREE_RATE: Annual risk-free rate in % (default: 6.5)
        - MARKET_RETURN: Expected annual market return in % (default: 12)
        - TRADING_DAYS_PER_YEAR: Periods used to annualize daily data (default: 252)
        - VAR_CONFIDENCE: Confidence level for VaR/CVaR (default: 0.95)
        - SIP_INVESTMENT_AMOUNT: Hypothetical SIP instalment (default: 10000)
        - SIP_ANALYSIS_MONTHS: SIP look-back window (default: 36)
    """

    environment: Literal["development", "test", "production"] = Field(
        default="development",
        description="Runtime environment (development, test, production)"
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_format: Literal["text", "json"] = Field(
        default="text",
        description="Log output format"
    )

    # =========================================================================
    # MARKET ASSUMPTIONS
    # =========================================================================
    risk_free_rate: float = Field(
        default=DEFAULT_RISK_FREE_RATE,
        ge=0,
        le=50,
        description="Annual risk-free rate in percent"
    )
    market_return: float = Field(
        default=DEFAULT_MARKET_RETURN,
        description="Expected annual market return in percent (Jensen's alpha)"
    )
    trading_days_per_year: int = Field(
        default=TRADING_DAYS_PER_YEAR,
        ge=1,
        le=366,
        description="Return periods per year used for annualization"
    )
    var_confidence: float = Field(
        default=DEFAULT_VAR_CONFIDENCE,
        description="Confidence level for Value at Risk, strictly between 0 and 1"
    )

    # =========================================================================
    # SIP OPTIMIZER
    # =========================================================================
    sip_investment_amount: float = Field(
        default=DEFAULT_SIP_AMOUNT,
        gt=0,
        description="Hypothetical amount invested on each SIP date"
    )
    sip_analysis_months: int = Field(
        default=DEFAULT_SIP_ANALYSIS_MONTHS,
        ge=1,
        le=240,
        description="Number of months of NAV history analysed"
    )

    # =========================================================================
    # DATA SUFFICIENCY
    # =========================================================================
    min_risk_data_points: int = Field(
        default=MIN_RISK_DATA_POINTS,
        ge=2,
        description="Minimum NAV points for a fund risk report"
    )
    min_sip_data_points: int = Field(
        default=MIN_SIP_DATA_POINTS,
        ge=1,
        description="Minimum NAV points for SIP date optimization"
    )
    min_prediction_data_points: int = Field(
        default=MIN_PREDICTION_DATA_POINTS,
        ge=2,
        description="Minimum NAV points for performance prediction"
    )
    max_risk_comparison_funds: int = Field(
        default=MAX_RISK_COMPARISON_FUNDS,
        ge=2,
        le=10,
        description="Maximum funds in a risk metrics comparison"
    )

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE) if _ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @model_validator(mode="after")
    def validate_analytics_config(self) -> "Settings":
        """
        Validate cross-field analytics configuration.

        Rules:
        - var_confidence must lie strictly between 0 and 1
        - production must not run with DEBUG logging
        """
        if not 0 < self.var_confidence < 1:
            raise ValueError(
                f"VAR_CONFIDENCE must be strictly between 0 and 1, got {self.var_confidence}"
            )

        if self.environment == "production" and self.log_level.upper() == "DEBUG":
            raise ValueError(
                "DEBUG logging is not allowed in production. "
                "Set LOG_LEVEL to INFO or higher."
            )

        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_test(self) -> bool:
        """Check if running in test environment."""
        return self.environment == "test"


# Create single instance
settings = Settings()
