"""Nested pydantic-settings configuration for the engine.

Every component receives its config explicitly; nothing here is read
from module-level state.  Each sub-config reads its own env prefix::

    export SCRIBE_CLASSIFIER_CONFIDENCE_THRESHOLD=0.5
    export SCRIBE_TASKS_DEFAULT_DUE_DAYS=14
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings

from scribe_engine.models import RiskCategory


class ClassifierConfig(BaseSettings):
    """Section classifier tuning.

    Env vars use ``SCRIBE_CLASSIFIER_`` prefix.
    """

    model_config = {"env_prefix": "SCRIBE_CLASSIFIER_"}

    confidence_threshold: float = Field(default=0.4, ge=0.0, lt=1.0)
    min_sentence_chars: int = Field(default=10, ge=0)
    score_saturation: float = Field(default=6.0, gt=0.0)
    position_bonus: float = Field(default=0.1, ge=0.0, le=0.5)


class DiagnosisConfig(BaseSettings):
    """Differential diagnosis engine tuning.

    Env vars use ``SCRIBE_DIAGNOSIS_`` prefix.
    """

    model_config = {"env_prefix": "SCRIBE_DIAGNOSIS_"}

    min_score: float = Field(default=0.1, ge=0.0, le=1.0)
    top_n_for_priority: int = Field(default=3, ge=1)
    max_diagnoses: int = Field(default=10, ge=1)
    close_rank_margin: float = Field(default=0.1, ge=0.0, le=1.0)


class RiskConfig(BaseSettings):
    """Risk factor analyzer configuration.

    Env vars use ``SCRIBE_RISK_`` prefix.
    """

    model_config = {"env_prefix": "SCRIBE_RISK_"}

    extract_medications_from_content: bool = True
    rules_file: Optional[Path] = None
    elderly_age: int = Field(default=65, ge=0)
    categories: list[RiskCategory] = Field(default_factory=list)


class TaskConfig(BaseSettings):
    """Task suggestion configuration.

    Env vars use ``SCRIBE_TASKS_`` prefix.
    """

    model_config = {"env_prefix": "SCRIBE_TASKS_"}

    default_due_days: int = Field(default=7, ge=0)
    max_follow_up_days: int = Field(default=730, ge=1)
    region: str = "za"


class EnhancementConfig(BaseSettings):
    """Optional network-backed categorization pass.

    Env vars use ``SCRIBE_ENHANCEMENT_`` prefix.
    """

    model_config = {"env_prefix": "SCRIBE_ENHANCEMENT_"}

    enabled: bool = False
    timeout_seconds: float = Field(default=10.0, gt=0.0)


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Env vars use ``SCRIBE_OBSERVABILITY_`` prefix.
    """

    model_config = {"env_prefix": "SCRIBE_OBSERVABILITY_"}

    log_level: str = "INFO"
    json_logs: Optional[bool] = None
    redact_keys: list[str] = Field(default_factory=lambda: ["transcript", "content", "patient"])


class EngineSettings(BaseSettings):
    """Top-level settings aggregating all sub-configs."""

    classifier: ClassifierConfig = ClassifierConfig()
    diagnosis: DiagnosisConfig = DiagnosisConfig()
    risk: RiskConfig = RiskConfig()
    tasks: TaskConfig = TaskConfig()
    enhancement: EnhancementConfig = EnhancementConfig()
    observability: ObservabilityConfig = ObservabilityConfig()
