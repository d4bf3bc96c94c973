"""Configuration schemas for validation."""

from .schemas import (
    PROFILE_DIMENSIONS,
    ToleranceConfig,
    NodeGenerationConfig,
    ProfileConfig,
    FamilyConfig,
    NodeConfig,
    ElementConfig,
    ModelConfig,
)

__all__ = [
    "PROFILE_DIMENSIONS",
    "ToleranceConfig",
    "NodeGenerationConfig",
    "ProfileConfig",
    "FamilyConfig",
    "NodeConfig",
    "ElementConfig",
    "ModelConfig",
]
