"""
Data models for tracegen scenarios.
"""

from .config import ScenarioConfig, InvalidConfiguration

__all__ = [
    "ScenarioConfig",
    "InvalidConfiguration",
]
