"""
Configuration package for the slice engine.

Provides centralized access to constants and environment configuration.

Usage:
    from Config import constants_core as core
    print(core.DEFAULT_LOG_LEVEL)

    from Config.environment import env
    print(f"Strict balance: {env.strict_balance}")
"""

# Auto-load environment on package import
from Config.environment import env, env_name, get_environment

from Config import constants_core

__all__ = [
    'env',
    'env_name',
    'get_environment',
    'constants_core',
]
