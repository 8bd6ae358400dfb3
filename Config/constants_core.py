"""
Core constants for the slice engine.

Defaults used when the matching environment variable is not set.
"""
from decimal import Decimal

# ============================================================================
# Environment
# ============================================================================

DEFAULT_ENV_NAME = 'development'

KNOWN_ENVIRONMENTS = ('development', 'test', 'staging', 'production', 'docker')

STRUCTURED_LOG_ENVIRONMENTS = ('production', 'staging', 'docker')
"""Environments whose console output is JSON instead of colored text"""

# ============================================================================
# Alignment
# ============================================================================

DEFAULT_STRICT_BALANCE = False
"""Unequal totals are reported as Unbalanced, not raised"""

DEFAULT_VALUE_QUANTUM = None
"""No quantization of split Decimal values unless configured"""

MAX_VALUE_QUANTUM = Decimal('1')
"""Quantizing split values coarser than whole units is almost surely a mistake"""

# ============================================================================
# Logging
# ============================================================================

DEFAULT_LOG_LEVEL = 'INFO'

LOG_LEVELS = ('DEBUG', 'SPLIT', 'INFO', 'UNBALANCED', 'WARNING', 'ERROR', 'CRITICAL')

ENGINE_LOGGER_NAME = 'slice_engine'
