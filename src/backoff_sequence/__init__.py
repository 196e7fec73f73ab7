"""
backoff_sequence – clamped exponential backoff delays as a lazy sequence.

Import path convention::

    from backoff_sequence import BackoffSequence, ExponentialGrowth
    from backoff_sequence.config import BackoffSettings, EnvSettingsLoader
    from backoff_sequence.retry import RetryPolicy
"""

from backoff_sequence.errors import BaseError, ConfigError, InvalidBackoffConfigError
from backoff_sequence.growth import ConstantGrowth, ExponentialGrowth, GrowthFunction, LinearGrowth
from backoff_sequence.sequence import BackoffIterator, BackoffSequence, clamp

__version__ = "0.1.0"
__all__ = [
    "BackoffIterator",
    "BackoffSequence",
    "BaseError",
    "ConfigError",
    "ConstantGrowth",
    "ExponentialGrowth",
    "GrowthFunction",
    "InvalidBackoffConfigError",
    "LinearGrowth",
    "__version__",
    "clamp",
]
