"""
Stock price alerts package.
Provides alert storage, the periodic alert sweep and the !alert commands.
The cog lives in ``alerts.cog``.
"""

from .alert_model import PriceAlert, Direction
from .alert_storage import AlertStorage, AlertStorageError

__all__ = ["PriceAlert", "Direction", "AlertStorage", "AlertStorageError"]
