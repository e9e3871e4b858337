"""
Storage functionality for price alerts.
Handles persistence of alerts to and from a JSON snapshot file.
"""

import asyncio
import json
import os
from typing import Dict, List, Any, Optional
from loguru import logger

from .alert_model import PriceAlert


class AlertStorageError(Exception):
    """Raised when the snapshot file exists but cannot be read as alerts."""
    pass


class AlertStorage:
    """
    Storage management for price alerts.
    
    Alerts are held in memory as ``owner_id -> symbol -> PriceAlert`` and the
    whole mapping is rewritten to disk after every mutation. Mutations go
    through ``self.lock`` so command handlers and the sweep never interleave
    their writes.
    """
    
    def __init__(self, file_path: str = "stock_alerts.json"):
        """
        Initialize the alert storage.
        
        Args:
            file_path: Path to the alerts JSON file
        """
        self.file_path = file_path
        self.alerts_by_owner: Dict[str, Dict[str, PriceAlert]] = {}
        self.lock = asyncio.Lock()
        logger.debug(f"Initialized AlertStorage with file: {file_path}")
    
    def load(self) -> bool:
        """
        Load alerts from file.
        
        Returns:
            Whether a snapshot file was found and loaded
            
        Raises:
            AlertStorageError: If the file exists but is not a valid snapshot
        """
        if not os.path.exists(self.file_path):
            logger.info(f"No alerts file found at {self.file_path}, starting empty")
            self.alerts_by_owner = {}
            return False
            
        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            alerts_by_owner = self._from_snapshot(data)
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.critical(f"Alerts file {self.file_path} is unreadable: {e}")
            raise AlertStorageError(f"Could not load alerts from {self.file_path}: {e}") from e
        
        self.alerts_by_owner = alerts_by_owner
        logger.info(f"Loaded {self.count()} price alerts from {self.file_path}")
        return True
    
    def save(self) -> bool:
        """
        Save alerts to file, overwriting it.
        
        Returns:
            Whether saving was successful
        """
        return self._write_snapshot(self._to_snapshot())
    
    def count(self) -> int:
        return sum(len(alerts) for alerts in self.alerts_by_owner.values())
    
    def list_alerts(self, owner_id: str) -> List[PriceAlert]:
        """Get all alerts for a specific user, ordered by symbol"""
        alerts = self.alerts_by_owner.get(str(owner_id), {})
        return [alerts[symbol] for symbol in sorted(alerts)]
    
    def get_alert(self, owner_id: str, symbol: str) -> Optional[PriceAlert]:
        return self.alerts_by_owner.get(str(owner_id), {}).get(symbol)
    
    def snapshot(self) -> List[PriceAlert]:
        """Copy of every stored alert, safe to iterate across await points"""
        return [
            alert
            for alerts in self.alerts_by_owner.values()
            for alert in alerts.values()
        ]
    
    async def add(self, alert: PriceAlert) -> None:
        """Add or overwrite the alert for (owner_id, symbol) and persist"""
        async with self.lock:
            self.alerts_by_owner.setdefault(alert.owner_id, {})[alert.symbol] = alert
            await self._persist()
    
    async def remove(self, owner_id: str, symbol: str) -> bool:
        """
        Remove a user's alert for a symbol.
        
        Returns:
            Whether an alert was removed; the file is only rewritten if so
        """
        async with self.lock:
            if not self._pop(str(owner_id), symbol):
                return False
            await self._persist()
            return True
    
    async def discard(self, alert: PriceAlert) -> bool:
        """
        Remove a triggered alert if it is still the stored one.
        
        A no-op when the user already removed or replaced the alert.
        """
        async with self.lock:
            if self.get_alert(alert.owner_id, alert.symbol) != alert:
                logger.debug(f"Alert {alert.symbol} for {alert.owner_id} changed before removal, skipping")
                return False
            self._pop(alert.owner_id, alert.symbol)
            await self._persist()
            return True
    
    def _pop(self, owner_id: str, symbol: str) -> bool:
        alerts = self.alerts_by_owner.get(owner_id)
        if not alerts or symbol not in alerts:
            return False
        del alerts[symbol]
        if not alerts:
            del self.alerts_by_owner[owner_id]
        return True
    
    async def _persist(self) -> bool:
        # Serialize under the lock, write off the event loop
        data = self._to_snapshot()
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._write_snapshot, data)
    
    def _write_snapshot(self, data: Dict[str, Any]) -> bool:
        try:
            with open(self.file_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Error saving price alerts to {self.file_path}: {e}")
            return False
        
        alert_count = sum(len(alerts) for alerts in data.values())
        logger.info(f"Saved {alert_count} price alerts to {self.file_path}")
        return True
    
    def _to_snapshot(self) -> Dict[str, Any]:
        return {
            owner_id: {symbol: alert.to_dict() for symbol, alert in alerts.items()}
            for owner_id, alerts in self.alerts_by_owner.items()
        }
    
    @staticmethod
    def _from_snapshot(data: Any) -> Dict[str, Dict[str, PriceAlert]]:
        if not isinstance(data, dict):
            raise TypeError("snapshot root must be an object")
        
        alerts_by_owner: Dict[str, Dict[str, PriceAlert]] = {}
        for owner_id, symbols in data.items():
            if not isinstance(symbols, dict):
                raise TypeError(f"alerts for owner {owner_id} must be an object")
            alerts = {}
            for symbol, entry in symbols.items():
                if not symbol:
                    raise ValueError(f"empty symbol for owner {owner_id}")
                alerts[symbol] = PriceAlert.from_dict(owner_id, symbol, entry)
            if alerts:
                alerts_by_owner[str(owner_id)] = alerts
        return alerts_by_owner
