import threading
import time
from typing import Any, Dict, Optional, Tuple


class TTLCache:
    """
    Cache em memória (por processo) com expiração por idade de inserção.

    - ttl_seconds=None: entradas nunca expiram, só são sobrescritas.
    - Leituras não renovam a entrada (expiração é a partir do set).
    """

    def __init__(self, ttl_seconds: Optional[int]):
        self.ttl = ttl_seconds
        self._store: Dict[str, Tuple[Any, float]] = {}
        self._lock = threading.Lock()

    def _is_expired(self, inserted_at: float, now: float) -> bool:
        if self.ttl is None:
            return False
        return (now - inserted_at) > self.ttl

    def _evict_if_needed(self):
        # Chamado com o lock já adquirido
        if self.ttl is None:
            return
        now = time.time()
        expired_keys = [k for k, (_, ts) in self._store.items() if self._is_expired(ts, now)]
        for k in expired_keys:
            self._store.pop(k, None)

    def set(self, key: str, value: Any):
        with self._lock:
            self._store[key] = (value, time.time())

    def purge_expired(self):
        """Remove todas as entradas expiradas (varre o store inteiro)."""
        with self._lock:
            self._evict_if_needed()

    def get(self, key: str) -> Tuple[Any, bool]:
        """Retorna (valor, encontrado). Entradas expiradas contam como ausentes."""
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None, False
            value, ts = entry
            if self._is_expired(ts, time.time()):
                self._store.pop(key, None)
                return None, False
            return value, True

    def __contains__(self, key: str) -> bool:
        return self.get(key)[1]

    def __len__(self) -> int:
        with self._lock:
            self._evict_if_needed()
            return len(self._store)
