"""
Fake Redis Client

Minimal in-memory stand-in for redis.Redis covering the commands used by
RedisRepository, with a manual clock so TTL expiry can be tested without
sleeping.
"""

from typing import Dict, Optional, Tuple

from redis.exceptions import ConnectionError as RedisConnectionError


class FakeRedis:
    """In-memory Redis double with key expiry driven by ``advance()``."""

    def __init__(self):
        self.now = 0.0
        self._data: Dict[str, Tuple[bytes, Optional[float]]] = {}
        self.fail_reads = False
        self.fail_writes = False
        self.commands = []

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def _check(self, failing: bool) -> None:
        if failing:
            raise RedisConnectionError("Connection refused")

    def _alive(self, key: str) -> bool:
        entry = self._data.get(key)
        if entry is None:
            return False
        _, expires_at = entry
        if expires_at is not None and self.now >= expires_at:
            del self._data[key]
            return False
        return True

    @staticmethod
    def _encode(value) -> bytes:
        return value if isinstance(value, bytes) else str(value).encode("utf-8")

    def setex(self, key: str, ttl: int, value) -> bool:
        self.commands.append(("SETEX", key, ttl))
        self._check(self.fail_writes)
        self._data[key] = (self._encode(value), self.now + ttl)
        return True

    def set(self, key: str, value) -> bool:
        self.commands.append(("SET", key))
        self._check(self.fail_writes)
        self._data[key] = (self._encode(value), None)
        return True

    def get(self, key: str) -> Optional[bytes]:
        self.commands.append(("GET", key))
        self._check(self.fail_reads)
        if not self._alive(key):
            return None
        return self._data[key][0]

    def delete(self, *keys: str) -> int:
        self.commands.append(("DEL",) + keys)
        self._check(self.fail_writes)
        deleted = 0
        for key in keys:
            if self._alive(key):
                del self._data[key]
                deleted += 1
        return deleted

    def ping(self) -> bool:
        self._check(self.fail_reads)
        return True

    def keys_alive(self):
        return [key for key in list(self._data) if self._alive(key)]
