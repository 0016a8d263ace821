import asyncio
import time
from typing import Dict

class RateLimiter:

    def __init__(self, calls_per_second: float):
        self.calls_per_second = calls_per_second
        self.min_interval = 1.0 / calls_per_second
        self.last_call = 0.0
        self._lock = asyncio.Lock()

    async def acquire(self):
        async with self._lock:
            current_time = time.monotonic()
            time_since_last_call = current_time - self.last_call

            if time_since_last_call < self.min_interval:
                wait_time = self.min_interval - time_since_last_call
                await asyncio.sleep(wait_time)

            self.last_call = time.monotonic()


_rate_limiters: Dict[str, RateLimiter] = {}

def get_rate_limiter(api_name: str, calls_per_second: float = 10.0) -> RateLimiter:

    if api_name not in _rate_limiters:
        _rate_limiters[api_name] = RateLimiter(calls_per_second)
    return _rate_limiters[api_name]
