from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

from ore_monitor.data import RpcError


class LoopSupervisor:
    """Restarts managed async loops after failure.

    RPC outages (``transient`` exceptions) restart after a short fixed delay
    and are logged without a traceback; anything else is a crash and backs off
    from ``base_delay`` up to ``max_delay``. A clean poll run resets the crash
    backoff.
    """

    def __init__(
        self,
        *,
        base_delay: float = 2.0,
        max_delay: float = 20.0,
        transient_delay: float = 1.0,
        transient: tuple[type[BaseException], ...] = (RpcError,),
    ):
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.transient_delay = transient_delay
        self.transient = transient
        self.restarts: dict[str, int] = {}
        self.transient_failures: dict[str, int] = {}

    async def run_forever(self, name: str, fn: Callable[[], Awaitable[None]], log) -> None:
        delay = self.base_delay
        while True:
            try:
                await fn()
                log.warning("loop %s exited cleanly; restarting", name)
                delay = self.base_delay
                wait = delay
            except asyncio.CancelledError:
                raise
            except self.transient as exc:
                n = self.transient_failures.get(name, 0) + 1
                self.transient_failures[name] = n
                log.warning("loop %s rpc failure #%s: %s", name, n, exc)
                wait = self.transient_delay
            except Exception as exc:
                log.exception("loop %s crashed: %s", name, exc)
                wait = delay
                delay = min(self.max_delay, max(self.base_delay, delay * 1.5))
            self.restarts[name] = self.restarts.get(name, 0) + 1
            await asyncio.sleep(wait)
