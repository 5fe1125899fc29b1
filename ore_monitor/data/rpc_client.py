from __future__ import annotations

import asyncio
import base64
import itertools
import random
import time

import aiohttp
from solders.pubkey import Pubkey

from ore_monitor.domain import AccountUnavailable


class RpcError(RuntimeError):
    """JSON-RPC level failure (error object in the response, or retries exhausted)."""


class SolanaRpc:
    """Minimal Solana JSON-RPC client with pacing and bounded retry/backoff.

    Only the two reads the round monitor needs: the current slot and raw
    account data. Missing accounts come back as ``None``, never as an error.
    """

    def __init__(
        self,
        url: str,
        *,
        commitment: str = "confirmed",
        timeout: float = 8.0,
        retries: int = 3,
        min_gap_ms: float = 100.0,
    ):
        self.url = url
        self.commitment = commitment
        self._timeout = max(0.5, float(timeout))
        self._retries = max(0, int(retries))
        self._min_gap_s = max(0.0, float(min_gap_ms) / 1000.0)
        self._session: aiohttp.ClientSession | None = None
        self._lock = asyncio.Lock()
        self._last_ts = 0.0
        self._ids = itertools.count(1)

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()

    async def _ensure_session(self) -> None:
        if self._session is not None and not self._session.closed:
            return
        self._session = aiohttp.ClientSession(
            connector=aiohttp.TCPConnector(limit=8, enable_cleanup_closed=True),
            headers={"User-Agent": "ore-monitor/0.1", "Content-Type": "application/json"},
        )

    async def _pace(self) -> None:
        now = time.time()
        if self._last_ts > 0 and (now - self._last_ts) < self._min_gap_s:
            await asyncio.sleep(self._min_gap_s - (now - self._last_ts))
        self._last_ts = time.time()

    async def call(self, method: str, params: list | None = None):
        await self._ensure_session()
        assert self._session is not None
        body = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params or []}

        last_err: Exception | None = None
        attempts = self._retries + 1
        for i in range(attempts):
            async with self._lock:
                await self._pace()
            try:
                async with self._session.post(
                    self.url,
                    json=body,
                    timeout=aiohttp.ClientTimeout(total=self._timeout),
                ) as r:
                    if r.status == 429:
                        retry_after = max(1.0, float(r.headers.get("Retry-After", "1") or 1.0))
                        last_err = RpcError(f"http 429 {method}")
                        if i < attempts - 1:
                            await asyncio.sleep(min(30.0, retry_after + random.uniform(0.05, 0.35)))
                            continue
                        break
                    if r.status >= 500:
                        last_err = RpcError(f"http {r.status} {method}")
                        if i < attempts - 1:
                            await asyncio.sleep(0.25 + (0.25 * i))
                            continue
                        break
                    if r.status >= 400:
                        raise RpcError(f"http {r.status} {method}")
                    payload = await r.json(content_type=None)
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                last_err = e
                if i < attempts - 1:
                    await asyncio.sleep(0.20 + (0.15 * i))
                    continue
                break

            err = payload.get("error")
            if err:
                raise RpcError(f"{method} failed: {err.get('code')} {err.get('message')}")
            return payload.get("result")

        raise RpcError(f"{method} failed after {attempts} attempts: {last_err}")

    async def get_slot(self) -> int:
        return int(await self.call("getSlot", [{"commitment": self.commitment}]))

    async def get_account_data(self, address: Pubkey | str) -> bytes | None:
        result = await self.call(
            "getAccountInfo",
            [str(address), {"encoding": "base64", "commitment": self.commitment}],
        )
        value = (result or {}).get("value")
        if value is None:
            return None
        data = value.get("data") or ["", "base64"]
        return base64.b64decode(data[0])


def require_account(data: bytes | None, address: Pubkey | str) -> bytes:
    if data is None:
        raise AccountUnavailable(str(address))
    return data
