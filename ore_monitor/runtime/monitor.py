from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any

from solders.pubkey import Pubkey

from ore_monitor.chain import (
    board_address,
    compute_timing,
    decode_board,
    decode_round,
    resolve_winner,
    round_address,
    summarize,
)
from ore_monitor.data import SnapshotStore, require_account
from ore_monitor.domain import (
    AccountUnavailable,
    Board,
    DecodeError,
    InvalidSlotRange,
    OreMonitorError,
    Round,
    RoundSummary,
)
from ore_monitor.infra import RuntimeEventLogger
from ore_monitor.runtime.history import RoundRecord, fetch_round_history, history_payload


@dataclass(frozen=True)
class PollResult:
    board: Board
    round: Round | None
    summary: RoundSummary
    round_unavailable: bool = False
    errors: tuple[OreMonitorError, ...] = ()


async def fetch_summary(
    rpc,
    program_id: Pubkey,
    unit_duration_seconds: float,
    round_id: int | None = None,
) -> PollResult:
    """One poll: board, current slot and round, folded into a RoundSummary.

    A missing or invalid board is fatal (raises). A round account that does
    not exist yet sets ``round_unavailable``; decode and timing failures are
    collected in ``errors``. Both degrade the summary instead of raising.
    """
    board_addr = board_address(program_id)
    board = decode_board(require_account(await rpc.get_account_data(board_addr), board_addr))
    target = board.round_id if round_id is None else int(round_id)
    errors: list[OreMonitorError] = []

    timing = None
    if target == board.round_id:
        current_slot = await rpc.get_slot()
        try:
            timing = compute_timing(board.start_unit, board.end_unit, current_slot, unit_duration_seconds)
        except InvalidSlotRange as exc:
            errors.append(exc)

    round_ = None
    winner = None
    data = await rpc.get_account_data(round_address(target, program_id))
    if data is not None:
        try:
            round_ = decode_round(data)
        except DecodeError as exc:
            errors.append(exc)
        else:
            winner = resolve_winner(round_.randomness)

    summary = summarize(round_, winner, timing, round_id=target)
    return PollResult(
        board=board,
        round=round_,
        summary=summary,
        round_unavailable=data is None,
        errors=tuple(errors),
    )


async def previous_round_winner(rpc, program_id: Pubkey, round_id: int) -> int | None:
    if round_id <= 0:
        return None
    data = await rpc.get_account_data(round_address(round_id - 1, program_id))
    if data is None:
        return None
    return resolve_winner(decode_round(data).randomness)


class RoundMonitor:
    """Polls the live round, writes dashboard snapshots and emits round lifecycle events."""

    def __init__(
        self,
        rpc,
        store: SnapshotStore,
        events: RuntimeEventLogger,
        log,
        *,
        program_id: Pubkey,
        slot_duration_sec: float,
        poll_interval_sec: float = 1.0,
        history_store: SnapshotStore | None = None,
        history_rounds: int = 20,
    ):
        self.rpc = rpc
        self.store = store
        self.events = events
        self.log = log
        self.program_id = program_id
        self.slot_duration_sec = slot_duration_sec
        self.poll_interval_sec = poll_interval_sec
        self.history_store = history_store
        self.history_rounds = history_rounds
        self._round_id: int | None = None
        self._last_round: dict[str, Any] | None = None
        self._mismatch_round_id: int | None = None
        self._history_cache: dict[int, RoundRecord] = {}

    async def _refresh_last_round(self, round_id: int) -> None:
        if round_id <= 0:
            self._last_round = None
            return
        prev_id = round_id - 1
        try:
            winner = await previous_round_winner(self.rpc, self.program_id, round_id)
        except DecodeError as exc:
            self.log.warning("round %s decode failed: %s", prev_id, exc)
            self.events.poll_error(exc, round_id=prev_id)
            winner = None
        self._last_round = {"round_id": prev_id, "winning_square": winner}
        if winner is not None:
            self.log.info("round %s finalized winning_square=%s", prev_id, winner)
            self.events.round_finalized(prev_id, winner)

    async def _refresh_history(self, round_id: int) -> None:
        if self.history_store is None:
            return
        try:
            history = await fetch_round_history(
                self.rpc,
                self.program_id,
                self.history_rounds,
                current_round_id=round_id,
                cache=self._history_cache,
            )
        except DecodeError as exc:
            self.log.warning("round history decode failed: %s", exc)
            self.events.poll_error(exc, round_id=round_id)
            return
        keep = {r.round_id for r in history}
        for stale in [rid for rid in self._history_cache if rid not in keep]:
            del self._history_cache[stale]
        self.history_store.write(history_payload(history))

    def _write(self, *, ok: bool, message: str, summary: RoundSummary | None) -> dict[str, Any]:
        payload = {
            "ok": ok,
            "message": message,
            "summary": summary.to_dict() if summary is not None else None,
            "last_round": self._last_round,
        }
        self.store.write(payload)
        return payload

    async def poll_once(self) -> dict[str, Any]:
        try:
            result = await fetch_summary(self.rpc, self.program_id, self.slot_duration_sec)
        except AccountUnavailable as exc:
            self.log.info("board not available yet: %s", exc)
            return self._write(ok=False, message=str(exc), summary=None)
        except DecodeError as exc:
            self.log.warning("board decode failed: %s", exc)
            self.events.poll_error(exc)
            return self._write(ok=False, message=str(exc), summary=None)

        board = result.board
        round_id = board.round_id
        if round_id != self._round_id:
            self.log.info("round %s started (slots %s-%s)", round_id, board.start_unit, board.end_unit)
            self.events.round_started(round_id, board.start_unit, board.end_unit)
            self._round_id = round_id
            await self._refresh_last_round(round_id)
            await self._refresh_history(round_id)
        elif self._last_round is not None and self._last_round["winning_square"] is None:
            await self._refresh_last_round(round_id)
            if self._last_round["winning_square"] is not None:
                await self._refresh_history(round_id)

        if result.round_unavailable:
            self.log.info("round %s account not created yet", round_id)
        for exc in result.errors:
            self.log.warning("degraded summary for round %s: %s", round_id, exc)
            self.events.poll_error(exc, round_id=round_id)

        round_ = result.round
        if round_ is not None and round_.deployed_mismatch != 0 and round_.id != self._mismatch_round_id:
            self._mismatch_round_id = round_.id
            self.log.warning(
                "round %s deployed sum disagrees with total_deployed by %s",
                round_.id,
                round_.deployed_mismatch,
            )

        if result.errors:
            message = "; ".join(str(exc) for exc in result.errors)
        elif result.round_unavailable:
            message = f"round {round_id} not created yet"
        else:
            message = "ok"
        return self._write(ok=not result.errors, message=message, summary=result.summary)

    async def run(self) -> None:
        while True:
            await self.poll_once()
            await asyncio.sleep(self.poll_interval_sec)
