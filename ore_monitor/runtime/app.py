from __future__ import annotations

import asyncio

from solders.pubkey import Pubkey

from ore_monitor.config import Settings
from ore_monitor.dashboard import run_dashboard
from ore_monitor.data import HISTORY_FILENAME, SnapshotStore, SolanaRpc
from ore_monitor.infra import RuntimeEventLogger, get_logger
from ore_monitor.runtime.monitor import RoundMonitor
from ore_monitor.runtime.supervisor import LoopSupervisor


class App:
    """Top-level orchestrator: round monitor loop plus optional dashboard."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.log = get_logger("ore-monitor", settings.log_level)

    def build_monitor(self, rpc: SolanaRpc) -> RoundMonitor:
        return RoundMonitor(
            rpc,
            SnapshotStore(self.settings.data_dir),
            RuntimeEventLogger(self.settings.data_dir),
            self.log,
            program_id=Pubkey.from_string(self.settings.program_id),
            slot_duration_sec=self.settings.slot_duration_sec,
            poll_interval_sec=self.settings.poll_interval_sec,
            history_store=SnapshotStore(self.settings.data_dir, HISTORY_FILENAME),
            history_rounds=self.settings.history_rounds,
        )

    async def run(self) -> None:
        self.log.info(
            "starting ore monitor rpc=%s program=%s slot_duration=%.3fs",
            self.settings.rpc_url,
            self.settings.program_id,
            self.settings.slot_duration_sec,
        )
        rpc = SolanaRpc(
            self.settings.rpc_url,
            commitment=self.settings.commitment,
            timeout=self.settings.rpc_timeout_sec,
            retries=self.settings.rpc_retries,
            min_gap_ms=self.settings.rpc_min_gap_ms,
        )
        monitor = self.build_monitor(rpc)
        supervisor = LoopSupervisor()
        loops = [supervisor.run_forever("round_monitor", monitor.run, self.log)]
        if self.settings.dashboard_enabled:
            loops.append(
                run_dashboard(
                    data_dir=self.settings.data_dir,
                    port=self.settings.dashboard_port,
                    cache_ttl=self.settings.dashboard_cache_ttl,
                    log_level=self.settings.log_level,
                )
            )
        try:
            await asyncio.gather(*loops)
        finally:
            await rpc.close()


def run_main(settings: Settings) -> None:
    asyncio.run(App(settings).run())
