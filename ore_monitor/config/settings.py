from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

ENV_FILE = os.path.expanduser("~/.ore_monitor.env")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return str(raw).strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int, min_value: int | None = None) -> int:
    raw = os.environ.get(name)
    if raw is None:
        value = default
    else:
        value = int(raw)
    if min_value is not None:
        value = max(min_value, value)
    return value


def _env_float(name: str, default: float, min_value: float | None = None) -> float:
    raw = os.environ.get(name)
    if raw is None:
        value = default
    else:
        value = float(raw)
    if min_value is not None:
        value = max(min_value, value)
    return value


@dataclass(frozen=True)
class Settings:
    rpc_url: str
    program_id: str
    commitment: str
    slot_duration_sec: float
    poll_interval_sec: float
    rpc_timeout_sec: float
    rpc_retries: int
    rpc_min_gap_ms: float
    data_dir: str
    log_level: str
    dashboard_enabled: bool
    dashboard_port: int
    dashboard_cache_ttl: float
    history_rounds: int = 20


def load_settings(env_file: str | None = ENV_FILE) -> Settings:
    if env_file:
        load_dotenv(env_file)
    return Settings(
        rpc_url=os.environ.get("SOLANA_RPC_URL", "https://api.mainnet-beta.solana.com").strip(),
        program_id=os.environ.get("ORE_PROGRAM_ID", "oreV3EG1i9BEgiAJ8b177Z2S2rMarzak4NMv1kULvWv").strip(),
        commitment=os.environ.get("RPC_COMMITMENT", "confirmed").strip().lower(),
        slot_duration_sec=_env_float("SLOT_DURATION_SEC", 0.4, min_value=0.001),
        poll_interval_sec=_env_float("POLL_INTERVAL_SEC", 1.0, min_value=0.1),
        rpc_timeout_sec=_env_float("RPC_TIMEOUT_SEC", 8.0, min_value=0.5),
        rpc_retries=_env_int("RPC_RETRIES", 3, min_value=0),
        rpc_min_gap_ms=_env_float("RPC_MIN_GAP_MS", 100.0, min_value=0.0),
        data_dir=os.environ.get("DATA_DIR", "/data"),
        log_level=os.environ.get("LOG_LEVEL", "INFO").strip().upper(),
        dashboard_enabled=_env_bool("DASHBOARD_ENABLED", True),
        dashboard_port=_env_int("DASHBOARD_PORT", 8080, min_value=1),
        dashboard_cache_ttl=_env_float("DASHBOARD_CACHE_TTL", 2.0, min_value=0.0),
        history_rounds=_env_int("HISTORY_ROUNDS", 20, min_value=0),
    )
