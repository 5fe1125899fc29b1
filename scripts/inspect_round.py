#!/usr/bin/env python3
"""
One-shot ORE round inspection.

Fetches the board (and the live or a given round) over RPC and prints the
round summary as JSON, with the previous round's winning square.
"""

import argparse
import asyncio
import json

from solders.pubkey import Pubkey

from ore_monitor.config import load_settings
from ore_monitor.data import SolanaRpc
from ore_monitor.runtime import fetch_round_history, fetch_summary, history_payload, previous_round_winner


async def _run(args) -> dict:
    settings = load_settings()
    rpc = SolanaRpc(
        args.rpc_url or settings.rpc_url,
        commitment=settings.commitment,
        timeout=settings.rpc_timeout_sec,
        retries=settings.rpc_retries,
        min_gap_ms=settings.rpc_min_gap_ms,
    )
    program_id = Pubkey.from_string(settings.program_id)
    try:
        result = await fetch_summary(rpc, program_id, settings.slot_duration_sec, round_id=args.round_id)
        out = {
            "summary": result.summary.to_dict(),
            "round_unavailable": result.round_unavailable,
            "errors": [f"{type(exc).__name__}: {exc}" for exc in result.errors],
        }
        if args.with_previous:
            rid = result.summary.round_id
            out["previous_winning_square"] = await previous_round_winner(rpc, program_id, rid)
        if args.history > 0:
            history = await fetch_round_history(rpc, program_id, args.history, current_round_id=result.board.round_id)
            out["history"] = history_payload(history)
        return out
    finally:
        await rpc.close()


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--round-id", type=int, default=None, help="round to inspect (default: live round)")
    ap.add_argument("--rpc-url", default="", help="override SOLANA_RPC_URL")
    ap.add_argument("--with-previous", action="store_true", help="also resolve the previous round's winner")
    ap.add_argument("--history", type=int, default=0, help="also decode this many previous rounds")
    ap.add_argument("--indent", type=int, default=2)
    args = ap.parse_args()
    print(json.dumps(asyncio.run(_run(args)), indent=args.indent))


if __name__ == "__main__":
    main()
