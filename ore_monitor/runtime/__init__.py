from .history import RoundRecord, SquareFrequency, fetch_round_history, history_payload, square_win_frequency
from .monitor import PollResult, RoundMonitor, fetch_summary, previous_round_winner
from .supervisor import LoopSupervisor

__all__ = [
    "RoundRecord",
    "SquareFrequency",
    "fetch_round_history",
    "history_payload",
    "square_win_frequency",
    "PollResult",
    "RoundMonitor",
    "fetch_summary",
    "previous_round_winner",
    "LoopSupervisor",
]
