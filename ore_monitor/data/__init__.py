from .rpc_client import RpcError, SolanaRpc, require_account
from .snapshot_store import HISTORY_FILENAME, SnapshotStore

__all__ = ["RpcError", "SolanaRpc", "require_account", "HISTORY_FILENAME", "SnapshotStore"]
