from .server import TtlCache, build_app, run_dashboard

__all__ = ["TtlCache", "build_app", "run_dashboard"]
