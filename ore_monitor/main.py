from __future__ import annotations

from ore_monitor.config import load_settings
from ore_monitor.runtime.app import run_main


if __name__ == "__main__":
    run_main(load_settings())
