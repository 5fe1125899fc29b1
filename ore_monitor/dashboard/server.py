from __future__ import annotations

import asyncio
import time
from collections.abc import Callable
from typing import Any

from aiohttp import web

from ore_monitor.data.snapshot_store import HISTORY_FILENAME, SnapshotStore
from ore_monitor.infra.log import get_logger
from ore_monitor.infra.telemetry import RuntimeEventLogger


HTML = """<!doctype html><html><head><meta charset='utf-8'><title>ORE Round Monitor</title></head>
<body style='font-family:system-ui;background:#060b16;color:#dbe4ff;padding:16px'>
<h2>ORE Round Monitor</h2>
<div id='timer'>loading...</div>
<div id='grid' style='display:grid;grid-template-columns:repeat(5,120px);gap:6px;margin:12px 0'></div>
<pre id='out'></pre>
<script>
async function tick(){
  try{
    const r=await fetch('/api/ore/live',{cache:'no-store'});
    const j=await r.json();
    const s=j.summary;
    const grid=document.getElementById('grid');
    grid.innerHTML='';
    if(s){
      document.getElementById('timer').textContent='round '+s.round_id+' | '+
        (s.is_intermission?'intermission':(s.seconds_remaining+'s left'));
      for(const q of s.squares){
        const d=document.createElement('div');
        d.style.cssText='padding:6px;border:1px solid #334;'+(q.is_winning?'background:#665500':'');
        d.textContent='#'+q.square_num+' '+(q.deployed_amount/1e9).toFixed(3)+' SOL ('+q.percentage_of_total.toFixed(1)+'%)';
        grid.appendChild(d);
      }
    }else{
      document.getElementById('timer').textContent=j.message;
    }
    document.getElementById('out').textContent=JSON.stringify(j.last_round);
  }catch(e){document.getElementById('timer').textContent='dashboard error: '+e;}
}
setInterval(tick,1000);tick();
</script>
</body></html>"""


class TtlCache:
    """Read-through cache for a single value with a short time-to-live."""

    def __init__(self, loader: Callable[[], Any], ttl: float, clock: Callable[[], float] = time.monotonic):
        self._loader = loader
        self._ttl = max(0.0, float(ttl))
        self._clock = clock
        self._value: Any = None
        self._ts: float | None = None

    def get(self) -> Any:
        now = self._clock()
        if self._ts is None or (now - self._ts) >= self._ttl:
            self._value = self._loader()
            self._ts = now
        return self._value


def build_app(
    store: SnapshotStore,
    *,
    cache_ttl: float = 2.0,
    history_store: SnapshotStore | None = None,
    events: RuntimeEventLogger | None = None,
) -> web.Application:
    cache = TtlCache(store.read, cache_ttl)
    history_cache = TtlCache(history_store.read, cache_ttl) if history_store is not None else None

    async def handle_html(_req: web.Request) -> web.Response:
        return web.Response(text=HTML, content_type="text/html")

    async def handle_live(_req: web.Request) -> web.Response:
        return web.json_response(cache.get(), headers={"Cache-Control": "no-store"})

    async def handle_history(_req: web.Request) -> web.Response:
        if history_cache is None:
            return web.json_response({"rounds": [], "count": 0, "squares": [], "message": "history disabled"})
        return web.json_response(history_cache.get(), headers={"Cache-Control": "no-store"})

    async def handle_events(req: web.Request) -> web.Response:
        try:
            limit = min(500, int(req.query.get("limit", "50")))
        except ValueError:
            raise web.HTTPBadRequest(text="limit must be an integer") from None
        rows = events.tail(limit, event=req.query.get("event")) if events is not None else []
        return web.json_response({"events": rows, "count": len(rows)})

    async def handle_health(_req: web.Request) -> web.Response:
        snap = cache.get()
        if not isinstance(snap, dict):
            return web.json_response({"ok": False, "message": "snapshot is not an object"})
        return web.json_response({"ok": bool(snap.get("ok")), "message": snap.get("message", "")})

    app = web.Application()
    app.router.add_get("/", handle_html)
    app.router.add_get("/api/ore/live", handle_live)
    app.router.add_get("/api/ore/history", handle_history)
    app.router.add_get("/api/ore/events", handle_events)
    app.router.add_get("/healthz", handle_health)
    return app


async def run_dashboard(*, data_dir: str, port: int, cache_ttl: float = 2.0, log_level: str = "INFO") -> None:
    log = get_logger("ore-monitor-dashboard", log_level)
    app = build_app(
        SnapshotStore(data_dir),
        cache_ttl=cache_ttl,
        history_store=SnapshotStore(data_dir, HISTORY_FILENAME),
        events=RuntimeEventLogger(data_dir),
    )

    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "0.0.0.0", port)
    await site.start()
    log.info("dashboard running on :%s", port)

    try:
        while True:
            await asyncio.sleep(3600)
    finally:
        await runner.cleanup()
