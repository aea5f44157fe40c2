import json
import logging
import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI, Query, Request
from fastapi.staticfiles import StaticFiles
from fastapi.responses import HTMLResponse, JSONResponse, StreamingResponse
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from jaegerdev import events
from jaegerdev.config import load_config, resolve_path, set_override, get_overrides, clear_overrides
from jaegerdev.plugin import DevConfigPlugin
from jaegerdev.reload import JOB_ID as WATCH_JOB_ID

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
log = logging.getLogger("jaegerdev")

scheduler = AsyncIOScheduler()

_KEEPALIVE_SECONDS = 15

cfg = load_config()
plugin = DevConfigPlugin.from_config(cfg)


def load_template():
    """Read the raw index.html template. A missing template is a setup error."""
    return resolve_path(cfg["paths"]["template"]).read_text(encoding="utf-8")


@asynccontextmanager
async def lifespan(app: FastAPI):
    global scheduler
    if not scheduler.running:
        scheduler = AsyncIOScheduler()
    plugin.reload_notifier().start(scheduler, cfg["reload"]["poll_interval_seconds"])
    scheduler.start()
    log.info(f"Dev server started, backend {cfg['backend']['base_url']}")
    yield
    scheduler.shutdown(wait=False)

app = FastAPI(lifespan=lifespan)

app.mount("/static", StaticFiles(directory=str(resolve_path(cfg["paths"]["static"]))), name="static")

_INDEX_HTML = load_template()

@app.get("/", response_class=HTMLResponse)
@app.get("/index.html", response_class=HTMLResponse)
async def index():
    html = await plugin.transform_index_html(_INDEX_HTML)
    return HTMLResponse(html, headers={"Cache-Control": "no-store"})

@app.get("/__dev/reload")
async def reload_stream(request: Request):
    """Server-sent events; the page does a full reload on each full-reload event."""
    queue = events.subscribe()

    async def stream():
        try:
            yield ": connected\n\n"
            while not await request.is_disconnected():
                try:
                    event = await asyncio.wait_for(queue.get(), timeout=_KEEPALIVE_SECONDS)
                except asyncio.TimeoutError:
                    yield ": keepalive\n\n"
                    continue
                yield f"event: {event['type']}\ndata: {json.dumps(event)}\n\n"
        finally:
            events.unsubscribe(queue)

    return StreamingResponse(stream(), media_type="text/event-stream", headers={"Cache-Control": "no-cache"})

@app.get("/__dev/status")
async def dev_status(limit: int = Query(20, ge=1, le=200)):
    entry = plugin.cache.entry
    backend = None
    if entry is not None:
        backend = {
            "age_seconds": round(plugin.cache.age_ms() / 1000, 1),
            "ui_config": entry.value.ui_config is not None,
            "storage_capabilities": entry.value.storage_capabilities is not None,
            "version": entry.value.version is not None,
        }
    job = scheduler.get_job(WATCH_JOB_ID)
    return {
        "backend_url": plugin.fetcher.base_url,
        "source": plugin.last_source,
        "backend": backend,
        "watching": job is not None,
        "reload_subscribers": events.subscriber_count(),
        "events": events.snapshot(limit=limit),
    }

# Runtime-adjustable settings and their types
_SETTABLE = {
    "backend.base_url": str,
    "backend.timeout_seconds": float,
    "cache.ttl_seconds": int,
    "reload.poll_interval_seconds": float,
}

@app.get("/__dev/config")
async def get_dev_config():
    return {"config": load_config(), "overrides": get_overrides()}

@app.post("/__dev/config")
async def update_dev_config(request: Request):
    body = await request.json()
    key = body.get("key") if isinstance(body, dict) else None

    if key not in _SETTABLE:
        return JSONResponse({"error": f"key not allowed, must be one of: {', '.join(sorted(_SETTABLE))}"}, status_code=400)

    try:
        typed_value = _SETTABLE[key](body.get("value"))
    except (ValueError, TypeError):
        return JSONResponse({"error": f"invalid value type for {key}"}, status_code=400)

    set_override(key, typed_value)
    plugin.apply_config(load_config())

    if key == "reload.poll_interval_seconds":
        job = scheduler.get_job(WATCH_JOB_ID)
        if job:
            job.reschedule(trigger="interval", seconds=typed_value)
            log.info(f"Rescheduled {WATCH_JOB_ID} to {typed_value}s")

    events.push("config_change", key=key, value=typed_value)
    log.info(f"Config override {key} = {typed_value!r}")
    return {"status": "ok", "key": key, "value": typed_value}

@app.delete("/__dev/config")
async def reset_dev_config():
    clear_overrides()
    plugin.apply_config(load_config())
    events.push("config_change", key=None, value=None)
    return {"status": "ok", "overrides": get_overrides()}
