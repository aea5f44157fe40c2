import logging
from pathlib import Path

log = logging.getLogger("jaegerdev.reload")

JOB_ID = "override_watch"


def _signature(path: Path):
    try:
        st = path.stat()
    except OSError:
        # missing, unreachable or unreadable all count as absent
        return (False, None, None)
    return (True, st.st_mtime_ns, st.st_size)


class ReloadNotifier:
    """Polls the override files and calls notify(path) once per observed change.

    Creating or deleting a file counts as a change. notify should only signal
    the host; it must not block or do network I/O.
    """

    def __init__(self, paths, notify):
        self.paths = [Path(p) for p in paths]
        self.notify = notify
        self._seen = {p: _signature(p) for p in self.paths}

    def check(self) -> list[Path]:
        changed = []
        for path in self.paths:
            sig = _signature(path)
            if sig == self._seen[path]:
                continue
            self._seen[path] = sig
            changed.append(path)
            log.info(f"{path.name} changed, requesting full reload")
            self.notify(path)
        return changed

    async def _poll(self):
        # Coroutine so AsyncIOScheduler runs it on the event loop, not a worker thread
        self.check()

    def start(self, scheduler, interval_seconds: float = 1.0):
        scheduler.add_job(
            self._poll, "interval", seconds=interval_seconds,
            id=JOB_ID, replace_existing=True, coalesce=True, max_instances=1,
        )
        log.info(f"Watching {', '.join(p.name for p in self.paths)} every {interval_seconds}s")
