from __future__ import annotations
import threading, time, logging
from typing import Callable, Optional

class PeriodicTask:
    """Runs ``fn`` every ``interval_ms`` milliseconds on a daemon thread until cancelled.

    Firings are at a fixed rate: the first one happens one interval after ``start()``
    and later ones are scheduled from the start time, not from the end of the previous
    run. A tick that overruns skips the missed slots. If ``fn`` raises, the error is
    logged, handed to ``on_error`` and no further ticks fire.
    """

    def __init__(self, fn: Callable[[], None], interval_ms: int, name: str = "periodic", log: Optional[logging.Logger] = None, on_error: Optional[Callable[[BaseException], None]] = None):
        if interval_ms <= 0: raise ValueError(f"interval must be positive, got {interval_ms}")
        self.fn=fn; self.interval=interval_ms/1000.0; self.name=name
        self.log=log or logging.getLogger(name); self.on_error=on_error
        self.ticks=0
        self._stop=threading.Event(); self._thread: Optional[threading.Thread]=None

    @property
    def running(self) -> bool: return bool(self._thread and self._thread.is_alive())

    def start(self):
        if self._thread is not None: raise RuntimeError(f"{self.name} already started")
        self._thread=threading.Thread(target=self._run, name=self.name, daemon=True); self._thread.start()

    def cancel(self):
        """Stop ticking; waits for a tick in progress to finish (unless called from the tick itself)."""
        self._stop.set()
        t=self._thread
        if t is not None and t is not threading.current_thread(): t.join()

    def _run(self):
        next_at=time.monotonic()+self.interval
        while not self._stop.wait(max(0.0, next_at-time.monotonic())):
            try: self.fn()
            except Exception as e:
                self.log.exception(f"{self.name} tick failed, stopping")
                if self.on_error: self.on_error(e)
                return
            self.ticks+=1
            next_at+=self.interval
            now=time.monotonic()
            if next_at<now: next_at+=self.interval*((now-next_at)//self.interval+1)
