"""Single-owner command server for a Game of Life grid.

The server thread is the only code that ever touches its grid. Callers talk
to it through one FIFO queue:

- ``advance()`` queues a generation step and returns immediately.
- ``render()``, ``snapshot()`` and ``call()`` queue a request and block
  until the worker has processed everything queued ahead of it.
"""

from concurrent.futures import Future
from typing import Any, Callable, Optional, Tuple
import logging
import queue
import threading

from .grid import Grid

logger = logging.getLogger(__name__)

_ADVANCE = "advance"
_CALL = "call"
_STOP = "stop"


class ServerStoppedError(RuntimeError):
    """Raised when a command is sent to a server that is no longer running."""


class GridServer(threading.Thread):
    """Thread that exclusively owns a Grid and serializes commands against it."""

    def __init__(self, grid: Grid, name: str = "grid-server") -> None:
        """Initialize the server.

        Args:
            grid: Initial generation owned by the server
            name: Thread name
        """
        super().__init__(name=name, daemon=True)
        self._grid = grid
        self._generation = 0
        self._commands: "queue.Queue[Tuple[str, Any]]" = queue.Queue()
        self._submit_lock = threading.Lock()
        self._stopped = False
        self._failure: Optional[BaseException] = None

    def advance(self) -> None:
        """Queue one generation step. Does not wait for it to run."""
        self._submit(_ADVANCE, None)

    def call(self, fn: Callable[[Grid], Any]) -> Any:
        """Run ``fn`` against the current grid on the server thread.

        Blocks until every command queued earlier has been processed.

        Args:
            fn: Function receiving the current Grid

        Returns:
            Whatever ``fn`` returns; exceptions raised by ``fn`` are re-raised here
        """
        future: Future = Future()
        self._submit(_CALL, (fn, future))
        return future.result()

    def render(self) -> str:
        """Render the grid after all previously queued commands."""
        return self.call(lambda grid: grid.render())

    def snapshot(self) -> Grid:
        """Current grid value after all previously queued commands."""
        return self.call(lambda grid: grid)

    @property
    def generation(self) -> int:
        """Number of generations processed so far."""
        return self.call(lambda grid: self._generation)

    def stop(self, timeout: Optional[float] = None) -> None:
        """Stop the server after the commands already queued have run.

        Args:
            timeout: Seconds to wait for the worker to exit
        """
        with self._submit_lock:
            if not self._stopped:
                self._stopped = True
                self._commands.put((_STOP, None))

        if self.is_alive():
            self.join(timeout)

    def _submit(self, kind: str, payload: Any) -> None:
        with self._submit_lock:
            if self._stopped:
                raise ServerStoppedError(f"{self.name} is not accepting commands") from self._failure
            self._commands.put((kind, payload))

    def run(self) -> None:
        logger.debug("%s started", self.name)
        while True:
            kind, payload = self._commands.get()
            if kind == _STOP:
                break

            if kind == _ADVANCE:
                try:
                    self._grid = self._grid.evolve()
                except Exception as exc:
                    logger.exception("%s failed to advance generation %d", self.name, self._generation)
                    self._fail(exc)
                    break
                self._generation += 1
            else:
                fn, future = payload
                try:
                    result = fn(self._grid)
                except Exception as exc:
                    future.set_exception(exc)
                else:
                    future.set_result(result)

        logger.debug("%s stopped after %d generations", self.name, self._generation)

    def _fail(self, exc: BaseException) -> None:
        """Stop accepting commands and fail every request still queued."""
        with self._submit_lock:
            self._stopped = True
            self._failure = exc

        while True:
            try:
                kind, payload = self._commands.get_nowait()
            except queue.Empty:
                return
            if kind == _CALL:
                _, future = payload
                error = ServerStoppedError(f"{self.name} stopped after a failed command")
                error.__cause__ = exc
                future.set_exception(error)

    def __enter__(self) -> "GridServer":
        self.start()
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.stop()
