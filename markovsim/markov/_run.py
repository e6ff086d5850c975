import asyncio
import logging
from typing import Callable, Optional, Union

import numpy as np

from ..util.callbacks import StepProgressCallback
from ..util.exceptions import InvalidMatrixError
from ._session import SimulationSession

log = logging.getLogger(__name__)

TickCallback = Callable[[np.ndarray, int], None]


class SimulationRun:
    r""" Cooperative loop which performs one step of a session per tick until a maximum step count is reached or
    the run is cancelled.

    The loop runs as :mod:`asyncio` task on the caller's event loop. Between two ticks it sleeps for `delay_ms`
    milliseconds, the delay is re-read before every sleep so it can be changed while running. Cancellation is
    checked before each tick and withdraws a pending sleep, no further steps are taken afterwards.

    Parameters
    ----------
    session : SimulationSession
        The session to advance.
    max_steps : int, default=200
        The run stops once the step counter of the session reaches this value. Clamped to
        :math:`[1, \mathrm{MAX\_STEPS}]`.
    delay_ms : float or callable, default=100
        Delay between ticks in milliseconds, or a function without arguments returning it.
    on_tick : callable, optional, default=None
        Invoked as ``on_tick(distribution, step_index)`` after every successful step.
    progress : object, optional, default=None
        A tqdm-compatible progress bar class.

    Examples
    --------
    >>> import asyncio
    >>> from markovsim.data import weather
    >>> from markovsim.markov import SimulationSession, SimulationRun
    >>> run = SimulationRun(SimulationSession(weather()), max_steps=5, delay_ms=0)
    >>> asyncio.run(run.run())
    >>> run.stop_reason, run.n_ticks
    ('max_steps', 5)
    """

    #: Upper bound of `max_steps`.
    MAX_STEPS = 2000

    def __init__(self, session: SimulationSession, max_steps: int = 200,
                 delay_ms: Union[float, Callable[[], float]] = 100, on_tick: Optional[TickCallback] = None,
                 progress=None):
        self.session = session
        self.max_steps = int(np.clip(max_steps, 1, self.MAX_STEPS))
        self.delay_ms = delay_ms
        self.on_tick = on_tick
        self.progress = progress
        self.n_ticks = 0
        self.stop_reason = None
        self._running = False
        self._cancelled = False
        self._task = None

    @property
    def running(self) -> bool:
        r""" Whether the loop is currently active.

        :type: bool
        """
        return self._running

    @property
    def active(self) -> bool:
        r""" Whether the run was started and has not stopped yet.

        :type: bool
        """
        return self._task is not None and not self._task.done()

    @property
    def cancelled(self) -> bool:
        r""" Whether cancellation was requested.

        :type: bool
        """
        return self._cancelled

    @property
    def delay_seconds(self) -> float:
        r""" The current delay between two ticks in seconds, negative delays count as zero.

        :type: float
        """
        delay = self.delay_ms() if callable(self.delay_ms) else self.delay_ms
        return max(0., float(delay)) / 1000.

    def start(self) -> asyncio.Task:
        r""" Schedules :meth:`run` on the running event loop.

        Returns
        -------
        task : asyncio.Task
            The task executing the loop.
        """
        if self._task is not None:
            raise RuntimeError("This run was already started.")
        self._task = asyncio.get_running_loop().create_task(self.run())
        return self._task

    async def wait(self):
        r""" Waits until a started run has stopped. """
        if self._task is None:
            return
        try:
            await self._task
        except asyncio.CancelledError:
            # cancelled before the first tick was taken
            if not (self._cancelled and self._task.cancelled()):
                raise
            self.stop_reason = 'cancelled'

    def cancel(self):
        r""" Requests cancellation. Can be called any time, also from within `on_tick`, and more than once.
        Cancelling a run that already stopped has no effect. """
        if self._cancelled or self.stop_reason is not None or (self._task is not None and self._task.done()):
            return
        self._cancelled = True
        if not self._running:
            # the loop never gets to record the reason itself
            self.stop_reason = 'cancelled'
        log.debug("Cancellation of simulation run requested.")
        if self._task is not None and not self._task.done() and self._task is not _current_task():
            self._task.cancel()

    #: Alias of :meth:`cancel`, e.g., for when the consuming surface becomes invisible.
    pause = cancel

    async def run(self):
        r""" The loop itself. Returns once stopped, the reason is stored in :attr:`stop_reason` and is one of
        ``'max_steps'``, ``'cancelled'``, or ``'invalid_matrix'``.

        Raises
        ------
        RuntimeError
            If the loop is already running.
        """
        if self._running:
            raise RuntimeError("Simulation run is already running.")
        self._running = True
        log.info(f"Starting simulation run at t={self.session.step_index} with max_steps={self.max_steps}.")
        try:
            with StepProgressCallback(self.progress, "Simulating", self.max_steps) as callback:
                self.stop_reason = await self._loop(callback)
        except asyncio.CancelledError:
            if not self._cancelled:
                raise
            self.stop_reason = 'cancelled'
        finally:
            self._running = False
        log.info(f"Simulation run stopped at t={self.session.step_index} ({self.stop_reason}).")

    async def _loop(self, callback) -> str:
        while not self._cancelled:
            try:
                p = self.session.step()
            except InvalidMatrixError:
                return 'invalid_matrix'
            self.n_ticks += 1
            callback(step=self.session.step_index)
            if self.on_tick is not None:
                self.on_tick(p, self.session.step_index)
            if self.session.step_index >= self.max_steps:
                return 'max_steps'
            if self._cancelled:
                break
            await asyncio.sleep(self.delay_seconds)
        return 'cancelled'


def _current_task():
    try:
        return asyncio.current_task()
    except RuntimeError:
        return None
