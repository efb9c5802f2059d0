"""SerializedAgent: bounded mailbox plus one dedicated worker thread."""

import queue
import threading

from ..config import DEFAULT_CLOSE_GRACE_SECONDS
from ..logging_config import get_logger
from ..models import Message
from .base import IAgent

logger = get_logger(__name__)

# How often blocked producers and an idle worker re-check the running flag
_POLL_SECONDS = 0.05

_STOP = object()


class SerializedAgent:
    """Wraps an agent to give it ordered, backpressured delivery.

    ``callback`` only enqueues ``(topic, message)`` and returns; the worker
    thread applies ``inner.callback`` in exact enqueue order. When the mailbox
    is full the caller blocks until a slot frees. Once closed, new messages
    are dropped silently.

    ``name``, ``agent_id``, ``reset`` and ``on_clear_input`` go straight to the
    inner agent and are meant for the control plane while the worker is idle.
    """

    def __init__(
        self,
        agent: IAgent,
        capacity: int,
        close_grace: float = DEFAULT_CLOSE_GRACE_SECONDS,
    ):
        if agent is None:
            raise ValueError("agent is required")
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")

        self._agent = agent
        self._capacity = capacity
        self._close_grace = close_grace
        self._queue: queue.Queue = queue.Queue(maxsize=capacity)
        self._running = True
        self._close_lock = threading.Lock()
        self._closed = False

        self._worker = threading.Thread(
            target=self._run_worker,
            name=f"SerializedAgent-{agent.name}",
            daemon=True,
        )
        self._worker.start()
        logger.debug("Worker started for %s (capacity %s)", agent.agent_id, capacity)

    @property
    def inner(self) -> IAgent:
        return self._agent

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def pending(self) -> int:
        """Messages waiting in the mailbox."""
        return self._queue.qsize()

    @property
    def closed(self) -> bool:
        return not self._running

    @property
    def name(self) -> str:
        return self._agent.name

    @property
    def agent_id(self) -> str:
        return self._agent.agent_id

    def reset(self) -> None:
        self._agent.reset()

    def on_clear_input(self, topic: str) -> None:
        self._agent.on_clear_input(topic)

    def callback(self, topic: str, message: Message) -> None:
        """Enqueue a message, blocking while the mailbox is full."""
        item = (topic, message)
        while self._running:
            try:
                self._queue.put(item, timeout=_POLL_SECONDS)
                return
            except queue.Full:
                continue

    def _run_worker(self) -> None:
        while self._running:
            try:
                item = self._queue.get(timeout=_POLL_SECONDS)
            except queue.Empty:
                continue

            if item is _STOP or not self._running:
                break

            topic, message = item
            try:
                self._agent.callback(topic, message)
            except Exception:
                logger.exception(
                    "Agent %s failed on message from topic %s",
                    self._agent.agent_id,
                    topic,
                    extra={"context": {"topic": topic, "text": message.text}},
                )

    def close(self) -> None:
        """Stop the worker, wait up to the grace period, then close the inner agent."""
        with self._close_lock:
            if self._closed:
                return
            self._closed = True

        self._running = False
        try:
            self._queue.put_nowait(_STOP)
        except queue.Full:
            # Worker notices the flag on its next dequeue
            pass

        if threading.current_thread() is not self._worker:
            self._worker.join(self._close_grace)
            if self._worker.is_alive():
                logger.warning(
                    "Worker for %s still busy after %.1fs; abandoning it",
                    self._agent.agent_id,
                    self._close_grace,
                )

        self._discard_pending()
        self._agent.close()
        logger.debug("Worker closed for %s", self._agent.agent_id)

    def _discard_pending(self) -> None:
        while True:
            try:
                self._queue.get_nowait()
            except queue.Empty:
                return

    def __repr__(self) -> str:
        return f"SerializedAgent({self._agent.agent_id!r}, capacity={self._capacity})"
