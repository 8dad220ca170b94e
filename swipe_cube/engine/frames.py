from __future__ import annotations

from typing import Callable, List, Protocol, Tuple

FrameCallback = Callable[[float], None]


class FrameScheduler(Protocol):
    """Reloj + agenda de callbacks por frame que provee el entorno de render."""

    def now(self) -> float:
        """Tiempo actual en milisegundos."""
        ...

    def on_next_frame(self, fn: FrameCallback) -> None:
        """Agenda `fn(now_ms)` para el próximo frame."""
        ...


class ManualFrameScheduler:
    """Agenda de frames controlada a mano (sin UI).

    Sirve para correr la cola de movimientos en scripts o tests: el tiempo solo
    avanza con `advance` y cada llamada dispara los callbacks agendados.
    """

    def __init__(self, frame_ms: float = 16.0) -> None:
        self.frame_ms: float = frame_ms
        self._now: float = 0.0
        self._pending: List[FrameCallback] = []

    def now(self) -> float:
        return self._now

    def on_next_frame(self, fn: FrameCallback) -> None:
        self._pending.append(fn)

    @property
    def pending_callbacks(self) -> int:
        return len(self._pending)

    def advance(self, ms: float = 0.0) -> None:
        """Avanza el reloj `ms` y ejecuta los callbacks agendados hasta ahora."""
        self._now += ms
        callbacks, self._pending = self._pending, []
        for fn in callbacks:
            fn(self._now)

    def run_until_idle(self, max_frames: int = 100000) -> Tuple[int, float]:
        """Avanza frame a frame hasta que no queden callbacks.

        Returns:
            (frames ejecutados, tiempo final en ms).

        Raises:
            RuntimeError: Si se supera `max_frames`.
        """
        frames = 0
        while self._pending:
            if frames >= max_frames:
                raise RuntimeError("La cola de frames no terminó")
            self.advance(self.frame_ms)
            frames += 1
        return frames, self._now
