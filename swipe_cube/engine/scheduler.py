from __future__ import annotations

import logging
import random
from collections import deque
from enum import Enum
from typing import Callable, Deque, List, Optional

from swipe_cube.config import SHUFFLE_DURATION_MS, SHUFFLE_MOVES
from swipe_cube.core.cubelet_grid import CubeletGrid
from swipe_cube.core.moves import Move
from swipe_cube.engine.frames import FrameScheduler
from swipe_cube.engine.rotation import SliceRotationEngine
from swipe_cube.link.actuator import Actuator, LogActuator
from swipe_cube.logic.shuffle import generate_shuffle

logger = logging.getLogger(__name__)

MoveListener = Callable[[Move], None]
Listener = Callable[[], None]


class TurnState(Enum):
    IDLE = "idle"
    ANIMATING = "animating"


class TurnScheduler:
    """Cola FIFO de movimientos ejecutados de a uno por el motor de rotación.

    Máquina de estados:
        - IDLE: no hay giro en curso; `enqueue` dispara el siguiente de inmediato.
        - ANIMATING: hay un giro en curso; los movimientos nuevos esperan en `pending`.

    Cada frame se agenda con el `FrameScheduler`. Un contador de generación se
    incrementa en cada disparo y en cada `reset`, así un callback de frame viejo
    nunca avanza un giro que ya no es el activo.
    """

    def __init__(
        self,
        grid: CubeletGrid,
        frames: FrameScheduler,
        actuator: Optional[Actuator] = None,
        engine: Optional[SliceRotationEngine] = None,
    ) -> None:
        """Crea el scheduler.

        Args:
            grid: Grilla discreta del cubo.
            frames: Proveedor de reloj y de callbacks por frame.
            actuator: Destino de las notificaciones de movimiento (log por defecto).
            engine: Motor de rotación; si es None se crea uno sobre `grid`.
        """
        self.grid: CubeletGrid = grid
        self.frames: FrameScheduler = frames
        self.actuator: Actuator = actuator if actuator is not None else LogActuator()
        self.engine: SliceRotationEngine = engine if engine is not None else SliceRotationEngine(grid)

        self.state: TurnState = TurnState.IDLE
        self.pending: Deque[Move] = deque()
        self._generation: int = 0

        self.on_move_started: List[MoveListener] = []
        self.on_move_finished: List[MoveListener] = []
        self.on_frame: List[Listener] = []
        self.on_reset: List[Listener] = []

    # --------------------------
    # Public API
    # --------------------------
    @property
    def is_animating(self) -> bool:
        return self.state is TurnState.ANIMATING

    @property
    def busy(self) -> bool:
        """True si hay un giro en curso o movimientos esperando."""
        return self.is_animating or bool(self.pending)

    def enqueue(self, move: Move) -> None:
        """Agrega un movimiento al final de la cola y la procesa si está libre."""
        self.pending.append(move)
        self._process_queue()

    def enqueue_gesture(self, move: Move) -> bool:
        """Encola un movimiento originado por un swipe.

        Los swipes no se acumulan: si hay un giro en curso o cola pendiente, se ignoran.

        Returns:
            True si el movimiento fue aceptado.
        """
        if self.busy:
            logger.debug("Swipe ignorado (ocupado): %s", move)
            return False
        self.enqueue(move)
        return True

    def shuffle(
        self,
        n: int = SHUFFLE_MOVES,
        rng: Optional[random.Random] = None,
        duration_ms: float = SHUFFLE_DURATION_MS,
    ) -> List[Move]:
        """Encola `n` movimientos aleatorios de una sola vez.

        Args:
            n: Cantidad de movimientos.
            rng: Generador aleatorio (para mezclas reproducibles).
            duration_ms: Duración de cada movimiento.

        Returns:
            Los movimientos encolados, o una lista vacía si el scheduler estaba ocupado
            o si `n` no es positivo.
        """
        if self.busy:
            logger.info("Mezcla ignorada: hay movimientos en curso.")
            return []
        if n <= 0:
            logger.info("Mezcla ignorada: cantidad de movimientos inválida (%d).", n)
            return []

        moves = generate_shuffle(n, rng=rng, duration_ms=duration_ms)
        self.pending.extend(moves)
        logger.info("Mezcla de %d movimientos encolada.", len(moves))
        self._process_queue()
        return moves

    def reset(self) -> None:
        """Cancelación dura: vacía la cola, vuelve a IDLE y reconstruye la identidad.

        Funciona siempre, incluso a mitad de una animación.
        """
        self.pending.clear()
        self.engine.cancel()
        self.state = TurnState.IDLE
        self._generation += 1

        self.grid.reset()
        self.actuator.notify_solve()
        logger.info("Cubo reiniciado a la configuración resuelta.")

        for listener in list(self.on_reset):
            listener()

    # --------------------------
    # Máquina de estados
    # --------------------------
    def _process_queue(self) -> None:
        # El encadenamiento es recursivo: al terminar un giro se llama otra vez
        # desde el mismo callback de frame, sin esperar uno nuevo.
        if self.is_animating or not self.pending:
            return

        move = self.pending.popleft()
        self._trigger(move)

    def _trigger(self, move: Move) -> None:
        self.state = TurnState.ANIMATING
        self._generation += 1
        generation = self._generation

        self.engine.begin(move, self.frames.now())
        self.actuator.notify_move(move.axis, move.slice, move.direction)

        for listener in list(self.on_move_started):
            listener(move)

        self.frames.on_next_frame(lambda now_ms: self._on_frame(generation, now_ms))

    def _on_frame(self, generation: int, now_ms: float) -> None:
        if generation != self._generation or not self.is_animating:
            # Callback de un giro cancelado por reset
            return

        move = self.engine.active_move
        finished = self.engine.step(now_ms)

        for listener in list(self.on_frame):
            listener()

        if not finished:
            self.frames.on_next_frame(lambda t: self._on_frame(generation, t))
            return

        self.state = TurnState.IDLE
        if move is not None:
            for listener in list(self.on_move_finished):
                listener(move)
        self._process_queue()
