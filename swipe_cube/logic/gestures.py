from __future__ import annotations

import logging
from typing import Callable, Dict, Optional, Tuple

from swipe_cube.config import SWIPE_DURATION_MS
from swipe_cube.core.geometry import Axis
from swipe_cube.core.moves import Move
from swipe_cube.logic.zones import (
    BACK,
    BOTTOM,
    FRONT,
    LEFT,
    RIGHT,
    TOP,
    PickHit,
    is_valid_zone,
    zone_face,
    zone_for_hit,
    zone_row_col,
)

logger = logging.getLogger(__name__)

# (fila, columna, d) -> (eje, capa, dirección)
SwipeRule = Callable[[int, int, int], Tuple[Axis, int, int]]

# Swipe horizontal: se mueve dentro de la misma fila (delta ±1).
HORIZONTAL_RULES: Dict[int, SwipeRule] = {
    FRONT: lambda row, col, d: ("y", 1 - row, d),
    RIGHT: lambda row, col, d: ("y", 1 - row, d),
    BACK: lambda row, col, d: ("y", 1 - row, d),
    LEFT: lambda row, col, d: ("y", 1 - row, d),
    TOP: lambda row, col, d: ("z", 1 - row, -d),
    BOTTOM: lambda row, col, d: ("z", row - 1, d),
}

# Swipe vertical: se mueve dentro de la misma columna (delta ±3).
VERTICAL_RULES: Dict[int, SwipeRule] = {
    FRONT: lambda row, col, d: ("x", col - 1, d),
    RIGHT: lambda row, col, d: ("z", 1 - col, -d),
    BACK: lambda row, col, d: ("x", 1 - col, -d),
    LEFT: lambda row, col, d: ("z", col - 1, d),
    TOP: lambda row, col, d: ("x", col - 1, -d),
    BOTTOM: lambda row, col, d: ("x", col - 1, -d),
}


def interpret_swipe(
    start_zone: int,
    current_zone: int,
    duration_ms: float = SWIPE_DURATION_MS,
) -> Optional[Move]:
    """Decide el movimiento que corresponde a un swipe entre dos zonas.

    Reglas:
        - Delta ±1 dentro de la misma fila -> swipe horizontal.
        - Delta ±3 -> swipe vertical.
        - Cualquier otro delta (diagonales, saltos de fila) se descarta.

    La fila/columna usadas por la tabla son las de la zona de inicio.

    Args:
        start_zone: Zona donde empezó el drag (1..54).
        current_zone: Zona actual bajo el puntero (1..54).
        duration_ms: Duración de la animación del movimiento resultante.

    Returns:
        El `Move` correspondiente, o None si el swipe no es válido.
    """
    if not (is_valid_zone(start_zone) and is_valid_zone(current_zone)):
        return None

    diff = current_zone - start_zone
    if diff == 0:
        return None

    face = zone_face(start_zone)
    row, col = zone_row_col(start_zone)
    d = 1 if diff > 0 else -1

    if abs(diff) == 1:
        # 3 -> 4 también tiene delta 1, pero cruza a otra fila
        if (start_zone - 1) // 3 != (current_zone - 1) // 3:
            return None
        rule = HORIZONTAL_RULES[face]
    elif abs(diff) == 3:
        rule = VERTICAL_RULES[face]
    else:
        return None

    axis, layer, direction = rule(row, col, d)
    return Move(axis, layer, direction, duration_ms)


class SwipeGesture:
    """Estado de un drag de puntero sobre el cubo.

    Un drag produce como máximo un movimiento: apenas el puntero llega a una zona
    que forma un swipe válido con la zona de inicio, la zona de inicio se olvida.
    """

    def __init__(self, duration_ms: float = SWIPE_DURATION_MS) -> None:
        self.duration_ms: float = duration_ms
        self.start_zone: Optional[int] = None

    @property
    def active(self) -> bool:
        return self.start_zone is not None

    def begin(self, hit: Optional[PickHit]) -> bool:
        """Captura la zona de inicio (pointer down).

        Args:
            hit: Resultado del picking, o None si el puntero no tocó ninguna pieza.

        Returns:
            True si se capturó una zona de inicio.
        """
        self.start_zone = zone_for_hit(hit)
        return self.start_zone is not None

    def update(self, hit: Optional[PickHit]) -> Optional[Move]:
        """Evalúa la zona actual (pointer move) contra la zona de inicio.

        Args:
            hit: Resultado del picking en la posición actual del puntero.

        Returns:
            El movimiento reconocido, o None si todavía no hay swipe válido.
        """
        if self.start_zone is None:
            return None
        current = zone_for_hit(hit)
        if current is None or current == self.start_zone:
            return None

        move = interpret_swipe(self.start_zone, current, self.duration_ms)
        if move is None:
            logger.debug("Swipe descartado: %s -> %s", self.start_zone, current)
            return None

        logger.debug("Swipe %s -> %s: %s", self.start_zone, current, move)
        self.start_zone = None
        return move

    def cancel(self) -> None:
        """Olvida la zona de inicio (pointer up)."""
        self.start_zone = None
