from __future__ import annotations

from dataclasses import dataclass
from typing import Set

from swipe_cube.config import SWIPE_DURATION_MS
from swipe_cube.core.geometry import AXES, Axis

VALID_SLICES: Set[int] = {-1, 0, 1}
VALID_DIRECTIONS: Set[int] = {-1, 1}


@dataclass(frozen=True)
class Move:
    """Cuarto de vuelta de una capa del cubo.

    Attributes:
        axis: Eje de rotación ('x', 'y' o 'z').
        slice: Capa sobre el eje (-1, 0 o 1).
        direction: +1 gira +90° alrededor del eje (mano derecha), -1 gira -90°.
        duration_ms: Duración de la animación en milisegundos.
    """

    axis: Axis
    slice: int
    direction: int
    duration_ms: float = SWIPE_DURATION_MS

    def __post_init__(self) -> None:
        if self.axis not in AXES:
            raise ValueError(f"Eje inválido: {self.axis}")
        if self.slice not in VALID_SLICES:
            raise ValueError(f"Capa inválida: {self.slice}")
        if self.direction not in VALID_DIRECTIONS:
            raise ValueError(f"Dirección inválida: {self.direction}")
        if self.duration_ms < 0:
            raise ValueError(f"Duración inválida: {self.duration_ms}")

    def inverse(self) -> "Move":
        """Devuelve el movimiento inverso (misma capa, sentido contrario).

        Ejemplos:
            - x[+1] +90° -> x[+1] -90°
        """
        return Move(self.axis, self.slice, -self.direction, self.duration_ms)

    def __str__(self) -> str:
        sign = "+" if self.direction > 0 else "-"
        return f"{self.axis}[{self.slice:+d}] {sign}90°"
