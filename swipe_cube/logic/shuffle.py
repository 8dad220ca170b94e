from __future__ import annotations

import random
from typing import List, Optional

from swipe_cube.config import SHUFFLE_DURATION_MS
from swipe_cube.core.geometry import AXES, Axis
from swipe_cube.core.moves import Move

SLICES: List[int] = [-1, 0, 1]
DIRECTIONS: List[int] = [1, -1]


def generate_shuffle(
    n: int,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
    duration_ms: float = SHUFFLE_DURATION_MS,
) -> List[Move]:
    """Genera una mezcla aleatoria de `n` cuartos de vuelta.

    Cada movimiento elige eje, capa y dirección de forma uniforme e independiente;
    no se evitan movimientos que se cancelen entre sí.

    Args:
        n: Cantidad de movimientos a generar.
        seed: Semilla opcional para resultados reproducibles (se ignora si se pasa `rng`).
        rng: Generador aleatorio a usar; si es None se crea uno con `seed`.
        duration_ms: Duración de la animación de cada movimiento.

    Returns:
        Lista de `n` movimientos bien formados.

    Raises:
        ValueError: Si `n` es menor o igual a 0.
    """
    if n <= 0:
        raise ValueError("n debe ser mayor que 0.")

    if rng is None:
        rng = random.Random(seed)

    seq: List[Move] = []
    for _ in range(n):
        axis: Axis = rng.choice(AXES)
        layer = rng.choice(SLICES)
        direction = rng.choice(DIRECTIONS)
        seq.append(Move(axis, layer, direction, duration_ms))
    return seq
