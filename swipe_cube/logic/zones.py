from __future__ import annotations

import math
from typing import NamedTuple, Optional, Sequence, Tuple

from swipe_cube.core.geometry import Vec3f, round_vec

# Caras en el orden de sus bloques de zonas: Front=1..9, Right=10..18, Back=19..27,
# Left=28..36, Top=37..45, Bottom=46..54.
FRONT, RIGHT, BACK, LEFT, TOP, BOTTOM = 1, 2, 3, 4, 5, 6
ZONES_PER_FACE = 9
ZONE_COUNT = 6 * ZONES_PER_FACE


class PickHit(NamedTuple):
    """Resultado del picking: pieza tocada y normal exterior de la cara tocada."""

    grid_position: Vec3f
    normal: Vec3f


def zone_for(position: Sequence[int], normal: Sequence[float]) -> Optional[int]:
    """Convierte (celda de la pieza, normal exterior) a una zona 1..54.

    Dentro de cada cara: id = base + fila*3 + columna, donde la fila crece hacia
    abajo y la columna de izquierda a derecha, vistas de frente a esa cara.

    Args:
        position: Celda entera (x, y, z) de la pieza, componentes en {-1, 0, 1}.
        normal: Normal exterior (ya redondeada a un eje).

    Returns:
        Zona en [1, 54] o None si la normal no corresponde a una cara exterior.
    """
    x, y, z = position
    nx, ny, nz = normal
    if nz > 0.5:
        return 1 + ((1 - y) * 3 + (x + 1))
    if nx > 0.5:
        return 10 + ((1 - y) * 3 + (1 - z))
    if nz < -0.5:
        return 19 + ((1 - y) * 3 + (1 - x))
    if nx < -0.5:
        return 28 + ((1 - y) * 3 + (z + 1))
    if ny > 0.5:
        return 37 + ((1 - z) * 3 + (x + 1))
    if ny < -0.5:
        return 46 + ((z + 1) * 3 + (x + 1))
    return None


def zone_for_hit(hit: Optional[PickHit]) -> Optional[int]:
    """Como `zone_for`, pero redondea primero la posición y la normal del hit."""
    if hit is None:
        return None
    return zone_for(round_vec(hit.grid_position), round_vec(hit.normal))


def is_valid_zone(zone: Optional[int]) -> bool:
    return isinstance(zone, int) and 1 <= zone <= ZONE_COUNT


def zone_face(zone: int) -> int:
    """Cara (1..6) a la que pertenece una zona."""
    return math.ceil(zone / ZONES_PER_FACE)


def zone_row_col(zone: int) -> Tuple[int, int]:
    """Fila y columna (0..2) de la zona dentro de su cara."""
    idx = (zone - 1) % ZONES_PER_FACE
    return idx // 3, idx % 3
