from __future__ import annotations

import logging
import math
from typing import Dict, List, Optional, Tuple

from swipe_cube.config import CELL_PITCH
from swipe_cube.core.cubelet_grid import Cubelet, CubeletGrid
from swipe_cube.core.geometry import (
    Mat3f,
    Mat3i,
    Vec3f,
    Vec3i,
    mat_mul,
    mat_vec,
    rotation_matrix,
    scale,
    snap_orientation,
    snap_position,
)
from swipe_cube.core.moves import Move

logger = logging.getLogger(__name__)

Pose = Tuple[Vec3f, Mat3f]


def ease_in_out(t: float) -> float:
    """Curva ease-in-ease-out cuadrática sobre un progreso 0..1."""
    if t < 0.5:
        return 2.0 * t * t
    return 1.0 - 2.0 * (1.0 - t) * (1.0 - t)


class SliceRotationEngine:
    """Anima un cuarto de vuelta de una capa y lo vuelca a la grilla al terminar.

    Estados:
        - Idle: `active_move` es None.
        - Animating: hay una capa agrupada bajo un pivote virtual en el origen.

    El pivote es solo una transformación: las poses de las piezas se guardan
    relativas al pivote al empezar, se rotan con la matriz del pivote en cada
    frame y al terminar se recomponen en coordenadas del mundo, se cuantizan y se
    escriben en la grilla (única escritura sobre `CubeletGrid`).
    """

    def __init__(self, grid: CubeletGrid, pitch: float = CELL_PITCH) -> None:
        """Crea el motor sobre una grilla.

        Args:
            grid: Grilla discreta que el motor actualiza al finalizar cada giro.
            pitch: Distancia entre centros de celdas (unidades del mundo).
        """
        self.grid: CubeletGrid = grid
        self.pitch: float = pitch

        self.active_move: Optional[Move] = None
        self.angle_deg: float = 0.0
        self.progress: float = 0.0
        self._start_ms: float = 0.0
        self._pivot_rotation: Mat3f = rotation_matrix("x", 0.0)
        self._relative: Dict[int, Pose] = {}

    @property
    def is_animating(self) -> bool:
        return self.active_move is not None

    # --------------------------
    # Transiciones
    # --------------------------
    def begin(self, move: Move, now_ms: float) -> List[Cubelet]:
        """Idle -> Animating: agrupa la capa del movimiento bajo el pivote.

        Args:
            move: Movimiento a animar.
            now_ms: Tiempo actual (ms) que marca el inicio de la animación.

        Returns:
            Cubelets afectados (9 en una grilla en reposo).

        Raises:
            RuntimeError: Si ya hay una animación en curso.
        """
        if self.active_move is not None:
            raise RuntimeError(f"Ya se está animando {self.active_move}")

        members = self.grid.slice_members(move.axis, move.slice)

        # Pivote en el origen sin rotación: pose relativa == pose absoluta
        self._pivot_rotation = rotation_matrix(move.axis, 0.0)
        self._relative = {
            c.index: (scale(c.position, self.pitch), c.orientation) for c in members
        }

        self.active_move = move
        self._start_ms = now_ms
        self.angle_deg = 0.0
        self.progress = 0.0
        return members

    def step(self, now_ms: float) -> bool:
        """Avanza la animación al tiempo `now_ms`.

        Args:
            now_ms: Tiempo actual (ms), del mismo reloj usado en `begin`.

        Returns:
            True si el giro terminó en este paso (y la grilla ya fue actualizada).
        """
        move = self.active_move
        if move is None:
            return False

        if move.duration_ms <= 0:
            t = 1.0
        else:
            t = min(1.0, max(0.0, (now_ms - self._start_ms) / move.duration_ms))
        self.progress = t

        target = 90.0 * move.direction
        if t < 1.0:
            self._set_pivot_angle(move, target * ease_in_out(t))
            return False

        self._set_pivot_angle(move, target)
        self._finalize()
        return True

    def run(self, move: Move) -> None:
        """Aplica un movimiento completo sin animación (begin + fin inmediato)."""
        self.begin(move, 0.0)
        self.step(move.duration_ms)

    def cancel(self) -> None:
        """Descarta la animación en curso sin tocar la grilla."""
        if self.active_move is not None:
            logger.debug("Animación cancelada: %s", self.active_move)
        self.active_move = None
        self.angle_deg = 0.0
        self.progress = 0.0
        self._relative = {}

    # --------------------------
    # Render
    # --------------------------
    def is_affected(self, cubelet: Cubelet) -> bool:
        return cubelet.index in self._relative

    def pose(self, cubelet: Cubelet) -> Pose:
        """Pose actual de un cubelet en el mundo (incluye la rotación del pivote).

        Args:
            cubelet: Pieza a consultar.

        Returns:
            (posición en unidades del mundo, orientación como matriz 3x3).
        """
        rel = self._relative.get(cubelet.index)
        if rel is None:
            return scale(cubelet.position, self.pitch), cubelet.orientation
        pos, orientation = rel
        return (
            mat_vec(self._pivot_rotation, pos),
            mat_mul(self._pivot_rotation, orientation),
        )

    # --------------------------
    # Helpers
    # --------------------------
    def _set_pivot_angle(self, move: Move, angle_deg: float) -> None:
        self.angle_deg = angle_deg
        self._pivot_rotation = rotation_matrix(move.axis, math.radians(angle_deg))

    def _finalize(self) -> None:
        """Animating -> Idle: recompone poses absolutas, las cuantiza y las escribe."""
        move = self.active_move
        snapped: Dict[int, Tuple[Vec3i, Mat3i]] = {}
        for index, (pos, orientation) in self._relative.items():
            world_pos = mat_vec(self._pivot_rotation, pos)
            world_rot = mat_mul(self._pivot_rotation, orientation)
            snapped[index] = (
                snap_position(world_pos, self.pitch),
                snap_orientation(world_rot),
            )

        self.grid.commit(snapped)
        logger.debug("Movimiento finalizado: %s", move)

        self.active_move = None
        self.angle_deg = 0.0
        self.progress = 0.0
        self._relative = {}
