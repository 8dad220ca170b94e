from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Literal, Optional, Tuple

from swipe_cube.core.geometry import AXIS_INDEX, IDENTITY, Axis, Mat3i, Vec3i, mat_vec, round_vec

Face = Literal["R", "L", "U", "D", "F", "B"]
Color = str  # Letras: "R", "O", "W", "Y", "G", "B"
GridHash = Tuple[Tuple[Vec3i, Mat3i], ...]


class CubeletGrid:
    """Estado discreto de las 27 piezas (cubelets) del cubo 3x3x3.

    Representación:
        - Cada cubelet guarda su celda actual (`position`, enteros en {-1,0,1}) y su
          orientación cuantizada (`orientation`, matriz entera local -> mundo).
        - Los stickers viajan con la pieza: cada cubelet tiene color en las caras
          locales que miraban hacia afuera en su celda de origen (`home`).

    Escritura:
        - Solo `commit` modifica posiciones/orientaciones (lo usa el motor de
          rotación al finalizar un giro) y `reset` reconstruye todo.
    """

    FACES: List[Face] = ["R", "L", "U", "D", "F", "B"]
    COLORS_SOLVED: Dict[Face, Color] = {
        "R": "R",
        "L": "O",
        "U": "W",
        "D": "Y",
        "F": "G",
        "B": "B",
    }

    # Normales por cara (x, y, z)
    FACE_NORMAL: Dict[Face, Vec3i] = {
        "R": (1, 0, 0),
        "L": (-1, 0, 0),
        "U": (0, 1, 0),
        "D": (0, -1, 0),
        "F": (0, 0, 1),
        "B": (0, 0, -1),
    }

    def __init__(self) -> None:
        """Crea la grilla en la configuración identidad."""
        self.cubelets: List[Cubelet] = []
        self._by_position: Dict[Vec3i, Cubelet] = {}
        self.reset()

    # --------------------------
    # Public API
    # --------------------------
    def reset(self) -> None:
        """Descarta el estado actual y reconstruye la configuración identidad."""
        self.cubelets = []
        index = 0
        for x in (-1, 0, 1):
            for y in (-1, 0, 1):
                for z in (-1, 0, 1):
                    home: Vec3i = (x, y, z)
                    self.cubelets.append(
                        Cubelet(
                            index=index,
                            home=home,
                            position=home,
                            orientation=IDENTITY,
                            stickers=self._home_stickers(home),
                        )
                    )
                    index += 1
        self._reindex()

    def at(self, position: Vec3i) -> Optional["Cubelet"]:
        """Devuelve el cubelet que ocupa una celda (o None si la celda no existe)."""
        return self._by_position.get(tuple(position))  # type: ignore[arg-type]

    def slice_members(self, axis: Axis, layer: int) -> List["Cubelet"]:
        """Cubelets cuya coordenada sobre `axis` vale `layer` (siempre 9 en reposo).

        Args:
            axis: Eje ('x', 'y' o 'z').
            layer: Valor de la capa (-1, 0 o 1).

        Returns:
            Lista de cubelets de esa capa.
        """
        i = AXIS_INDEX[axis]
        return [c for c in self.cubelets if c.position[i] == layer]

    def commit(self, poses: Dict[int, Tuple[Vec3i, Mat3i]]) -> None:
        """Escribe nuevas posiciones/orientaciones ya cuantizadas.

        Args:
            poses: Mapa índice de cubelet -> (posición, orientación).

        Raises:
            ValueError: Si alguna posición queda fuera de la grilla o si dos piezas
                terminan en la misma celda.
        """
        new_positions = {c.index: c.position for c in self.cubelets}
        for index, (pos, _) in poses.items():
            if any(v not in (-1, 0, 1) for v in pos):
                raise ValueError(f"Posición fuera de la grilla: {pos}")
            new_positions[index] = pos
        if len(set(new_positions.values())) != len(self.cubelets):
            raise ValueError("Dos cubelets ocuparían la misma celda")

        for index, (pos, orientation) in poses.items():
            c = self.cubelets[index]
            c.position = pos
            c.orientation = orientation
        self._reindex()

    def is_identity(self) -> bool:
        """Indica si todas las piezas están en su celda de origen sin rotar."""
        return all(c.position == c.home and c.orientation == IDENTITY for c in self.cubelets)

    def is_solved(self) -> bool:
        """Indica si cada cara visible muestra un solo color.

        A diferencia de `is_identity`, acepta centros girados.
        """
        for colors in self.face_colors().values():
            if len(set(colors)) != 1:
                return False
        return True

    def face_colors(self) -> Dict[Face, List[Color]]:
        """Colores visibles agrupados por cara del mundo (9 por cara)."""
        normal_to_face = {n: f for f, n in self.FACE_NORMAL.items()}
        out: Dict[Face, List[Color]] = {f: [] for f in self.FACES}
        for c in self.cubelets:
            for normal, color in c.world_stickers().items():
                out[normal_to_face[normal]].append(color)
        return out

    def to_hashable(self) -> GridHash:
        """Estado inmutable y hasheable: (posición, orientación) por índice."""
        return tuple((c.position, c.orientation) for c in self.cubelets)

    # --------------------------
    # Helpers
    # --------------------------
    def _home_stickers(self, home: Vec3i) -> Dict[Vec3i, Color]:
        stickers: Dict[Vec3i, Color] = {}
        for face in self.FACES:
            n = self.FACE_NORMAL[face]
            i = [abs(v) for v in n].index(1)
            if home[i] == n[i]:
                stickers[n] = self.COLORS_SOLVED[face]
        return stickers

    def _reindex(self) -> None:
        self._by_position = {c.position: c for c in self.cubelets}


@dataclass
class Cubelet:
    """Una de las 27 piezas del cubo.

    Attributes:
        index: Identificador estable 0..26.
        home: Celda en la configuración identidad.
        position: Celda actual.
        orientation: Rotación acumulada (local -> mundo), en cuartos de vuelta.
        stickers: Colores por normal local (solo caras exteriores en `home`).
    """

    index: int
    home: Vec3i
    position: Vec3i
    orientation: Mat3i
    stickers: Dict[Vec3i, Color]

    def world_stickers(self) -> Dict[Vec3i, Color]:
        """Colores de la pieza indexados por la normal que miran en el mundo."""
        return {
            round_vec(mat_vec(self.orientation, n)): color
            for n, color in self.stickers.items()
        }
