from __future__ import annotations

import math
from typing import Literal, Tuple

Axis = Literal["x", "y", "z"]
Vec3i = Tuple[int, int, int]
Vec3f = Tuple[float, float, float]
Mat3i = Tuple[Vec3i, Vec3i, Vec3i]
Mat3f = Tuple[Vec3f, Vec3f, Vec3f]

AXES: Tuple[Axis, Axis, Axis] = ("x", "y", "z")
AXIS_INDEX = {"x": 0, "y": 1, "z": 2}

IDENTITY: Mat3i = ((1, 0, 0), (0, 1, 0), (0, 0, 1))


def rotation_matrix(axis: Axis, angle_rad: float) -> Mat3f:
    """Matriz de rotación alrededor de un eje (regla de la mano derecha).

    Args:
        axis: Eje de rotación ('x', 'y' o 'z').
        angle_rad: Ángulo en radianes.

    Returns:
        Matriz 3x3 (filas) que rota vectores columna.
    """
    c = math.cos(angle_rad)
    s = math.sin(angle_rad)
    if axis == "x":
        return ((1.0, 0.0, 0.0), (0.0, c, -s), (0.0, s, c))
    if axis == "y":
        return ((c, 0.0, s), (0.0, 1.0, 0.0), (-s, 0.0, c))
    if axis == "z":
        return ((c, -s, 0.0), (s, c, 0.0), (0.0, 0.0, 1.0))
    raise ValueError(f"Eje inválido: {axis}")


def mat_vec(m, v) -> Vec3f:
    """Producto matriz-vector (3x3 · 3)."""
    return (
        m[0][0] * v[0] + m[0][1] * v[1] + m[0][2] * v[2],
        m[1][0] * v[0] + m[1][1] * v[1] + m[1][2] * v[2],
        m[2][0] * v[0] + m[2][1] * v[1] + m[2][2] * v[2],
    )


def mat_mul(a, b) -> Mat3f:
    """Producto de matrices 3x3 (a · b)."""
    return tuple(
        tuple(sum(a[i][k] * b[k][j] for k in range(3)) for j in range(3))
        for i in range(3)
    )  # type: ignore[return-value]


def scale(v, s: float) -> Vec3f:
    return (v[0] * s, v[1] * s, v[2] * s)


def snap_position(p: Vec3f, pitch: float) -> Vec3i:
    """Ajusta una posición del mundo a la celda de la grilla más cercana.

    Args:
        p: Posición en unidades del mundo.
        pitch: Distancia entre centros de celdas vecinas.

    Returns:
        Coordenada entera (x, y, z) de la celda.
    """
    return (
        int(round(p[0] / pitch)),
        int(round(p[1] / pitch)),
        int(round(p[2] / pitch)),
    )


def snap_orientation(m: Mat3f) -> Mat3i:
    """Cuantiza una orientación al múltiplo de 90° más cercano en cada eje.

    Una rotación compuesta solo por cuartos de vuelta es una matriz de permutación
    con signos; redondear cada entrada elimina el error de punto flotante acumulado.

    Args:
        m: Matriz de rotación casi ortogonal.

    Returns:
        Matriz entera con entradas en {-1, 0, 1}.
    """
    return tuple(tuple(int(round(x)) for x in row) for row in m)  # type: ignore[return-value]


def round_vec(v: Vec3f) -> Vec3i:
    return (int(round(v[0])), int(round(v[1])), int(round(v[2])))
