from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from PySide6.QtCore import QElapsedTimer, QPoint, QTimer, Qt, Signal
from PySide6.QtGui import QMouseEvent, QWheelEvent
from PySide6.QtOpenGLWidgets import QOpenGLWidget

from OpenGL.GL import (
    glBegin,
    glClear,
    glClearColor,
    glColor3f,
    glDisable,
    glEnable,
    glEnd,
    glFlush,
    glLoadIdentity,
    glMatrixMode,
    glReadPixels,
    glRotatef,
    glTranslatef,
    glVertex3f,
    glViewport,
    GL_BLEND,
    GL_COLOR_BUFFER_BIT,
    GL_DEPTH_BUFFER_BIT,
    GL_DEPTH_TEST,
    GL_DITHER,
    GL_MODELVIEW,
    GL_PROJECTION,
    GL_QUADS,
    GL_RGB,
    GL_UNSIGNED_BYTE,
)
from OpenGL.GLU import gluPerspective

from swipe_cube.config import CUBE_SIZE, FRAME_INTERVAL_MS
from swipe_cube.core.cubelet_grid import Cubelet
from swipe_cube.core.geometry import Mat3f, Vec3f, Vec3i, mat_vec, round_vec
from swipe_cube.core.moves import Move
from swipe_cube.engine.frames import FrameCallback
from swipe_cube.engine.scheduler import TurnScheduler
from swipe_cube.logic.gestures import SwipeGesture
from swipe_cube.logic.zones import PickHit

logger = logging.getLogger(__name__)

PickTarget = Tuple[int, Vec3i]  # (índice de cubelet, normal local)

LOCAL_NORMALS: List[Vec3i] = [
    (1, 0, 0),
    (-1, 0, 0),
    (0, 1, 0),
    (0, -1, 0),
    (0, 0, 1),
    (0, 0, -1),
]


class QtFrameScheduler:
    """Agenda de frames sobre el event loop de Qt (un `QTimer` de un disparo por frame)."""

    def __init__(self, interval_ms: int = FRAME_INTERVAL_MS) -> None:
        self.interval_ms: int = interval_ms
        self._clock: QElapsedTimer = QElapsedTimer()
        self._clock.start()

    def now(self) -> float:
        return float(self._clock.elapsed())

    def on_next_frame(self, fn: FrameCallback) -> None:
        QTimer.singleShot(self.interval_ms, lambda: fn(self.now()))


class CubeGLWidget(QOpenGLWidget):
    """Widget OpenGL que dibuja las 27 piezas y traduce swipes a movimientos.

    Características:
    - Render OpenGL clásico (sin shaders): cuerpo negro + stickers por pieza.
    - Picking por color: devuelve la celda de la pieza y la normal de la cara tocada.
    - Swipe por zonas: el drag se interpreta con `SwipeGesture`.
    - Orbit con botón derecho y zoom con la rueda.
    """

    move_started = Signal(str)
    move_applied = Signal(str)

    def __init__(self, scheduler: TurnScheduler, parent=None) -> None:
        """Crea el widget OpenGL y se suscribe a los eventos del scheduler.

        Args:
            scheduler: Cola de movimientos / motor de rotación del cubo.
            parent: Widget padre (Qt), opcional.
        """
        super().__init__(parent)
        self.scheduler: TurnScheduler = scheduler
        self.grid = scheduler.grid
        self.engine = scheduler.engine

        # Cámara / orbit
        self.yaw: float = 45.0
        self.pitch: float = 35.0
        self.distance: float = 10.0

        self._last_mouse_pos: QPoint = QPoint()
        self._orbiting: bool = False

        # Piezas
        self.half: float = CUBE_SIZE / 2.0
        self.sticker_margin: float = 0.08
        self.sticker_offset: float = 0.01

        # Swipe
        self.gesture: SwipeGesture = SwipeGesture()

        self.scheduler.on_frame.append(self.update)
        self.scheduler.on_reset.append(self._on_reset)
        self.scheduler.on_move_started.append(self._on_move_started)
        self.scheduler.on_move_finished.append(self._on_move_finished)

        self.setFocusPolicy(Qt.ClickFocus)

    # --------------------------
    # OpenGL lifecycle
    # --------------------------
    def initializeGL(self) -> None:
        """Inicializa parámetros OpenGL (clear color y depth test)."""
        glClearColor(0.13, 0.13, 0.13, 1.0)
        glEnable(GL_DEPTH_TEST)

    def resizeGL(self, w: int, h: int) -> None:
        """Ajusta viewport y proyección cuando cambia el tamaño del widget.

        Args:
            w: Ancho lógico del widget (Qt).
            h: Alto lógico del widget (Qt).
        """
        if h == 0:
            h = 1

        dpr = self.devicePixelRatioF()
        fb_w = int(w * dpr)
        fb_h = int(h * dpr)

        glViewport(0, 0, fb_w, fb_h)

        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        gluPerspective(45.0, fb_w / float(fb_h), 0.1, 100.0)

        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()

    def paintGL(self) -> None:
        """Dibuja el frame actual (piezas en reposo y capa en animación)."""
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)
        self._apply_camera()

        glBegin(GL_QUADS)
        for cubelet in self.grid.cubelets:
            self._draw_cubelet(cubelet)
        glEnd()

    def _apply_camera(self) -> None:
        """Aplica la transformación de cámara (orbit) al modelo."""
        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()
        glTranslatef(0.0, 0.0, -self.distance)
        glRotatef(self.pitch, 1.0, 0.0, 0.0)
        glRotatef(-self.yaw, 0.0, 1.0, 0.0)

    # --------------------------
    # Interacción
    # --------------------------
    def mousePressEvent(self, event: QMouseEvent) -> None:
        """Botón derecho: orbitar. Botón izquierdo: empezar un swipe.

        Args:
            event: Evento de mouse de Qt.
        """
        if event.button() == Qt.RightButton:
            self._orbiting = True
            self._last_mouse_pos = event.pos()
            event.accept()
            return

        if event.button() == Qt.LeftButton:
            # Con un giro en curso o cola pendiente, el swipe no arranca
            if self.scheduler.busy:
                event.accept()
                return
            hit = self.pick(event.pos().x(), event.pos().y())
            self.gesture.begin(hit)
            event.accept()
            return

        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        """Orbit (derecho) o seguimiento del swipe (izquierdo).

        Args:
            event: Evento de mouse de Qt.
        """
        if self._orbiting:
            dx = event.position().x() - self._last_mouse_pos.x()
            dy = event.position().y() - self._last_mouse_pos.y()
            self._last_mouse_pos = event.pos()

            sens = 0.4
            self.yaw -= dx * sens
            self.pitch += dy * sens
            self.pitch = max(-89.0, min(89.0, self.pitch))

            self.update()
            event.accept()
            return

        if self.gesture.active and (event.buttons() & Qt.LeftButton):
            hit = self.pick(event.pos().x(), event.pos().y())
            move = self.gesture.update(hit)
            if move is not None:
                self.scheduler.enqueue_gesture(move)
            event.accept()
            return

        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        """Finaliza orbit o swipe al soltar botones.

        Args:
            event: Evento de mouse de Qt.
        """
        if event.button() == Qt.RightButton and self._orbiting:
            self._orbiting = False
            event.accept()
            return

        if event.button() == Qt.LeftButton:
            self.gesture.cancel()
            event.accept()
            return

        super().mouseReleaseEvent(event)

    def wheelEvent(self, event: QWheelEvent) -> None:
        """Zoom in/out con la rueda del mouse.

        Args:
            event: Evento de rueda de Qt.
        """
        delta = event.angleDelta().y() / 120.0
        self.distance -= delta * 0.5
        self.distance = max(5.0, min(20.0, self.distance))
        self.update()
        event.accept()

    # --------------------------
    # Picking (color picking)
    # --------------------------
    def pick(self, x: int, y: int) -> Optional[PickHit]:
        """Detecta qué pieza y qué cara están bajo el cursor usando color picking.

        Args:
            x: Coordenada X en píxeles (Qt, coordenadas del widget).
            y: Coordenada Y en píxeles (Qt, coordenadas del widget).

        Returns:
            `PickHit` con la celda de la pieza y la normal exterior de la cara
            tocada (en el mundo), o None si no hay pieza bajo el cursor.
        """
        if self.engine.is_animating:
            return None

        dpr = self.devicePixelRatioF()
        gl_x = int(x * dpr)
        gl_y = int((self.height() - y - 1) * dpr)

        self.makeCurrent()

        glDisable(GL_DITHER)
        glDisable(GL_BLEND)

        glClearColor(0.0, 0.0, 0.0, 1.0)
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)

        self._apply_camera()
        mapping = self._draw_all_faces_pick()

        glFlush()

        pixel = glReadPixels(gl_x, gl_y, 1, 1, GL_RGB, GL_UNSIGNED_BYTE)

        glClearColor(0.13, 0.13, 0.13, 1.0)
        self.doneCurrent()

        if pixel is None:
            return None

        if isinstance(pixel, (bytes, bytearray)):
            r, g, b = pixel[0], pixel[1], pixel[2]
        else:
            try:
                r, g, b = int(pixel[0]), int(pixel[1]), int(pixel[2])
            except (TypeError, ValueError, IndexError):
                return None

        target = mapping.get(r + (g << 8) + (b << 16))
        if target is None:
            return None

        index, local_normal = target
        cubelet = self.grid.cubelets[index]
        world_normal = round_vec(mat_vec(cubelet.orientation, local_normal))
        return PickHit(
            grid_position=tuple(float(v) for v in cubelet.position),  # type: ignore[arg-type]
            normal=tuple(float(v) for v in world_normal),  # type: ignore[arg-type]
        )

    def _encode_id_color(self, pick_id: int) -> Vec3f:
        """Codifica un ID entero a un color RGB (0..1) para picking.

        Args:
            pick_id: Identificador único (1..N) para cada cara de cada pieza.

        Returns:
            Tupla (r, g, b) normalizada en rango [0, 1].
        """
        r = (pick_id & 0xFF) / 255.0
        g = ((pick_id >> 8) & 0xFF) / 255.0
        b = ((pick_id >> 16) & 0xFF) / 255.0
        return (r, g, b)

    def _draw_all_faces_pick(self) -> Dict[int, PickTarget]:
        """Dibuja las caras de todas las piezas con colores codificados.

        Returns:
            Diccionario {pick_id: (índice de cubelet, normal local)}.
        """
        mapping: Dict[int, PickTarget] = {}

        glBegin(GL_QUADS)
        for cubelet in self.grid.cubelets:
            pos, rot = self.engine.pose(cubelet)
            for face_i, n in enumerate(LOCAL_NORMALS):
                pick_id = cubelet.index * len(LOCAL_NORMALS) + face_i + 1
                mapping[pick_id] = (cubelet.index, n)

                glColor3f(*self._encode_id_color(pick_id))
                for v in self._face_quad(pos, rot, n, margin=0.0, offset=0.0):
                    glVertex3f(*v)
        glEnd()
        return mapping

    # --------------------------
    # Render helpers
    # --------------------------
    def _face_quad(
        self,
        pos: Vec3f,
        rot: Mat3f,
        normal: Vec3i,
        margin: float,
        offset: float,
    ) -> List[Vec3f]:
        """Vértices (mundo) de una cara de una pieza.

        Args:
            pos: Centro de la pieza en el mundo.
            rot: Orientación de la pieza (local -> mundo).
            normal: Normal local de la cara.
            margin: Margen interno (reduce el quad).
            offset: Separación hacia afuera respecto a la superficie de la pieza.

        Returns:
            Lista de 4 vértices (x, y, z) en orden para GL_QUADS.
        """
        i = [abs(v) for v in normal].index(1)
        u, w = [k for k in range(3) if k != i]
        h = self.half
        e = h - margin

        out: List[Vec3f] = []
        for a, b in ((-e, -e), (e, -e), (e, e), (-e, e)):
            local = [0.0, 0.0, 0.0]
            local[i] = normal[i] * (h + offset)
            local[u] = a
            local[w] = b
            p = mat_vec(rot, local)
            out.append((pos[0] + p[0], pos[1] + p[1], pos[2] + p[2]))
        return out

    def _draw_cubelet(self, cubelet: Cubelet) -> None:
        """Dibuja el cuerpo y los stickers de una pieza (dentro de glBegin/glEnd)."""
        pos, rot = self.engine.pose(cubelet)
        plastic = (0.07, 0.07, 0.07)

        for n in LOCAL_NORMALS:
            glColor3f(*plastic)
            for v in self._face_quad(pos, rot, n, margin=0.0, offset=0.0):
                glVertex3f(*v)

            color = cubelet.stickers.get(n)
            if color is None:
                continue
            glColor3f(*self._color_rgb(color))
            for v in self._face_quad(pos, rot, n, self.sticker_margin, self.sticker_offset):
                glVertex3f(*v)

    # --------------------------
    # Eventos del scheduler
    # --------------------------
    def _on_move_started(self, move: Move) -> None:
        self.move_started.emit(str(move))
        self._show_status(f"Move: {move}")

    def _on_move_finished(self, move: Move) -> None:
        self.move_applied.emit(str(move))
        self.update()

    def _on_reset(self) -> None:
        self.gesture.cancel()
        self.update()

    def _show_status(self, msg: str) -> None:
        w = self.window()
        if hasattr(w, "statusBar") and w.statusBar():
            w.statusBar().showMessage(msg, 1200)
        else:
            logger.info(msg)

    # --------------------------
    # Color map
    # --------------------------
    def _color_rgb(self, c: str) -> Vec3f:
        """Convierte la letra de color de un sticker a RGB.

        Args:
            c: Letra de color ("R", "O", "W", "Y", "G", "B").

        Returns:
            Tupla (r, g, b) en rango [0, 1]. Si no existe el color, retorna gris.
        """
        palette: Dict[str, Vec3f] = {
            "R": (1.0, 0.0, 0.0),
            "O": (1.0, 0.53, 0.0),
            "W": (1.0, 1.0, 1.0),
            "Y": (1.0, 1.0, 0.0),
            "G": (0.0, 1.0, 0.0),
            "B": (0.0, 0.0, 1.0),
        }
        return palette.get(c, (0.8, 0.8, 0.8))
