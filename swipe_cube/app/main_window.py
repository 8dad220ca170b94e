from __future__ import annotations

import random
from typing import List, Optional

from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QListWidget,
    QMainWindow,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from swipe_cube.config import SHUFFLE_MOVES, get_actuator_uri
from swipe_cube.core.cubelet_grid import CubeletGrid
from swipe_cube.engine.scheduler import TurnScheduler
from swipe_cube.link.actuator import Actuator, create_actuator
from swipe_cube.render.cube_gl_widget import CubeGLWidget, QtFrameScheduler


class MainWindow(QMainWindow):
    """Ventana principal del simulador: cubo 3D + controles de mezcla y reinicio.

    Esta clase coordina:
    - La grilla discreta del cubo (`CubeletGrid`)
    - La cola de movimientos y su animación (`TurnScheduler`)
    - La visualización y los swipes (`CubeGLWidget`)
    - El actuador externo que recibe cada movimiento
    """

    def __init__(self, actuator: Optional[Actuator] = None, rng: Optional[random.Random] = None) -> None:
        """Inicializa la ventana principal, crea la UI y conecta señales.

        Args:
            actuator: Destino de los movimientos; si es None se crea según la configuración.
            rng: Generador aleatorio para las mezclas (opcional).
        """
        super().__init__()
        self.setWindowTitle("Swipe Cube 3D - PySide6")

        # --- Modelo + render ---
        self.grid: CubeletGrid = CubeletGrid()
        self.actuator: Actuator = actuator if actuator is not None else create_actuator(get_actuator_uri())
        self.scheduler: TurnScheduler = TurnScheduler(
            self.grid, QtFrameScheduler(), actuator=self.actuator
        )
        self.gl_widget: CubeGLWidget = CubeGLWidget(self.scheduler, self)
        self._rng: Optional[random.Random] = rng

        # --- Historial ---
        self.history: List[str] = []

        # --- UI ---
        root = QWidget()
        root_layout = QHBoxLayout(root)
        root_layout.addWidget(self.gl_widget, 1)

        panel = QWidget()
        panel_layout = QVBoxLayout(panel)
        panel.setFixedWidth(280)

        self.lbl_state = QLabel("")
        panel_layout.addWidget(self.lbl_state)

        # Mezcla
        panel_layout.addWidget(QLabel("Shuffle (mezclar)"))
        row_shuffle = QHBoxLayout()
        self.spin_shuffle = QSpinBox()
        self.spin_shuffle.setRange(1, 200)
        self.spin_shuffle.setValue(SHUFFLE_MOVES)
        self.btn_shuffle = QPushButton("Shuffle")
        row_shuffle.addWidget(self.spin_shuffle, 1)
        row_shuffle.addWidget(self.btn_shuffle, 1)
        panel_layout.addLayout(row_shuffle)

        # Reinicio
        self.btn_solve = QPushButton("Solve (reiniciar)")
        panel_layout.addWidget(self.btn_solve)

        # Historial (movimientos)
        panel_layout.addWidget(QLabel("Historial de movimientos"))
        self.list_history = QListWidget()
        panel_layout.addWidget(self.list_history, 1)

        panel_layout.addWidget(
            QLabel("Arrastrá sobre una cara para girar.\nBotón derecho: orbitar. Rueda: zoom.")
        )

        root_layout.addWidget(panel)
        self.setCentralWidget(root)

        # --- Conexiones ---
        self.btn_shuffle.clicked.connect(self.on_shuffle)
        self.btn_solve.clicked.connect(self.on_solve)

        # Señal desde OpenGL: movimiento aplicado al final de animación
        self.gl_widget.move_applied.connect(self.on_move_applied)

        # Atajos
        self.btn_solve.setShortcut("Ctrl+R")

        self._refresh_state_label()

    # -------------------
    # Helpers UI
    # -------------------
    def _refresh_state_label(self) -> None:
        """Actualiza el label de estado del cubo."""
        self.lbl_state.setText(
            "Estado: resuelto ✅" if self.grid.is_solved() else "Estado: mezclado 🔄"
        )

    def _push_history(self, move: str) -> None:
        """Agrega un movimiento al historial y actualiza la lista visual.

        Args:
            move: Movimiento en texto (ej: "x[+1] +90°").
        """
        self.history.append(move)
        self.list_history.addItem(move)
        self.list_history.scrollToBottom()

    def _set_controls_enabled(self, enabled: bool) -> None:
        """Habilita o deshabilita la mezcla (el reinicio siempre queda disponible)."""
        self.btn_shuffle.setEnabled(enabled)
        self.spin_shuffle.setEnabled(enabled)

    # -------------------
    # Movimiento aplicado (desde GL)
    # -------------------
    def on_move_applied(self, move: str) -> None:
        """Callback cuando el GL widget confirma que un movimiento terminó de aplicarse.

        Args:
            move: Movimiento aplicado, en texto.
        """
        self._push_history(move)
        self._refresh_state_label()

        if not self.scheduler.busy:
            self._set_controls_enabled(True)

    # -------------------
    # Botones
    # -------------------
    def on_shuffle(self) -> None:
        """Mezcla el cubo encolando N movimientos aleatorios."""
        n = int(self.spin_shuffle.value())
        moves = self.scheduler.shuffle(n, rng=self._rng)
        if moves:
            self._set_controls_enabled(False)

    def on_solve(self) -> None:
        """Descarta la cola y el estado actual y vuelve a la configuración resuelta."""
        self.scheduler.reset()
        self.gl_widget.update()

        self.history.clear()
        self.list_history.clear()
        self._set_controls_enabled(True)
        self._refresh_state_label()

    def closeEvent(self, event: QCloseEvent) -> None:
        """Evento de cierre de ventana: cierra el enlace con el actuador.

        Args:
            event: Evento de cierre de Qt.
        """
        self.actuator.close()
        event.accept()
