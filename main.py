from __future__ import annotations

import sys
from typing import NoReturn

from PySide6.QtWidgets import QApplication

from swipe_cube.app.main_window import MainWindow
from swipe_cube.config import get_log_file, get_log_level
from swipe_cube.logging_config import setup_logging


def main() -> NoReturn:
    """Punto de entrada de la aplicación.

    Configura el logging, crea la instancia de `QApplication`, construye la
    ventana principal (`MainWindow`) y ejecuta el loop de eventos de Qt.

    Returns:
        No retorna (finaliza el proceso con `sys.exit`).
    """
    setup_logging(level=get_log_level(), log_file=get_log_file())

    app = QApplication(sys.argv)
    w = MainWindow()
    w.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
