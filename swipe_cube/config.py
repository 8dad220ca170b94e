"""
Configuration
=============
Constantes globales del simulador (geometría, tiempos de animación, mezcla) y
los valores que se pueden sobreescribir con variables de entorno.

Variables de entorno:
    SWIPE_CUBE_ACTUATOR_URI: URI WebSocket del actuador (ej: "ws://192.168.4.1:80").
        Si no se define, los comandos solo se registran en el log.
    SWIPE_CUBE_LOG_LEVEL: Nivel de logging ("DEBUG", "INFO", ...).
    SWIPE_CUBE_LOG_FILE: Ruta opcional de un archivo donde copiar también los logs.
"""
import logging
import os
from typing import Optional

# Geometría: tamaño de cada cubelet y separación entre ellos
CUBE_SIZE: float = 1.0
SPACING: float = 0.05
CELL_PITCH: float = CUBE_SIZE + SPACING

# Tiempos de animación (ms)
SWIPE_DURATION_MS: float = 300.0
SHUFFLE_DURATION_MS: float = 200.0
FRAME_INTERVAL_MS: int = 16  # ~60fps

# Mezcla
SHUFFLE_MOVES: int = 20


def get_actuator_uri() -> Optional[str]:
    """URI del actuador configurada por entorno, o None si no hay actuador físico."""
    uri = os.environ.get("SWIPE_CUBE_ACTUATOR_URI", "").strip()
    return uri or None


def get_log_level() -> int:
    """Nivel de logging configurado por entorno (INFO por defecto)."""
    name = os.environ.get("SWIPE_CUBE_LOG_LEVEL", "INFO").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def get_log_file() -> Optional[str]:
    """Ruta del archivo de log configurada por entorno, o None para loguear solo a consola."""
    path = os.environ.get("SWIPE_CUBE_LOG_FILE", "").strip()
    return path or None
