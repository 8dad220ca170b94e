import json
import logging
from abc import ABC, abstractmethod
import queue
import threading
from typing import Any, Dict, Optional

from websockets.exceptions import WebSocketException
from websockets.sync.client import ClientConnection, connect

logger = logging.getLogger(__name__)


def move_command(axis: str, slice_index: int, direction: int) -> Dict[str, Any]:
    """Comando JSON que describe un cuarto de vuelta para el actuador."""
    return {"cmd": "move", "axis": axis, "slice": slice_index, "dir": direction}


def solve_command() -> Dict[str, Any]:
    """Comando JSON de reinicio (cubo resuelto)."""
    return {"cmd": "solve"}


class Actuator(ABC):
    """Destino de una sola vía para los movimientos del cubo.

    Las notificaciones son fire-and-forget: no hay respuesta y los errores del
    enlace nunca llegan a quien notifica.
    """

    @abstractmethod
    def notify_move(self, axis: str, slice_index: int, direction: int) -> None:
        ...

    @abstractmethod
    def notify_solve(self) -> None:
        ...

    def close(self) -> None:
        pass


class LogActuator(Actuator):
    """Actuador sin hardware: solo registra los comandos en el log."""

    def notify_move(self, axis: str, slice_index: int, direction: int) -> None:
        logger.info("ACTUATOR CMD -> Axis:%s | Index:%s | Dir:%s", axis, slice_index, direction)

    def notify_solve(self) -> None:
        logger.info("ACTUATOR CMD -> SOLVE")


class WebSocketActuator(Actuator):
    """Envía los comandos a un actuador (ej: un ESP32) por WebSocket.

    El envío corre en un hilo propio alimentado por una cola, así el loop de frames
    nunca espera a la red. Si el envío falla, el comando se descarta, se registra el
    error y la conexión se reabre con el siguiente comando.
    """

    def __init__(self, uri: str, open_timeout: float = 3.0):
        self.uri = uri
        self.open_timeout = open_timeout
        self._websocket: Optional[ClientConnection] = None
        self._outbox: "queue.Queue[Optional[Dict[str, Any]]]" = queue.Queue()
        self._thread = threading.Thread(target=self._run, name="actuator-link", daemon=True)
        self._thread.start()

    def notify_move(self, axis: str, slice_index: int, direction: int) -> None:
        self._outbox.put(move_command(axis, slice_index, direction))

    def notify_solve(self) -> None:
        self._outbox.put(solve_command())

    def close(self) -> None:
        """Detiene el hilo de envío y cierra la conexión."""
        self._outbox.put(None)
        self._thread.join(timeout=2.0)

    def _run(self) -> None:
        while True:
            command = self._outbox.get()
            if command is None:
                break
            self._send(command)
        self._disconnect()

    def _ensure_connection(self) -> bool:
        if self._websocket is not None:
            return True
        try:
            self._websocket = connect(self.uri, open_timeout=self.open_timeout)
            logger.info("Conectado al actuador en %s", self.uri)
            return True
        except (OSError, TimeoutError, WebSocketException) as e:
            logger.error("No se pudo conectar al actuador: %s", e)
            self._websocket = None
            return False

    def _send(self, command: Dict[str, Any]) -> None:
        if not self._ensure_connection():
            logger.error("Comando descartado (sin conexión): %s", command)
            return
        try:
            self._websocket.send(json.dumps(command))
            logger.info("Comando enviado al actuador: %s", command)
        except (OSError, WebSocketException) as e:
            logger.error("Fallo al enviar al actuador: %s", e)
            self._disconnect()

    def _disconnect(self) -> None:
        if self._websocket is not None:
            try:
                self._websocket.close()
            except (OSError, WebSocketException) as e:
                logger.warning("Error al cerrar la conexión del actuador: %s", e)
            self._websocket = None


def create_actuator(uri: Optional[str] = None) -> Actuator:
    """Crea el actuador configurado: WebSocket si hay URI, log en caso contrario."""
    if uri:
        return WebSocketActuator(uri)
    return LogActuator()
