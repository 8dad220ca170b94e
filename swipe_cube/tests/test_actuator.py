import logging
import os
import tempfile
import unittest
from unittest import mock

from websockets.exceptions import ConnectionClosed

from swipe_cube.config import get_actuator_uri, get_log_file, get_log_level
from swipe_cube.link.actuator import (
    Actuator,
    LogActuator,
    WebSocketActuator,
    create_actuator,
    move_command,
    solve_command,
)
from swipe_cube.logging_config import setup_logging


class FakeConnection:
    """Conexión que acepta el handshake pero se cae en cada envío."""

    def __init__(self):
        self.sent = []
        self.closed = 0

    def send(self, message):
        self.sent.append(message)
        raise ConnectionClosed(None, None)

    def close(self):
        self.closed += 1


class TestActuator(unittest.TestCase):
    def test_commands(self):
        self.assertEqual(
            move_command("x", -1, 1), {"cmd": "move", "axis": "x", "slice": -1, "dir": 1}
        )
        self.assertEqual(solve_command(), {"cmd": "solve"})

    def test_log_actuator_logs_commands(self):
        a = LogActuator()
        with self.assertLogs("swipe_cube.link.actuator", level="INFO") as cm:
            a.notify_move("x", 1, -1)
            a.notify_solve()
        self.assertIn("Axis:x | Index:1 | Dir:-1", cm.output[0])
        self.assertIn("SOLVE", cm.output[1])

    def test_create_actuator(self):
        self.assertIsInstance(create_actuator(None), LogActuator)
        self.assertIsInstance(create_actuator(""), LogActuator)

        ws = create_actuator("ws://127.0.0.1:9")
        try:
            self.assertIsInstance(ws, WebSocketActuator)
        finally:
            ws.close()

    def test_actuator_base_is_abstract(self):
        with self.assertRaises(TypeError):
            Actuator()

    def test_websocket_drops_commands_when_unreachable(self):
        with mock.patch(
            "swipe_cube.link.actuator.connect", side_effect=OSError("refused")
        ) as connect:
            a = WebSocketActuator("ws://cube.invalid:80")
            with self.assertLogs("swipe_cube.link.actuator", level="ERROR") as cm:
                a.notify_move("x", 1, -1)
                a.close()

        self.assertFalse(a._thread.is_alive())
        self.assertEqual(connect.call_count, 1)
        self.assertTrue(any("No se pudo conectar" in line for line in cm.output))
        self.assertTrue(any("Comando descartado" in line for line in cm.output))

    def test_websocket_reconnects_after_send_failure(self):
        connections = [FakeConnection(), FakeConnection()]
        with mock.patch(
            "swipe_cube.link.actuator.connect", side_effect=connections
        ) as connect:
            a = WebSocketActuator("ws://cube.local:80")
            with self.assertLogs("swipe_cube.link.actuator", level="ERROR") as cm:
                a.notify_move("y", 0, 1)
                a.notify_solve()
                a.close()

        self.assertFalse(a._thread.is_alive())
        self.assertEqual(connect.call_count, 2)
        self.assertEqual([c.closed for c in connections], [1, 1])
        self.assertIn('"cmd": "move"', connections[0].sent[0])
        self.assertIn('"cmd": "solve"', connections[1].sent[0])
        self.assertEqual(
            sum("Fallo al enviar" in line for line in cm.output), 2
        )
        self.assertIsNone(a._websocket)


class TestConfig(unittest.TestCase):
    def test_actuator_uri_from_env(self):
        with mock.patch.dict(os.environ, {"SWIPE_CUBE_ACTUATOR_URI": " ws://cube.local:80 "}):
            self.assertEqual(get_actuator_uri(), "ws://cube.local:80")
        with mock.patch.dict(os.environ, {"SWIPE_CUBE_ACTUATOR_URI": ""}):
            self.assertIsNone(get_actuator_uri())

    def test_log_level_from_env(self):
        with mock.patch.dict(os.environ, {"SWIPE_CUBE_LOG_LEVEL": "debug"}):
            self.assertEqual(get_log_level(), logging.DEBUG)
        with mock.patch.dict(os.environ, {"SWIPE_CUBE_LOG_LEVEL": "nope"}):
            self.assertEqual(get_log_level(), logging.INFO)

    def test_log_file_from_env(self):
        with mock.patch.dict(os.environ, {"SWIPE_CUBE_LOG_FILE": " /tmp/cube.log "}):
            self.assertEqual(get_log_file(), "/tmp/cube.log")
        with mock.patch.dict(os.environ, {"SWIPE_CUBE_LOG_FILE": ""}):
            self.assertIsNone(get_log_file())

    def test_setup_logging_writes_to_file(self):
        package_logger = logging.getLogger("swipe_cube")
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "cube.log")
            try:
                setup_logging(level=logging.INFO, log_file=path)
                logging.getLogger("swipe_cube.link.actuator").info("hola archivo")
            finally:
                for handler in list(package_logger.handlers):
                    handler.close()
                    package_logger.removeHandler(handler)
                package_logger.setLevel(logging.NOTSET)

            with open(path, encoding="utf-8") as f:
                contents = f.read()
        self.assertIn("Logging inicializado.", contents)
        self.assertIn("hola archivo", contents)


if __name__ == "__main__":
    unittest.main()
