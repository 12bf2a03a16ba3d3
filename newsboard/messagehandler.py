"""Reading and writing protocol values over a byte connection."""

from __future__ import annotations

from typing import Protocol as _Typing

from newsboard.protocol import Protocol, ProtocolError

_NUMBER_SIZE = 4


class _ByteChannel(_Typing):
    def read(self) -> int: ...

    def write(self, byte: int) -> None: ...


class MessageHandler:
    """Encodes and decodes commands, numbers and strings on a connection.

    The connection must offer read() returning one byte as an int and
    write(byte) taking one.
    """

    def __init__(self, conn: _ByteChannel) -> None:
        self._conn = conn

    def _read_bytes(self, count: int) -> bytes:
        return bytes(self._conn.read() for _ in range(count))

    def _write_bytes(self, data: bytes) -> None:
        for byte in data:
            self._conn.write(byte)

    def _expect(self, marker: Protocol) -> None:
        code = self._conn.read()
        if code != marker:
            raise ProtocolError(
                f"expected {marker.name} before reading value, got {code}"
            )

    def read_command(self) -> Protocol:
        """Read one code byte."""
        code = self._conn.read()
        try:
            return Protocol(code)
        except ValueError:
            raise ProtocolError(f"unknown protocol code {code}") from None

    def read_number(self) -> int:
        """Read a PAR_NUM marker followed by a signed 32-bit big-endian int."""
        self._expect(Protocol.PAR_NUM)
        return int.from_bytes(self._read_bytes(_NUMBER_SIZE), "big", signed=True)

    def read_string(self) -> str:
        """Read a PAR_STRING marker, a length number and that many bytes."""
        self._expect(Protocol.PAR_STRING)
        length = self.read_number()
        return self._read_bytes(max(length, 0)).decode("utf-8", errors="replace")

    def write_command(self, cmd: Protocol) -> None:
        """Write one code byte."""
        self._conn.write(int(cmd))

    def write_number(self, number: int) -> None:
        """Write a PAR_NUM marker and the number as 32 bits, big-endian."""
        self._conn.write(Protocol.PAR_NUM)
        self._write_bytes((number & 0xFFFFFFFF).to_bytes(_NUMBER_SIZE, "big"))

    def write_string(self, text: str) -> None:
        """Write a PAR_STRING marker, the byte length and the UTF-8 bytes."""
        data = text.encode("utf-8")
        self._conn.write(Protocol.PAR_STRING)
        self.write_number(len(data))
        self._write_bytes(data)