"""Command, answer, parameter and error codes of the news protocol."""

from __future__ import annotations

from enum import IntEnum


class Protocol(IntEnum):
    """One-byte codes exchanged between news client and server."""

    UNDEFINED = 0

    # Commands, client to server
    COM_LIST_NG = 1
    COM_CREATE_NG = 2
    COM_DELETE_NG = 3
    COM_LIST_ART = 4
    COM_CREATE_ART = 5
    COM_DELETE_ART = 6
    COM_GET_ART = 7
    COM_END = 8

    # Answers, server to client
    ANS_LIST_NG = 20
    ANS_CREATE_NG = 21
    ANS_DELETE_NG = 22
    ANS_LIST_ART = 23
    ANS_CREATE_ART = 24
    ANS_DELETE_ART = 25
    ANS_GET_ART = 26
    ANS_END = 27
    ANS_ACK = 28
    ANS_NAK = 29

    # Parameter markers
    PAR_STRING = 40
    PAR_NUM = 41

    # Error codes
    ERR_NG_ALREADY_EXISTS = 50
    ERR_NG_DOES_NOT_EXIST = 51
    ERR_ART_DOES_NOT_EXIST = 52


class ConnectionClosedError(Exception):
    """Raised when reading from or writing to a closed connection."""

    def __init__(self, message: str = "connection closed") -> None:
        super().__init__(message)


class ProtocolError(Exception):
    """Raised when the bytes on the wire do not follow the protocol."""