"""The news server: answers protocol requests from a shared database."""

from __future__ import annotations

import sys
from collections.abc import Callable, Sequence

from newsboard.connection import Connection
from newsboard.database import (
    ArticleNotFoundError,
    Database,
    MemoryDatabase,
    NewsgroupNotFoundError,
)
from newsboard.messagehandler import MessageHandler
from newsboard.protocol import ConnectionClosedError, Protocol
from newsboard.server import Server


def _write_status(handler: MessageHandler, ok: bool, error: Protocol) -> None:
    if ok:
        handler.write_command(Protocol.ANS_ACK)
    else:
        handler.write_command(Protocol.ANS_NAK)
        handler.write_command(error)


def _has_newsgroup(db: Database, newsgroup_id: int) -> bool:
    return any(ng_id == newsgroup_id for ng_id, _ in db.list_newsgroups())


def _list_newsgroups(handler: MessageHandler, db: Database) -> None:
    handler.read_command()  # COM_END
    groups = db.list_newsgroups()
    handler.write_command(Protocol.ANS_LIST_NG)
    handler.write_number(len(groups))
    for ng_id, name in groups:
        handler.write_number(ng_id)
        handler.write_string(name)
    handler.write_command(Protocol.ANS_END)


def _create_newsgroup(handler: MessageHandler, db: Database) -> None:
    name = handler.read_string()
    handler.read_command()  # COM_END
    ok = db.create_newsgroup(name)
    handler.write_command(Protocol.ANS_CREATE_NG)
    _write_status(handler, ok, Protocol.ERR_NG_ALREADY_EXISTS)
    handler.write_command(Protocol.ANS_END)


def _delete_newsgroup(handler: MessageHandler, db: Database) -> None:
    ng_id = handler.read_number()
    handler.read_command()  # COM_END
    ok = db.delete_newsgroup(ng_id)
    handler.write_command(Protocol.ANS_DELETE_NG)
    _write_status(handler, ok, Protocol.ERR_NG_DOES_NOT_EXIST)
    handler.write_command(Protocol.ANS_END)


def _list_articles(handler: MessageHandler, db: Database) -> None:
    ng_id = handler.read_number()
    handler.read_command()  # COM_END
    handler.write_command(Protocol.ANS_LIST_ART)
    try:
        articles = db.list_articles(ng_id)
    except NewsgroupNotFoundError:
        _write_status(handler, False, Protocol.ERR_NG_DOES_NOT_EXIST)
    else:
        handler.write_command(Protocol.ANS_ACK)
        handler.write_number(len(articles))
        for art_id, title in articles:
            handler.write_number(art_id)
            handler.write_string(title)
    handler.write_command(Protocol.ANS_END)


def _create_article(handler: MessageHandler, db: Database) -> None:
    ng_id = handler.read_number()
    title = handler.read_string()
    author = handler.read_string()
    text = handler.read_string()
    handler.read_command()  # COM_END
    ok = db.create_article(ng_id, title, author, text)
    handler.write_command(Protocol.ANS_CREATE_ART)
    _write_status(handler, ok, Protocol.ERR_NG_DOES_NOT_EXIST)
    handler.write_command(Protocol.ANS_END)


def _delete_article(handler: MessageHandler, db: Database) -> None:
    ng_id = handler.read_number()
    art_id = handler.read_number()
    handler.read_command()  # COM_END
    handler.write_command(Protocol.ANS_DELETE_ART)
    if db.delete_article(ng_id, art_id):
        handler.write_command(Protocol.ANS_ACK)
    elif _has_newsgroup(db, ng_id):
        _write_status(handler, False, Protocol.ERR_ART_DOES_NOT_EXIST)
    else:
        _write_status(handler, False, Protocol.ERR_NG_DOES_NOT_EXIST)
    handler.write_command(Protocol.ANS_END)


def _get_article(handler: MessageHandler, db: Database) -> None:
    ng_id = handler.read_number()
    art_id = handler.read_number()
    handler.read_command()  # COM_END
    handler.write_command(Protocol.ANS_GET_ART)
    try:
        title, author, text = db.get_article(ng_id, art_id)
    except NewsgroupNotFoundError:
        _write_status(handler, False, Protocol.ERR_NG_DOES_NOT_EXIST)
    except ArticleNotFoundError:
        _write_status(handler, False, Protocol.ERR_ART_DOES_NOT_EXIST)
    else:
        handler.write_command(Protocol.ANS_ACK)
        handler.write_string(title)
        handler.write_string(author)
        handler.write_string(text)
    handler.write_command(Protocol.ANS_END)


_REQUESTS: dict[Protocol, Callable[[MessageHandler, Database], None]] = {
    Protocol.COM_LIST_NG: _list_newsgroups,
    Protocol.COM_CREATE_NG: _create_newsgroup,
    Protocol.COM_DELETE_NG: _delete_newsgroup,
    Protocol.COM_LIST_ART: _list_articles,
    Protocol.COM_CREATE_ART: _create_article,
    Protocol.COM_DELETE_ART: _delete_article,
    Protocol.COM_GET_ART: _get_article,
}


def handle_request(handler: MessageHandler, db: Database) -> None:
    """Read one request from handler and write its answer.

    A closed connection is passed on as ConnectionClosedError; any other
    failure is reported on standard error and the request is dropped.
    """
    try:
        command = handler.read_command()
        answer = _REQUESTS.get(command)
        if answer is None:
            print("Unknown command received", file=sys.stderr)
            return
        answer(handler, db)
    except ConnectionClosedError:
        raise
    except Exception as exc:
        print(f"Exception while handling client: {exc}", file=sys.stderr)


def serve(server: Server, db: Database) -> None:
    """Accept clients and answer their requests until interrupted."""
    while True:
        conn = server.wait_for_activity()
        if conn is None:
            server.register_connection(Connection())
            print("New client connected", flush=True)
            continue
        try:
            handle_request(MessageHandler(conn), db)
        except ConnectionClosedError:
            server.deregister_connection(conn)
            print("Client disconnected", flush=True)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the news server on the port given as the only argument."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("Usage: news_server <port>", file=sys.stderr)
        return 1
    try:
        port = int(args[0])
    except ValueError:
        print(f"Invalid port: {args[0]}", file=sys.stderr)
        return 1

    with Server(port) as server:
        if not server.is_ready():
            print("Server failed to start.", file=sys.stderr)
            return 2
        print(f"Server running on port {port}", flush=True)
        try:
            serve(server, MemoryDatabase())
        except KeyboardInterrupt:
            pass
    return 0


if __name__ == "__main__":
    sys.exit(main())