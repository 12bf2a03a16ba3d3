import io
import socket
import threading

import pytest

from newsboard.connection import Connection
from newsboard.database import (
    ArticleNotFoundError,
    MemoryDatabase,
    NewsgroupNotFoundError,
)
from newsboard.messagehandler import MessageHandler
from newsboard.news_client import NewsClient, main, run_interactive
from newsboard.news_server import handle_request
from newsboard.protocol import ConnectionClosedError, Protocol, ProtocolError


class _Scripted:
    def __init__(self, data: bytes) -> None:
        self._data = iter(data)
        self.written = bytearray()

    def read(self) -> int:
        try:
            return next(self._data)
        except StopIteration:
            raise ConnectionClosedError() from None

    def write(self, byte: int) -> None:
        self.written.append(int(byte) & 0xFF)


@pytest.fixture
def client():
    client_sock, server_sock = socket.socketpair()
    db = MemoryDatabase()

    def answer_requests():
        handler = MessageHandler(Connection(server_sock))
        try:
            while True:
                handle_request(handler, db)
        except ConnectionClosedError:
            pass

    thread = threading.Thread(target=answer_requests, daemon=True)
    thread.start()
    conn = Connection(client_sock)
    yield NewsClient(conn)
    conn.close()
    thread.join(timeout=5)
    server_sock.close()


def _interact(client: NewsClient, script: str) -> str:
    out = io.StringIO()
    run_interactive(client, io.StringIO(script), out)
    return out.getvalue()


def test_list_newsgroups_request_and_reply_bytes():
    channel = _Scripted(bytes([20, 41, 0, 0, 0, 0, 27]))
    assert NewsClient(channel).list_newsgroups() == []
    assert bytes(channel.written) == bytes([1, 8])


def test_unexpected_answer_raises_protocol_error():
    channel = _Scripted(bytes([Protocol.ANS_END]))
    with pytest.raises(ProtocolError):
        NewsClient(channel).list_newsgroups()


def test_closed_connection_raises():
    with pytest.raises(ConnectionClosedError):
        NewsClient(_Scripted(b"")).create_newsgroup("x")


def test_create_and_list_newsgroups(client):
    assert client.list_newsgroups() == []
    assert client.create_newsgroup("comp.lang")
    assert client.create_newsgroup("rec.music")
    assert client.list_newsgroups() == [(1, "comp.lang"), (2, "rec.music")]


def test_duplicate_newsgroup_refused(client):
    assert client.create_newsgroup("news")
    assert not client.create_newsgroup("news")
    assert len(client.list_newsgroups()) == 1


def test_delete_newsgroup(client):
    client.create_newsgroup("news")
    (ng_id, _), = client.list_newsgroups()
    assert client.delete_newsgroup(ng_id)
    assert not client.delete_newsgroup(ng_id)
    assert client.list_newsgroups() == []


def test_list_articles_of_missing_newsgroup(client):
    with pytest.raises(NewsgroupNotFoundError):
        client.list_articles(5)
    # the connection stays usable after an error answer
    assert client.list_newsgroups() == []


def test_article_round_trip(client):
    client.create_newsgroup("news")
    (ng_id, _), = client.list_newsgroups()
    assert client.create_article(ng_id, "Hello", "Ann", "Grüße\nline two\n")
    (art_id, title), = client.list_articles(ng_id)
    assert title == "Hello"
    assert client.get_article(ng_id, art_id) == ("Hello", "Ann", "Grüße\nline two\n")


def test_create_article_in_missing_newsgroup(client):
    assert not client.create_article(5, "t", "a", "x")


def test_delete_article_errors_and_success(client):
    client.create_newsgroup("news")
    (ng_id, _), = client.list_newsgroups()
    client.create_article(ng_id, "t", "a", "x")
    (art_id, _), = client.list_articles(ng_id)

    with pytest.raises(NewsgroupNotFoundError):
        client.delete_article(ng_id + 1, art_id)
    with pytest.raises(ArticleNotFoundError):
        client.delete_article(ng_id, art_id + 1)
    client.delete_article(ng_id, art_id)
    assert client.list_articles(ng_id) == []
    with pytest.raises(ArticleNotFoundError):
        client.get_article(ng_id, art_id)


def test_get_article_in_missing_newsgroup(client):
    with pytest.raises(NewsgroupNotFoundError):
        client.get_article(1, 1)


def test_interactive_create_and_list(client):
    output = _interact(client, "2\nTech\n1\n0\n")
    assert "Newsgroup created successfully.\n" in output
    assert " [1] Tech\n" in output
    assert output.endswith("Exiting...\n")


def test_interactive_article_flow(client):
    script = "2\nG\n5\n1\nTitle\nMe\nline one\nline two\n::done\n4\n1\n7\n1\n1\n0\n"
    output = _interact(client, script)
    assert "Article created.\n" in output
    assert "\nArticles:\n [1] Title\n" in output
    assert "\nTitle: Title\nAuthor: Me\nText:\nline one\nline two\n\n" in output


def test_interactive_errors(client):
    script = "2\nG\n2\nG\n3\n9\n6\n1\n4\n6\n9\n1\n7\n9\n1\n0\n"
    output = _interact(client, script)
    assert "Error: Newsgroup already exists.\n" in output
    assert "Error: Newsgroup not found.\n" in output
    assert "Error: Article does not exist.\n" in output
    assert "Error: Newsgroup does not exist.\n" in output


def test_interactive_invalid_input(client):
    output = _interact(client, "42\nabc\n3\nnot-a-number\n0\n")
    assert output.count("Invalid choice. Try again.\n") == 2
    assert "Invalid number. Try again.\n" in output
    assert output.endswith("Exiting...\n")


def test_interactive_stops_at_end_of_input(client):
    output = _interact(client, "2\nOnly\n")
    assert "Newsgroup created successfully.\n" in output
    assert "Exiting..." not in output
    assert client.list_newsgroups() == [(1, "Only")]


@pytest.mark.parametrize("argv", [[], ["host"], ["host", "port"], ["a", "1", "2"]])
def test_main_rejects_bad_arguments(argv, capsys):
    assert main(argv) == 1
    assert "Usage" in capsys.readouterr().err


def test_main_reports_failed_connection(capsys):
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as probe:
        probe.bind(("127.0.0.1", 0))
        port = probe.getsockname()[1]
    assert main(["127.0.0.1", str(port)]) == 2
    assert "Connection failed." in capsys.readouterr().err