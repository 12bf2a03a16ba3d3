"""The news client: protocol requests and an interactive menu."""

from __future__ import annotations

import sys
from collections.abc import Callable, Sequence
from typing import TextIO

from newsboard.connection import Connection
from newsboard.database import ArticleNotFoundError, NewsgroupNotFoundError
from newsboard.messagehandler import MessageHandler
from newsboard.protocol import ConnectionClosedError, Protocol, ProtocolError

_TEXT_END = "::done"

_MENU = (
    "\nChoose an action:\n"
    "1 - List Newsgroups\n"
    "2 - Create Newsgroup\n"
    "3 - Delete Newsgroup\n"
    "4 - List Articles in Newsgroup\n"
    "5 - Create Article\n"
    "6 - Delete Article\n"
    "7 - Read Article\n"
    "0 - Quit\n"
    "Your choice: "
)


def _raise_for(error: Protocol) -> None:
    if error is Protocol.ERR_NG_DOES_NOT_EXIST:
        raise NewsgroupNotFoundError("Newsgroup does not exist")
    if error is Protocol.ERR_ART_DOES_NOT_EXIST:
        raise ArticleNotFoundError("Article does not exist")
    raise ProtocolError(f"unexpected error code {error.name}")


class NewsClient:
    """Sends requests to a news server over a byte connection."""

    def __init__(self, conn: object) -> None:
        self._handler = MessageHandler(conn)  # type: ignore[arg-type]

    def _send(self, command: Protocol, *args: int | str) -> None:
        self._handler.write_command(command)
        for arg in args:
            if isinstance(arg, str):
                self._handler.write_string(arg)
            else:
                self._handler.write_number(arg)
        self._handler.write_command(Protocol.COM_END)

    def _expect(self, answer: Protocol) -> None:
        code = self._handler.read_command()
        if code is not answer:
            raise ProtocolError(f"expected {answer.name}, got {code.name}")

    def _read_status(self) -> Protocol | None:
        """Return None on ACK, or the error code that follows a NAK."""
        status = self._handler.read_command()
        if status is Protocol.ANS_ACK:
            return None
        if status is Protocol.ANS_NAK:
            return self._handler.read_command()
        raise ProtocolError(f"expected ANS_ACK or ANS_NAK, got {status.name}")

    def _read_listing(self) -> list[tuple[int, str]]:
        count = self._handler.read_number()
        return [
            (self._handler.read_number(), self._handler.read_string())
            for _ in range(count)
        ]

    def list_newsgroups(self) -> list[tuple[int, str]]:
        """Return (id, name) of every newsgroup on the server."""
        self._send(Protocol.COM_LIST_NG)
        self._expect(Protocol.ANS_LIST_NG)
        groups = self._read_listing()
        self._expect(Protocol.ANS_END)
        return groups

    def create_newsgroup(self, name: str) -> bool:
        """Create a newsgroup; return False if the name is taken."""
        self._send(Protocol.COM_CREATE_NG, name)
        self._expect(Protocol.ANS_CREATE_NG)
        error = self._read_status()
        self._expect(Protocol.ANS_END)
        return error is None

    def delete_newsgroup(self, newsgroup_id: int) -> bool:
        """Delete a newsgroup; return False if it does not exist."""
        self._send(Protocol.COM_DELETE_NG, newsgroup_id)
        self._expect(Protocol.ANS_DELETE_NG)
        error = self._read_status()
        self._expect(Protocol.ANS_END)
        return error is None

    def list_articles(self, newsgroup_id: int) -> list[tuple[int, str]]:
        """Return (id, title) of every article in a newsgroup."""
        self._send(Protocol.COM_LIST_ART, newsgroup_id)
        self._expect(Protocol.ANS_LIST_ART)
        error = self._read_status()
        articles = self._read_listing() if error is None else []
        self._expect(Protocol.ANS_END)
        if error is not None:
            _raise_for(error)
        return articles

    def create_article(
        self, newsgroup_id: int, title: str, author: str, text: str
    ) -> bool:
        """Post an article; return False if the newsgroup does not exist."""
        self._send(Protocol.COM_CREATE_ART, newsgroup_id, title, author, text)
        self._expect(Protocol.ANS_CREATE_ART)
        error = self._read_status()
        self._expect(Protocol.ANS_END)
        return error is None

    def delete_article(self, newsgroup_id: int, article_id: int) -> None:
        """Delete an article, raising if the newsgroup or article is unknown."""
        self._send(Protocol.COM_DELETE_ART, newsgroup_id, article_id)
        self._expect(Protocol.ANS_DELETE_ART)
        error = self._read_status()
        self._expect(Protocol.ANS_END)
        if error is not None:
            _raise_for(error)

    def get_article(
        self, newsgroup_id: int, article_id: int
    ) -> tuple[str, str, str]:
        """Return (title, author, text), raising if either id is unknown."""
        self._send(Protocol.COM_GET_ART, newsgroup_id, article_id)
        self._expect(Protocol.ANS_GET_ART)
        error = self._read_status()
        article = ("", "", "")
        if error is None:
            article = (
                self._handler.read_string(),
                self._handler.read_string(),
                self._handler.read_string(),
            )
        self._expect(Protocol.ANS_END)
        if error is not None:
            _raise_for(error)
        return article


class _InvalidNumber(Exception):
    pass


class _Console:
    def __init__(self, stdin: TextIO, stdout: TextIO) -> None:
        self._stdin = stdin
        self._stdout = stdout

    def write(self, text: str) -> None:
        self._stdout.write(text)
        self._stdout.flush()

    def read_line(self) -> str:
        line = self._stdin.readline()
        if not line:
            raise EOFError
        return line[:-1] if line.endswith("\n") else line

    def ask(self, prompt: str) -> str:
        self.write(prompt)
        return self.read_line()

    def ask_number(self, prompt: str) -> int:
        answer = self.ask(prompt)
        try:
            return int(answer.strip())
        except ValueError:
            raise _InvalidNumber(answer) from None


def _show_newsgroups(client: NewsClient, console: _Console) -> None:
    groups = client.list_newsgroups()
    console.write("\nNewsgroups:\n")
    for ng_id, name in groups:
        console.write(f" [{ng_id}] {name}\n")


def _create_newsgroup(client: NewsClient, console: _Console) -> None:
    name = console.ask("Enter title for the new newsgroup: ")
    if client.create_newsgroup(name):
        console.write("Newsgroup created successfully.\n")
    else:
        console.write("Error: Newsgroup already exists.\n")


def _delete_newsgroup(client: NewsClient, console: _Console) -> None:
    ng_id = console.ask_number("Enter newsgroup ID to delete: ")
    if client.delete_newsgroup(ng_id):
        console.write("Newsgroup deleted.\n")
    else:
        console.write("Error: Newsgroup not found.\n")


def _show_articles(client: NewsClient, console: _Console) -> None:
    ng_id = console.ask_number("Enter newsgroup ID: ")
    try:
        articles = client.list_articles(ng_id)
    except NewsgroupNotFoundError:
        console.write("Error: Newsgroup does not exist.\n")
        return
    console.write("\nArticles:\n")
    for art_id, title in articles:
        console.write(f" [{art_id}] {title}\n")


def _create_article(client: NewsClient, console: _Console) -> None:
    ng_id = console.ask_number("Enter newsgroup ID: ")
    title = console.ask("Title: ")
    author = console.ask("Author: ")
    console.write(
        f"Enter article text (end with a single line containing '{_TEXT_END}'):\n"
    )
    lines = []
    while (line := console.read_line()) != _TEXT_END:
        lines.append(line + "\n")
    if client.create_article(ng_id, title, author, "".join(lines)):
        console.write("Article created.\n")
    else:
        console.write("Error: Newsgroup does not exist.\n")


def _delete_article(client: NewsClient, console: _Console) -> None:
    ng_id = console.ask_number("Enter newsgroup ID: ")
    art_id = console.ask_number("Enter article ID: ")
    try:
        client.delete_article(ng_id, art_id)
    except NewsgroupNotFoundError:
        console.write("Error: Newsgroup does not exist.\n")
    except ArticleNotFoundError:
        console.write("Error: Article does not exist.\n")
    else:
        console.write("Article deleted.\n")


def _read_article(client: NewsClient, console: _Console) -> None:
    ng_id = console.ask_number("Enter newsgroup ID: ")
    art_id = console.ask_number("Enter article ID: ")
    try:
        title, author, text = client.get_article(ng_id, art_id)
    except NewsgroupNotFoundError:
        console.write("Error: Newsgroup does not exist.\n")
    except ArticleNotFoundError:
        console.write("Error: Article does not exist.\n")
    else:
        console.write(f"\nTitle: {title}\nAuthor: {author}\nText:\n{text}\n")


_ACTIONS: dict[int, Callable[[NewsClient, _Console], None]] = {
    1: _show_newsgroups,
    2: _create_newsgroup,
    3: _delete_newsgroup,
    4: _show_articles,
    5: _create_article,
    6: _delete_article,
    7: _read_article,
}


def run_interactive(
    client: NewsClient,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> None:
    """Show the menu and carry out choices until quit or end of input."""
    console = _Console(stdin or sys.stdin, stdout or sys.stdout)
    while True:
        console.write(_MENU)
        try:
            line = console.read_line()
        except EOFError:
            return
        try:
            choice: int | None = int(line.strip())
        except ValueError:
            choice = None
        if choice == 0:
            console.write("Exiting...\n")
            return
        action = _ACTIONS.get(choice) if choice is not None else None
        if action is None:
            console.write("Invalid choice. Try again.\n")
            continue
        try:
            action(client, console)
        except EOFError:
            return
        except _InvalidNumber:
            console.write("Invalid number. Try again.\n")


def main(argv: Sequence[str] | None = None) -> int:
    """Connect to the server given as host and port and run the menu."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 2:
        print("Usage: news_client <host> <port>", file=sys.stderr)
        return 1
    host, port_text = args
    try:
        port = int(port_text)
    except ValueError:
        print("Usage: news_client <host> <port>", file=sys.stderr)
        return 1

    conn = Connection.connect(host, port)
    if not conn.is_connected():
        print("Connection failed.", file=sys.stderr)
        return 2
    with conn:
        try:
            run_interactive(NewsClient(conn), sys.stdin, sys.stdout)
        except ConnectionClosedError:
            print("Connection closed by server.", file=sys.stderr)
            return 3
    return 0


if __name__ == "__main__":
    sys.exit(main())