# newsboard

newsboard is a small news system in two parts. The server keeps
newsgroups and their articles in memory. The client is interactive and
lets you browse and edit them. The two parts talk over TCP with a
compact binary protocol. It uses one-byte codes, tagged signed 32-bit
numbers and length-prefixed UTF-8 strings.

## Installation

```
pip install .
```

To run the tests, install the `test` extra and run `pytest`:

```
pip install .[test]
pytest
```

## Running the server

```
news-server 7878
```

The server listens on the given port on all interfaces and accepts any
number of clients. It answers each request as it arrives and prints
`New client connected` and `Client disconnected` as clients come and go.
It stops on Ctrl-C.

Exit status:

- 1 for a missing or non-numeric port.
- 2 when the port cannot be bound, with the message `Server failed to start.`

The same command can also be started as `python -m newsboard.news_server 7878`.

## Running the client

```
news-client localhost 7878
```

The client shows a menu:

```
1 - List Newsgroups
2 - Create Newsgroup
3 - Delete Newsgroup
4 - List Articles in Newsgroup
5 - Create Article
6 - Delete Article
7 - Read Article
0 - Quit
```

When you write an article, type its text line by line. End the text with
a line that holds only `::done`. Each line of the text is stored with a
trailing newline.

The client quits on `0` or at the end of its input. If you give an
invalid menu choice, it prints `Invalid choice. Try again.`. If it asks
for an id and gets something that is not a number, it prints
`Invalid number. Try again.`.

Exit status:

- 1 for wrong arguments.
- 2 when the connection cannot be made (`Connection failed.`).
- 3 when the server closes the connection.

The same command can also be started as
`python -m newsboard.news_client localhost 7878`.

## Using the library

### Storage

```python
from newsboard.database import MemoryDatabase

db = MemoryDatabase()
db.create_newsgroup("comp.lang.python")         # True
db.create_newsgroup("comp.lang.python")         # False, name taken
db.create_article(1, "Hello", "Ann", "First post\n")   # True
db.list_newsgroups()                            # [(1, "comp.lang.python")]
db.list_articles(1)                             # [(1, "Hello")]
db.get_article(1, 1)                            # ("Hello", "Ann", "First post\n")
db.delete_article(1, 1)                         # True
db.delete_newsgroup(1)                          # True
```

Newsgroup ids and article ids start at 1 and are never reused.
`list_newsgroups` is ordered by id. `list_articles` lists articles oldest
first.

When ids are unknown, `create_article`, `delete_article` and
`delete_newsgroup` return `False`. When a newsgroup is unknown,
`list_articles` and `get_article` raise `NewsgroupNotFoundError`. When the
article is unknown, `get_article` raises `ArticleNotFoundError`. Both
error classes are in `newsboard.database` and both are `LookupError`s.

`Database` is the abstract base class that the server works against.
`newsboard.newsgroup` holds the `Newsgroup` and `Article` classes that
`MemoryDatabase` stores.

### Client

`NewsClient` in `newsboard.news_client` wraps a connection to a running
server. Each method sends one request and reads its answer:

- `list_newsgroups()` and `list_articles(newsgroup_id)` return lists of
  `(id, name)` pairs.
- `create_newsgroup(name)`, `delete_newsgroup(newsgroup_id)` and
  `create_article(newsgroup_id, title, author, text)` return `True` or
  `False`.
- `delete_article(newsgroup_id, article_id)` returns nothing.
- `get_article(newsgroup_id, article_id)` returns `(title, author, text)`.

For unknown ids, `list_articles`, `delete_article` and `get_article`
raise `NewsgroupNotFoundError` or `ArticleNotFoundError`. An answer that
does not follow the protocol raises `ProtocolError`.

```python
from newsboard.connection import Connection
from newsboard.news_client import NewsClient

with Connection.connect("localhost", 7878) as conn:
    client = NewsClient(conn)
    client.create_newsgroup("misc.test")
    print(client.list_newsgroups())
```

`run_interactive(client, stdin, stdout)` runs the menu on any pair of
text streams.

### Transport

`Connection` reads and writes single bytes over a TCP socket. Reading or
writing on a connection the peer has closed raises
`ConnectionClosedError`.

`Server` listens on a port:

- `wait_for_activity()` returns the registered connection that has data,
  or `None` when a new client is waiting.
- `register_connection` and `deregister_connection` add and drop clients.

`MessageHandler` encodes and decodes commands, numbers and strings on
anything that has a `read()` and a `write(byte)` method.
`handle_request(handler, db)` and `serve(server, db)` in
`newsboard.news_server` are the server's request loop.

## Protocol

The codes are in `newsboard.protocol.Protocol`.

- A number is `PAR_NUM` (41) followed by four big-endian bytes, signed.
- A string is `PAR_STRING` (40), then its byte length as a number, then
  its UTF-8 bytes.
- Every command ends with `COM_END` (8).
- Every answer ends with `ANS_END` (27).
- A status is `ANS_ACK` (28), or `ANS_NAK` (29) followed by an error code:
  - 50: the newsgroup already exists.
  - 51: the newsgroup does not exist.
  - 52: the article does not exist.

## What it does not do

All data is kept in memory only. Nothing is saved to disk, and everything
is lost when the server stops. There is no authentication, and nothing
limits who may create or delete newsgroups and articles.