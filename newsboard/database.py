"""Storage of newsgroups and their articles."""

from __future__ import annotations

from abc import ABC, abstractmethod

from newsboard.newsgroup import Newsgroup

FIRST_NEWSGROUP_ID = 1


class NewsgroupNotFoundError(LookupError):
    """Raised when no newsgroup has the requested id."""


class ArticleNotFoundError(LookupError):
    """Raised when a newsgroup has no article with the requested id."""


class Database(ABC):
    """Operations a news server needs from its storage."""

    @abstractmethod
    def list_newsgroups(self) -> list[tuple[int, str]]:
        """Return (id, name) for every newsgroup, ordered by id."""

    @abstractmethod
    def create_newsgroup(self, name: str) -> bool:
        """Create a newsgroup; return False if the name is taken."""

    @abstractmethod
    def delete_newsgroup(self, newsgroup_id: int) -> bool:
        """Delete a newsgroup; return False if it does not exist."""

    @abstractmethod
    def list_articles(self, newsgroup_id: int) -> list[tuple[int, str]]:
        """Return (id, title) for every article in a newsgroup."""

    @abstractmethod
    def create_article(
        self, newsgroup_id: int, title: str, author: str, text: str
    ) -> bool:
        """Add an article; return False if the newsgroup does not exist."""

    @abstractmethod
    def delete_article(self, newsgroup_id: int, article_id: int) -> bool:
        """Delete an article; return False if either id is unknown."""

    @abstractmethod
    def get_article(
        self, newsgroup_id: int, article_id: int
    ) -> tuple[str, str, str]:
        """Return (title, author, text) of an article."""


class MemoryDatabase(Database):
    """A database kept entirely in memory."""

    def __init__(self) -> None:
        self._newsgroups: dict[int, Newsgroup] = {}
        self._next_newsgroup_id = FIRST_NEWSGROUP_ID

    def _group(self, newsgroup_id: int) -> Newsgroup:
        try:
            return self._newsgroups[newsgroup_id]
        except KeyError:
            raise NewsgroupNotFoundError("Newsgroup not found") from None

    def list_newsgroups(self) -> list[tuple[int, str]]:
        return [(ng_id, ng.title) for ng_id, ng in sorted(self._newsgroups.items())]

    def create_newsgroup(self, name: str) -> bool:
        if any(ng.title == name for ng in self._newsgroups.values()):
            return False
        ng_id = self._next_newsgroup_id
        self._newsgroups[ng_id] = Newsgroup(ng_id, name)
        self._next_newsgroup_id += 1
        return True

    def delete_newsgroup(self, newsgroup_id: int) -> bool:
        return self._newsgroups.pop(newsgroup_id, None) is not None

    def list_articles(self, newsgroup_id: int) -> list[tuple[int, str]]:
        group = self._group(newsgroup_id)
        return [(a.article_id, a.title) for a in group.articles]

    def create_article(
        self, newsgroup_id: int, title: str, author: str, text: str
    ) -> bool:
        group = self._newsgroups.get(newsgroup_id)
        if group is None:
            return False
        group.add_article(title, author, text)
        return True

    def delete_article(self, newsgroup_id: int, article_id: int) -> bool:
        group = self._newsgroups.get(newsgroup_id)
        if group is None:
            return False
        return group.delete_article(article_id)

    def get_article(
        self, newsgroup_id: int, article_id: int
    ) -> tuple[str, str, str]:
        article = self._group(newsgroup_id).get_article(article_id)
        if article is None:
            raise ArticleNotFoundError("Article not found")
        return article.title, article.author, article.text