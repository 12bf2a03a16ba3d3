"""Articles and the newsgroups that hold them."""

from __future__ import annotations

from dataclasses import dataclass, field

FIRST_ARTICLE_ID = 1


@dataclass(frozen=True)
class Article:
    """A single article posted to a newsgroup."""

    article_id: int
    title: str
    author: str
    text: str


@dataclass
class Newsgroup:
    """A named newsgroup holding articles in the order they were posted."""

    newsgroup_id: int
    title: str
    _articles: list[Article] = field(default_factory=list, init=False, repr=False)
    _next_article_id: int = field(default=FIRST_ARTICLE_ID, init=False, repr=False)

    @property
    def articles(self) -> tuple[Article, ...]:
        """The articles, oldest first."""
        return tuple(self._articles)

    def add_article(self, title: str, author: str, text: str) -> int:
        """Add an article and return the id it was given."""
        article_id = self._next_article_id
        self._articles.append(Article(article_id, title, author, text))
        self._next_article_id += 1
        return article_id

    def delete_article(self, article_id: int) -> bool:
        """Remove the article with this id; return whether one was removed."""
        for index, article in enumerate(self._articles):
            if article.article_id == article_id:
                del self._articles[index]
                return True
        return False

    def get_article(self, article_id: int) -> Article | None:
        """Return the article with this id, or None if there is none."""
        return next(
            (a for a in self._articles if a.article_id == article_id), None
        )