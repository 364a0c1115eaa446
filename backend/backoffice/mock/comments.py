"""comments.py — Article comment moderation data.

Articles and their comment threads are seeded together on first access.
Root comments carry ``replyCount``; each root has exactly that many
replies. Article tables page by offset, threads page by cursor so the UI
can "load more" inside an expanded accordion.

Called by: mock/registry.py, api/routes/article_comments.py
Depends on: mock/fixtures.py, mock/pagination.py, mock/store.py
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any

from backoffice.core.errors import NotFoundError
from backoffice.mock.fixtures import COMMENT_STATUSES, FixtureGenerator
from backoffice.mock.pagination import CursorPage, cursor_slice, sort_items
from backoffice.mock.store import Entity, MockStore

logger = logging.getLogger(__name__)

ARTICLE_COUNT = 35
ROOTS_PER_ARTICLE = (8, 60)
MAX_REPLIES = 6

ARTICLE_SORT_KEYS = ("title", "createdAt", "updatedAt", "totalComments", "pendingComments")
COMMENT_SORT_KEYS = ("createdAt", "updatedAt", "likes", "status")


class ArticleCommentStore(MockStore):
    """Comments keyed by id, plus the articles they belong to."""

    def __init__(self, generator: FixtureGenerator) -> None:
        super().__init__(
            "article_comments",
            seeder=lambda: self._seed(generator),
            id_factory=generator.uuid,
        )
        self._articles: dict[str, Entity] = {}

    def _seed(self, generator: FixtureGenerator) -> list[Entity]:
        comments: list[Entity] = []
        for _ in range(ARTICLE_COUNT):
            article = generator.article()
            self._articles[article["id"]] = article
            for _ in range(generator.int_between(*ROOTS_PER_ARTICLE)):
                root = generator.article_comment(article["id"], reply_count=generator.int_between(0, MAX_REPLIES))
                comments.append(root)
                comments.extend(
                    generator.article_comment(article["id"], parent_id=root["id"]) for _ in range(root["replyCount"])
                )
        logger.info("article_comments_seeded articles=%d comments=%d", len(self._articles), len(comments))
        return comments

    def reset(self) -> None:
        super().reset()
        self._articles.clear()

    # ─── Articles ─────────────────────────────────────────────────────────────

    def articles(self) -> list[Entity]:
        self.ensure_dataset()
        return list(self._articles.values())

    def article(self, article_id: str) -> Entity:
        self.ensure_dataset()
        article = self._articles.get(article_id)
        if article is None:
            raise NotFoundError(f"Article '{article_id}' not found")
        return article

    def metrics(self, article_id: str) -> dict[str, Any]:
        """Comment counts for one article, replies included."""
        self.article(article_id)
        comments = [c for c in self.all() if c["articleId"] == article_id]
        counts = Counter(c["status"] for c in comments)
        return {
            "totalComments": len(comments),
            "approvedComments": counts["approved"],
            "pendingComments": counts["pending"],
            "rejectedComments": counts["rejected"],
            "latestCommentAt": max((c["createdAt"] for c in comments), default=None),
        }

    def summaries(
        self,
        search: str | None = None,
        status: str | None = None,
        sort_by: str = "createdAt",
        sort_dir: str = "desc",
    ) -> list[Entity]:
        """``{article, metrics}`` rows for the moderation table.

        ``search`` matches title or slug. ``status`` keeps articles with at
        least one comment in that status.
        """
        term = (search or "").strip().lower()
        rows = []
        for article in self.articles():
            if term and term not in article["title"].lower() and term not in article["slug"]:
                continue
            metrics = self.metrics(article["id"])
            if status and not metrics[f"{status}Comments"]:
                continue
            rows.append({"article": article, "metrics": metrics})

        if sort_by in ("totalComments", "pendingComments"):
            return sort_items(rows, sort_by, sort_dir, key=lambda row: row["metrics"][sort_by])
        if sort_by == "title":
            return sort_items(rows, sort_by, sort_dir, key=lambda row: row["article"]["title"].lower())
        field = sort_by if sort_by in ARTICLE_SORT_KEYS else "createdAt"
        return sort_items(rows, field, sort_dir, key=lambda row: row["article"][field])

    def stats(self) -> dict[str, Any]:
        comments = self.all()
        counts = Counter(c["status"] for c in comments)
        roots = [c for c in comments if c["parentId"] is None]
        per_article = Counter(c["articleId"] for c in comments)
        most_active = None
        if per_article:
            article_id, total = per_article.most_common(1)[0]
            most_active = {"articleId": article_id, "title": self._articles[article_id]["title"], "totalComments": total}
        return {
            "totalComments": len(comments),
            "totalApproved": counts["approved"],
            "totalPending": counts["pending"],
            "totalRejected": counts["rejected"],
            "uniqueCommenters": len({c["author"]["id"] for c in comments}),
            "avgRepliesPerComment": round(sum(c["replyCount"] for c in roots) / len(roots), 2) if roots else 0,
            "mostActiveArticle": most_active,
        }

    # ─── Threads ──────────────────────────────────────────────────────────────

    def thread(
        self,
        article_id: str,
        parent_id: str | None = None,
        *,
        status: str | None = None,
        min_likes: int | None = None,
        has_replies: bool | None = None,
        author: str | None = None,
        search: str | None = None,
        sort_by: str = "createdAt",
        sort_dir: str = "desc",
        cursor: str | None = None,
        page_size: int = 20,
    ) -> CursorPage[Entity]:
        """Root comments of an article, or the replies to ``parent_id``.

        Raises:
            NotFoundError: Unknown article, or a parent outside the article.
            InvalidPageSizeError: If page_size <= 0.
        """
        self.article(article_id)
        if parent_id is not None:
            parent = self.find_by_id(parent_id)
            if parent is None or parent["articleId"] != article_id:
                raise NotFoundError(f"Comment '{parent_id}' not found in article '{article_id}'")

        term = (search or "").strip().lower()
        who = (author or "").strip().lower()
        nodes = [
            c
            for c in self.all()
            if c["articleId"] == article_id
            and c["parentId"] == parent_id
            and (status is None or c["status"] == status)
            and (min_likes is None or c["likes"] >= min_likes)
            and (has_replies is None or (c["replyCount"] > 0) == has_replies)
            and (not who or who in c["author"]["name"].lower() or who == c["author"]["id"])
            and (not term or term in c["content"].lower())
        ]
        if sort_by == "status":
            nodes = sort_items(nodes, sort_by, sort_dir, key=lambda c: COMMENT_STATUSES.index(c["status"]))
        else:
            nodes = sort_items(nodes, sort_by if sort_by in COMMENT_SORT_KEYS else "createdAt", sort_dir)
        return cursor_slice(nodes, cursor, page_size)
