"""article_comments.py — Comment moderation across travel articles.

The article table pages by ``page``/``pageSize``; threads page by
``cursor``/``pageSize`` and answer ``nextCursor: null`` on the last window.

Called by: main.py
Depends on: api/deps.py, mock/comments.py (ArticleCommentStore)
"""

from __future__ import annotations

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Query

from backoffice.api.deps import PageParams, Registry, simulate_latency
from backoffice.api.envelope import ok
from backoffice.mock.pagination import paginate, parse_page_params

router = APIRouter(
    prefix="/mock/support/article-comments",
    tags=["support"],
    dependencies=[Depends(simulate_latency)],
)

CommentStatus = Literal["pending", "approved", "rejected"]
ArticleSort = Literal["title", "createdAt", "updatedAt", "totalComments", "pendingComments"]
CommentSort = Literal["createdAt", "updatedAt", "likes", "status"]
SortDir = Literal["asc", "desc"]

THREAD_PAGE_SIZE = 20


class ThreadQuery:
    """Filter, sort and cursor params shared by both thread endpoints."""

    def __init__(
        self,
        status: Annotated[CommentStatus | None, Query()] = None,
        min_likes: Annotated[int | None, Query(alias="minLikes", ge=0)] = None,
        has_replies: Annotated[bool | None, Query(alias="hasReplies")] = None,
        author: Annotated[str | None, Query()] = None,
        search: Annotated[str | None, Query()] = None,
        sort_by: Annotated[CommentSort, Query(alias="sortBy")] = "createdAt",
        sort_dir: Annotated[SortDir, Query(alias="sortDir")] = "desc",
        cursor: Annotated[str | None, Query()] = None,
        page_size: Annotated[str | None, Query(alias="pageSize")] = None,
    ) -> None:
        self.filters = {
            "status": status,
            "minLikes": min_likes,
            "hasReplies": has_replies,
            "author": author,
            "search": search,
        }
        self.sort = {"key": sort_by, "direction": sort_dir}
        self.cursor = cursor
        self.page_size = parse_page_params(None, page_size, THREAD_PAGE_SIZE)[1]

    def kwargs(self) -> dict:
        return {
            "status": self.filters["status"],
            "min_likes": self.filters["minLikes"],
            "has_replies": self.filters["hasReplies"],
            "author": self.filters["author"],
            "search": self.filters["search"],
            "sort_by": self.sort["key"],
            "sort_dir": self.sort["direction"],
            "cursor": self.cursor,
            "page_size": self.page_size,
        }


Thread = Annotated[ThreadQuery, Depends()]


def _segment(registry, article_id: str, parent_id: str | None, query: ThreadQuery):
    window = registry.article_comments.thread(article_id, parent_id, **query.kwargs())
    return ok(
        {
            "nodes": window.items,
            "meta": {
                "pagination": window.meta,
                "sort": query.sort,
                "filtersApplied": query.filters,
                "scope": {"articleId": article_id, "parentId": parent_id},
            },
        }
    )


@router.get("")
async def list_article_comment_summaries(
    registry: Registry,
    page_params: PageParams,
    search: Annotated[str | None, Query()] = None,
    status: Annotated[CommentStatus | None, Query()] = None,
    sort_by: Annotated[ArticleSort, Query(alias="sortBy")] = "createdAt",
    sort_dir: Annotated[SortDir, Query(alias="sortDir")] = "desc",
):
    """Articles with per-article comment metrics, offset-paged."""
    rows = registry.article_comments.summaries(search=search, status=status, sort_by=sort_by, sort_dir=sort_dir)
    return ok(
        {
            **paginate(rows, *page_params).model_dump(by_alias=True),
            "sort": {"key": sort_by, "direction": sort_dir},
            "filtersApplied": {"search": search, "status": status},
        }
    )


@router.get("/stats")
async def article_comment_stats(registry: Registry):
    return ok(registry.article_comments.stats())


@router.get("/{article_id}")
async def list_root_comments(article_id: str, registry: Registry, query: Thread):
    return _segment(registry, article_id, None, query)


@router.get("/{article_id}/{parent_id}")
async def list_replies(article_id: str, parent_id: str, registry: Registry, query: Thread):
    return _segment(registry, article_id, parent_id, query)
