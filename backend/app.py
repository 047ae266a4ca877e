from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from catalog import Article, CatalogEntry, NotFound, Section, config
from retrieval import QueryService

logger = logging.getLogger(__name__)

# Anchor for headings with no text or only punctuation
TOC_FALLBACK_ID = "section"


class EntryModel(BaseModel):
    category: str
    slug: str
    title: str
    description: str = ""


class SectionModel(BaseModel):
    text: str
    level: int = Field(..., ge=1, le=6)


class TocItem(BaseModel):
    level: int
    title: str
    id: str


class ArticleModel(EntryModel):
    content: str
    sections: List[SectionModel]
    toc: List[TocItem]
    word_count: int


class CategoriesResponse(BaseModel):
    categories: List[str]


class ArticleListResponse(BaseModel):
    category: str
    articles: List[EntryModel]


class StatsResponse(BaseModel):
    total_categories: int
    total_articles: int
    total_words: int
    by_category: Dict[str, int]
    words_by_category: Dict[str, int]


def entry_to_model(entry: CatalogEntry) -> EntryModel:
    return EntryModel(**entry.to_dict())


def article_to_model(article: Article) -> ArticleModel:
    return ArticleModel(
        category=article.category,
        slug=article.slug,
        title=article.title,
        description=article.description,
        content=article.raw_content,
        sections=[SectionModel(text=s.text, level=s.level) for s in article.sections],
        toc=[TocItem(**item) for item in build_toc(article.sections)],
        word_count=article.word_count,
    )


def build_toc(sections: Sequence[Section]) -> List[Dict[str, object]]:
    """Build a table of contents with anchor ids from an article's headings.

    Ids follow the GitHub convention: punctuation removed, lowercased,
    spaces to hyphens, and a numeric suffix for repeats.
    """
    toc = []
    heading_counts: Dict[str, int] = {}

    for section in sections:
        clean_title = re.sub(r"[^\w\s-]", "", section.text)
        heading_id = clean_title.strip().lower().replace(" ", "-") or TOC_FALLBACK_ID

        if heading_id in heading_counts:
            heading_counts[heading_id] += 1
            heading_id = f"{heading_id}-{heading_counts[heading_id]}"
        else:
            heading_counts[heading_id] = 0

        toc.append({
            "level": section.level,
            "title": section.text,
            "id": heading_id,
        })

    return toc


def get_service(request: Request) -> QueryService:
    return request.app.state.service


def create_app(service: QueryService, cors_origins: Optional[str] = None) -> FastAPI:
    """Create the HTTP API over an already built query service."""
    app = FastAPI(title="Topic Catalog", version="1.0.0")
    app.state.service = service

    # For production, set CORS_ORIGINS="https://yourdomain.com,https://app.yourdomain.com"
    cors_origins_str = cors_origins if cors_origins is not None else config.CORS_ORIGINS
    if cors_origins_str == "*":
        allowed_origins = ["*"]
    else:
        allowed_origins = [origin.strip() for origin in cors_origins_str.split(",") if origin.strip()]
        logger.info(f"CORS allowed origins: {allowed_origins}")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health_check() -> Dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/categories", response_model=CategoriesResponse)
    def list_categories(request: Request) -> CategoriesResponse:
        """List all categories, sorted by name."""
        categories = get_service(request).list_categories()
        return CategoriesResponse(categories=sorted(categories))

    @app.get("/api/categories/{category}/articles", response_model=ArticleListResponse)
    def list_articles(category: str, request: Request) -> ArticleListResponse:
        """List a category's articles ordered by slug; unknown categories are empty."""
        entries = get_service(request).list_articles(category)
        return ArticleListResponse(
            category=category,
            articles=[entry_to_model(entry) for entry in entries],
        )

    @app.get("/api/articles/{category}/{slug}", response_model=ArticleModel)
    def get_article(category: str, slug: str, request: Request) -> ArticleModel:
        """Get one article's content, sections and table of contents."""
        try:
            article = get_service(request).get_article(category, slug)
        except NotFound as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return article_to_model(article)

    @app.get("/api/stats", response_model=StatsResponse)
    def get_stats(request: Request) -> StatsResponse:
        return StatsResponse(**get_service(request).stats())

    return app


def create_app_from_env() -> FastAPI:
    """Build the catalog from the configured content directory and wrap it in the API.

    Used as the uvicorn application factory. Startup fails if the catalog
    cannot be built completely.
    """
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    content_dir = Path(config.CONTENT_DIR)
    logger.info(f"Loading catalog from {content_dir}")

    try:
        service = QueryService.from_directory(content_dir, max_workers=config.LOAD_WORKERS)
    except Exception as exc:
        logger.error(f"Failed to build catalog: {exc}")
        raise

    return create_app(service)


def run_server(
    host: str = config.DEFAULT_HOST,
    port: int = config.DEFAULT_PORT,
    reload: bool = False,
) -> None:
    import uvicorn

    uvicorn.run(
        "backend.app:create_app_from_env",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level="info",
    )


if __name__ == "__main__":
    run_server()
