"""
Article input for ai-podcast.
"""

from ai_podcast.article.fetcher import Article, ArticleFetcher

__all__ = [
    "Article",
    "ArticleFetcher",
]
