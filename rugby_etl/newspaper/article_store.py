"""
Article Store Module

Flat-file persistence for generated articles. This is not a database: the
whole collection is one JSON array, read in full on every query and
rewritten in full on every write. That is fine for a personal blog.

Writes go through one lock per store, so build a single ArticleStore per
process and hand it to everything that reads or writes articles.

On-disk record:
    {"id": 3, "title": "...", "content": "...", "type": "roundup",
     "league": "TOP14", "season": 2022, "topic": null,
     "createdAt": "2025-12-09T20:00:01.123Z", "date": "2025-12-09T20:00:01.123Z"}
"""

import json
import os
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Union

from loguru import logger

DEFAULT_TYPE = 'generic'


class ArticleStoreError(Exception):
    """Raised when an existing article file cannot be read back as a list."""


def utc_now_iso() -> str:
    """Current UTC time as an ISO string with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def parse_timestamp(value: Optional[str]) -> datetime:
    """Parse an ISO timestamp for sorting; naive values are treated as UTC."""
    if not value:
        return datetime.min.replace(tzinfo=timezone.utc)
    try:
        parsed = datetime.fromisoformat(str(value).replace('Z', '+00:00'))
    except ValueError:
        logger.warning(f"Unparsable article date: {value}")
        return datetime.min.replace(tzinfo=timezone.utc)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass
class Article:
    id: int
    title: str
    content: str
    type: Optional[str] = DEFAULT_TYPE
    league: Optional[str] = None
    season: Optional[int] = None
    topic: Optional[str] = None
    created_at: Optional[str] = None
    date: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict) -> 'Article':
        return cls(
            id=int(data['id']),
            title=data.get('title') or '',
            content=data.get('content') or '',
            type=data.get('type') or None,
            league=data.get('league'),
            season=data.get('season'),
            topic=data.get('topic'),
            created_at=data.get('createdAt'),
            date=data.get('date'),
        )

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'title': self.title,
            'content': self.content,
            'type': self.type,
            'league': self.league,
            'season': self.season,
            'topic': self.topic,
            'createdAt': self.created_at,
            'date': self.date,
        }


class ArticleStore:
    """JSON-file article collection with sequential integer IDs."""

    def __init__(self, path: Union[str, Path]):
        """
        Initialize article store.

        Args:
            path: JSON file holding the article array (created on first write)
        """
        self.path = Path(path)
        self._write_lock = threading.Lock()
        logger.info(f"Article store: {self.path}")

    def _load_array(self) -> List:
        """
        Raw article array as stored on disk (every entry, even malformed ones).

        Raises:
            ArticleStoreError: If the file exists but is not a readable JSON array
        """
        if not self.path.exists():
            return []

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                records = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ArticleStoreError(f"Could not read articles from {self.path}: {e}") from e

        if not isinstance(records, list):
            raise ArticleStoreError(f"Article file {self.path} does not hold a list")
        return records

    def _read_records(self) -> List[Dict]:
        try:
            records = self._load_array()
        except ArticleStoreError as e:
            logger.error(f"{e}, serving no articles")
            return []
        return [r for r in records if isinstance(r, dict)]

    def _write_records(self, records: List):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + '.tmp')
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(records, f, indent=2, ensure_ascii=False)
        os.replace(tmp_path, self.path)

    def get_all(self) -> List[Article]:
        """
        All articles, newest display date first.

        Articles without a display date fall back to their creation
        timestamp, then to now.
        """
        now = utc_now_iso()
        articles = []

        for record in self._read_records():
            try:
                article = Article.from_dict(record)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping malformed article record: {e}")
                continue
            article.date = article.date or article.created_at or now
            articles.append(article)

        articles.sort(key=lambda a: parse_timestamp(a.date), reverse=True)
        return articles

    def get_by_id(self, article_id: int) -> Optional[Article]:
        """Find one article by ID. Returns None if absent."""
        for article in self.get_all():
            if article.id == article_id:
                return article
        return None

    def add_article(self, partial: Dict) -> Article:
        """
        Append a new article and rewrite the collection.

        The ID is one more than the current maximum (1 for an empty store).
        Read, ID assignment and write happen under the store lock. Existing
        entries are written back untouched.

        Args:
            partial: Dict with title and content, optionally type, league,
                season, topic and date

        Returns:
            The stored Article

        Raises:
            ArticleStoreError: If the existing file cannot be read; the file
                is left as it is
        """
        now = utc_now_iso()

        with self._write_lock:
            records = self._load_array()
            ids = []
            for record in records:
                if not isinstance(record, dict):
                    continue
                try:
                    ids.append(int(record['id']))
                except (KeyError, TypeError, ValueError):
                    continue
            next_id = max(ids) + 1 if ids else 1

            article = Article(
                id=next_id,
                title=partial.get('title') or '',
                content=partial.get('content') or '',
                type=partial.get('type') or DEFAULT_TYPE,
                league=partial.get('league') or None,
                season=partial.get('season') or None,
                topic=partial.get('topic') or None,
                created_at=now,
                date=partial.get('date') or now,
            )

            records.append(article.to_dict())
            self._write_records(records)

        logger.info(f"Stored article {article.id} ({article.type}): {article.title}")
        return article

    def vlog_articles(self) -> List[Article]:
        """Vlog-tagged articles, newest first."""
        return [a for a in self.get_all() if a.type == 'vlog']

    def count(self) -> int:
        return len(self._read_records())
