import logging
import os
import re
from typing import Any, List, Optional, Pattern, Sequence, Tuple

import pandas as pd

from src.constants import ID_PREFIX, UNKNOWN_INITIALS
from src.models import Article

logger = logging.getLogger(__name__)

NAME_PART_SPLIT_PATTERN: Pattern = re.compile(r"[\s\-]+")

ARTICLE_COLUMNS = (
    "id",
    "title",
    "year",
    "authors",
    "referenced_works",
    "doi",
    "venue",
    "keywords",
)


def extract_id(url: str) -> str:
    """
    Extracts the numeric id from an OpenAlex-style work URL.

    'https://openalex.org/W2741809807' -> 'W2741809807'. Strings without a
    slash, or ending in one, are returned unchanged.
    """
    if not url:
        return url

    last_slash = url.rfind("/")
    if 0 <= last_slash < len(url) - 1:
        return url[last_slash + 1 :]
    return url


def author_initials(authors: Sequence[str]) -> str:
    """
    Builds the 'A.B.C.' initials of the first author.

    Name parts are split on whitespace and hyphens; parts not starting with
    a letter are ignored.

    Args:
        authors (Sequence[str]): Author names in publication order.

    Returns:
        str: The initials, or '?' when no usable first author exists.
    """
    if not authors:
        return UNKNOWN_INITIALS

    first = authors[0]
    if not first or not first.strip():
        return UNKNOWN_INITIALS

    initials = "".join(
        f"{part[0].upper()}."
        for part in NAME_PART_SPLIT_PATTERN.split(first.strip())
        if part and part[0].isalpha()
    )
    return initials or UNKNOWN_INITIALS


def normalize_id(raw: str) -> str:
    """Trims and upper-cases a user supplied id, adding the 'W' prefix if missing."""
    cleaned = (raw or "").strip().upper()
    if not cleaned:
        return ""
    return cleaned if cleaned.startswith(ID_PREFIX) else ID_PREFIX + cleaned


def _as_tuple(value: Any) -> Tuple[str, ...]:
    if isinstance(value, (list, tuple)):
        return tuple(str(v) for v in value if v is not None)
    return ()


def _as_year(value: Any) -> int:
    try:
        if pd.isna(value):
            return 0
    except (TypeError, ValueError):
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _as_optional_str(value: Any) -> Optional[str]:
    if isinstance(value, str) and value:
        return value
    return None


def load_articles(path: str) -> List[Article]:
    """
    Loads article records from a JSON array.

    Each object should provide 'id', 'title', 'year', 'authors' and
    'referenced_works'; 'doi', 'venue' and 'keywords' are optional.
    Records without a usable id are skipped.

    Args:
        path (str): Path to the dataset file.

    Returns:
        List[Article]: Records in file order.

    Raises:
        FileNotFoundError: If the dataset does not exist.
        ValueError: If the file is not a JSON array of objects.
    """
    logger.info(f"Loading articles from {path}...")

    if not os.path.exists(path):
        raise FileNotFoundError(path)

    df = pd.read_json(path, orient="records", dtype=False, convert_dates=False)
    for column in ARTICLE_COLUMNS:
        if column not in df.columns:
            df[column] = None

    articles: List[Article] = []
    skipped = 0

    for row in df[list(ARTICLE_COLUMNS)].itertuples(index=False):
        if not isinstance(row.id, str) or not extract_id(row.id.strip()):
            skipped += 1
            logger.warning(f"Skipping record without a usable id: {row.title!r}")
            continue

        articles.append(
            Article(
                id=row.id.strip(),
                title=row.title if isinstance(row.title, str) else "",
                year=_as_year(row.year),
                authors=_as_tuple(row.authors),
                referenced_works=_as_tuple(row.referenced_works),
                doi=_as_optional_str(row.doi),
                venue=_as_optional_str(row.venue),
                keywords=_as_tuple(row.keywords),
            )
        )

    logger.info(f"Loaded {len(articles)} articles ({skipped} skipped).")
    return articles
