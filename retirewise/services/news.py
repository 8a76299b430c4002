from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence

import yfinance as yf
from loguru import logger

from retirewise.services.base import NewsDigest, NewsSource, NewsUnavailableError

DEFAULT_TICKERS = ("^HSI", "^GSPC")


def _parse_item(item: Dict[str, Any]) -> Optional[Dict[str, str]]:
    """Normalise one yfinance news entry (nested "content" or legacy flat layout)."""
    content = item.get("content") if isinstance(item.get("content"), dict) else item
    title = content.get("title")
    if not title:
        return None

    url = content.get("link")
    for key in ("canonicalUrl", "clickThroughUrl"):
        nested = content.get(key)
        if not url and isinstance(nested, dict):
            url = nested.get("url")

    summary = content.get("summary") or content.get("description") or ""
    return {"title": title.strip(), "url": url or "", "summary": summary.strip()}


def _first_sentence(text: str) -> str:
    head, dot, _ = text.partition(". ")
    return head + "." if dot else text


def render_digest(items: Iterable[Dict[str, str]]) -> NewsDigest:
    lines: List[str] = []
    sources: List[NewsSource] = []
    for item in items:
        line = f"- **{item['title']}**"
        if item["summary"]:
            line += f" {_first_sentence(item['summary'])}"
        lines.append(line)
        if item["url"]:
            sources.append(NewsSource(uri=item["url"], title=item["title"]))

    if not lines:
        return NewsDigest(content="No news available.", sources=[])
    return NewsDigest(content="\n".join(lines), sources=sources)


class YahooNewsService:
    """Market headlines for a few index symbols, as a markdown list with sources."""

    def __init__(self, tickers: Sequence[str] = DEFAULT_TICKERS, limit: int = 5):
        self.tickers = list(tickers)
        self.limit = limit

    def _fetch(self, symbol: str) -> List[Dict[str, Any]]:
        return list(yf.Ticker(symbol).news or [])

    def digest(self) -> NewsDigest:
        picked: List[Dict[str, str]] = []
        seen = set()
        failures = 0

        for symbol in self.tickers:
            try:
                raw_items = self._fetch(symbol)
            except Exception as exc:
                failures += 1
                logger.warning(f"News fetch failed for {symbol}: {exc}")
                continue

            for raw in raw_items:
                item = _parse_item(raw)
                if item is None:
                    continue
                key = item["url"] or item["title"]
                if key in seen:
                    continue
                seen.add(key)
                picked.append(item)
                if len(picked) >= self.limit:
                    break
            if len(picked) >= self.limit:
                break

        if self.tickers and failures == len(self.tickers):
            raise NewsUnavailableError("Failed to fetch news.")

        logger.info(f"News digest built with {len(picked)} items")
        return render_digest(picked)
