"""
Raw Overpass response cache

Element lists are stored as JSON files named after a hash of the cache key,
so a bbox or search can be reprocessed offline.
"""

import json
import hashlib
from pathlib import Path
from typing import Any, Dict, List, Optional
from loguru import logger


class OverpassCache:
    """Disk cache of Overpass element lists; disabled when no directory is set"""

    def __init__(self, cache_dir: Optional[str] = None):
        self.cache_dir = Path(cache_dir) if cache_dir else None

    def get_cache_path(self, cache_key: str) -> Optional[str]:
        if self.cache_dir is None or not cache_key:
            return None
        digest = hashlib.md5(cache_key.encode()).hexdigest()[:8]
        return str(self.cache_dir / f"overpass_{digest}.json")

    def load(self, cache_path: Optional[str]) -> Optional[List[Dict[str, Any]]]:
        """Cached elements, or None on a miss or an unreadable file"""
        if not cache_path:
            return None
        path = Path(cache_path)
        if not path.is_file():
            return None
        try:
            elements = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable cache {path}: {e}")
            return None
        if not isinstance(elements, list):
            logger.warning(f"Ignoring cache {path}: expected an element list")
            return None
        logger.info(f"Loaded {len(elements)} elements from cache: {path}")
        return elements

    def save(self, cache_path: Optional[str], elements: List[Dict[str, Any]]):
        if not cache_path:
            return
        path = Path(cache_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(elements, indent=2, ensure_ascii=False), encoding="utf-8")
        except (OSError, TypeError) as e:
            logger.warning(f"Failed to write cache {path}: {e}")
            return
        logger.info(f"Cached {len(elements)} elements: {path}")

    def invalidate(self, cache_key: str) -> bool:
        """Remove the cached response for a key; True if a file was removed"""
        cache_path = self.get_cache_path(cache_key)
        if not cache_path:
            return False
        path = Path(cache_path)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        logger.info(f"Removed cached response: {path}")
        return True
