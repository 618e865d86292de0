"""
PokéAPI v2 client with local caching.

The HTTP layer is synchronous (requests); lookups use the async surface, which runs
each request in a worker thread so fan-out batches can be awaited together.
"""

import asyncio
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Awaitable, Iterable, List, Optional, Type, TypeVar, Union
from urllib.parse import urlparse

import requests
from pydantic import BaseModel, TypeAdapter, ValidationError

from pokemon_tools.config import DEFAULT_BASE_URL, Settings
from pokemon_tools.errors import MalformedResponse, NotFound, UpstreamFetchFailed
from pokemon_tools.models import NamedAPIResource

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)
T = TypeVar("T")


class PokemonAPIClient:
    """
    Generic client for PokéAPI v2 with built-in local caching.

    Fair Use Policy:
    - Use local caching to avoid unnecessary requests.
    - Do not spam the API with high-frequency polling.
    - Handle errors gracefully.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        cache_dir: Optional[Union[str, Path]] = None,
        enable_cache: bool = True,
        cache_ttl: int = 0,
        timeout: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.enable_cache = enable_cache and cache_dir is not None
        self.cache_dir = Path(cache_dir) if cache_dir is not None else None
        # 0 means cached files never expire
        self.cache_ttl = cache_ttl
        self.timeout = timeout

        if self.enable_cache:
            try:
                self.cache_dir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                logger.warning(
                    "cache directory %s unusable (%s), continuing without cache",
                    self.cache_dir,
                    e,
                )
                self.enable_cache = False

    @classmethod
    def from_settings(cls, settings: Settings, enable_cache: bool = True) -> "PokemonAPIClient":
        return cls(
            base_url=settings.base_url,
            cache_dir=settings.cache_dir,
            enable_cache=enable_cache,
            cache_ttl=settings.cache_ttl,
            timeout=settings.timeout,
        )

    # --- URLs and cache files ---

    def _get_url(self, endpoint: str, identifier: Union[str, int]) -> str:
        return f"{self.base_url}/{endpoint}/{identifier}/"

    def _resource_key(self, url: str) -> str:
        """Path of a resource relative to the API root, e.g. 'pokemon/25/encounters'."""
        path = urlparse(url).path.strip("/")
        root = urlparse(self.base_url).path.strip("/")
        if root and path.startswith(root):
            path = path[len(root):].strip("/")
        return path

    def _get_cache_path(self, url: str) -> Path:
        safe_key = self._resource_key(url).replace("/", "_").replace(" ", "_").lower()
        return self.cache_dir / f"{safe_key}.json"

    def _is_cache_valid(self, path: Path) -> bool:
        if not path.exists():
            return False
        if self.cache_ttl == 0:
            return True
        mtime = datetime.fromtimestamp(path.stat().st_mtime)
        return (datetime.now() - mtime).total_seconds() < self.cache_ttl

    def _load_from_cache(self, path: Path) -> Optional[Any]:
        try:
            if self._is_cache_valid(path):
                with path.open("r", encoding="utf-8") as f:
                    return json.load(f)
        except (OSError, ValueError) as e:
            logger.debug("ignoring unreadable cache file %s: %s", path, e)
            return None
        return None

    def _save_to_cache(self, path: Path, data: Any) -> None:
        try:
            with path.open("w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
        except OSError as e:
            # Cache write failure should not break main logic
            logger.warning("could not write cache file %s: %s", path, e)

    # --- Synchronous core ---

    def _request(self, url: str) -> Any:
        """Performs the HTTP GET and maps failures onto the lookup error taxonomy."""
        logger.debug("GET %s", url)
        try:
            response = requests.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.debug("request for %s failed: %s", url, e)
            raise UpstreamFetchFailed(self._resource_key(url)) from e

        if response.status_code == 404:
            key = self._resource_key(url)
            kind, _, subject = key.partition("/")
            raise NotFound(subject or key, kind=kind or "resource")

        try:
            response.raise_for_status()
            return response.json()
        except requests.exceptions.HTTPError as e:
            raise UpstreamFetchFailed(self._resource_key(url)) from e
        except ValueError as e:
            raise MalformedResponse(self._resource_key(url)) from e

    def _get(self, url: str) -> Any:
        """
        Generic GET request with caching.
        """
        cache_path = None
        if self.enable_cache:
            cache_path = self._get_cache_path(url)
            cached_data = self._load_from_cache(cache_path)
            if cached_data is not None:
                logger.debug("cache hit %s", cache_path.name)
                return cached_data

        data = self._request(url)

        if self.enable_cache and cache_path:
            self._save_to_cache(cache_path, data)
        return data

    def _parse(self, data: Any, model: Any, url: str) -> Any:
        try:
            if isinstance(model, TypeAdapter):
                return model.validate_python(data)
            return model.model_validate(data)
        except ValidationError as e:
            logger.debug("validation failed for %s: %s", url, e)
            raise MalformedResponse(self._resource_key(url)) from e

    # --- Async surface used by the lookups ---

    async def get_by_name(self, model: Type[ModelT], slug: Union[str, int]) -> ModelT:
        """Fetches the resource of the given kind by slug (or numeric id)."""
        url = self._get_url(model.ENDPOINT, slug)
        data = await asyncio.to_thread(self._get, url)
        return self._parse(data, model, url)

    async def follow(self, ref: NamedAPIResource, model: Type[ModelT]) -> ModelT:
        """Retrieves the record an embedded reference points to."""
        return await self.follow_url(ref.url, model)

    async def follow_url(self, url: str, model: Any) -> Any:
        """Retrieves an arbitrary API URL; `model` may be a model class or a TypeAdapter."""
        data = await asyncio.to_thread(self._get, url)
        return self._parse(data, model, url)

    async def gather_all(self, aws: Iterable[Awaitable[T]]) -> List[T]:
        """
        Awaits a batch of fetches together.

        All-or-nothing: the first failure propagates and the rest of the batch is
        cancelled, so callers never see partial results.
        """
        tasks = [asyncio.ensure_future(aw) for aw in aws]
        if not tasks:
            return []
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            raise

