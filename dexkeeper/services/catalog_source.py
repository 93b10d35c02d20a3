"""
PokeAPI catalog source.

Fetches the catalog listing, per-entity detail (types and forms) and type
relations over HTTP. Network and format errors surface as KnownError with
kind EXTERNAL_API_ERROR (NOT_FOUND for a 404); an entity's detail is either
returned complete or not at all.
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import httpx

from dexkeeper.config import settings
from dexkeeper.models.entity import CatalogListing, EntityDetail
from dexkeeper.models.failure import FailureKind, KnownError
from dexkeeper.models.type_relations import TypeRelations
from dexkeeper.parsers.pokeapi import (
    PokeApiFormatError,
    parse_form,
    parse_listing,
    parse_species_url,
    parse_type_relations,
    parse_types,
    parse_varieties,
)

logger = logging.getLogger(__name__)

USER_AGENT = "DexKeeper/1.0"


class PokeApiCatalogSource:
    """
    Catalog and type-relation collaborator backed by PokeAPI.

    Pass an ``httpx.AsyncClient`` to share connections (and to mock in
    tests); otherwise each call opens its own client. Using the source as an
    async context manager keeps one client open for its lifetime.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = (base_url or settings.pokeapi_url).rstrip("/")
        self._timeout = timeout if timeout is not None else settings.http_timeout
        self._client = client
        self._owns_client = False

    async def __aenter__(self) -> "PokeApiCatalogSource":
        if self._client is None:
            self._client = self._new_client()
            self._owns_client = True
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
            self._owns_client = False

    def _new_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self._timeout,
            headers={"User-Agent": USER_AGENT},
            follow_redirects=True,
        )

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with self._new_client() as client:
            yield client

    def _url(self, path_or_url: str) -> str:
        if path_or_url.startswith(("http://", "https://")):
            return path_or_url
        return f"{self._base_url}/{path_or_url.lstrip('/')}"

    async def _get_json(
        self,
        client: httpx.AsyncClient,
        path_or_url: str,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        url = self._url(path_or_url)
        try:
            response = await client.get(url, params=params)
            response.raise_for_status()
            data: dict[str, Any] = response.json()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise KnownError(
                kind=FailureKind.NOT_FOUND if status == 404 else FailureKind.EXTERNAL_API_ERROR,
                message="The catalog service returned an error",
                detail=f"GET {url}: HTTP {status}",
                suggestion="Try again later.",
            ) from e
        except httpx.RequestError as e:
            raise KnownError(
                kind=FailureKind.EXTERNAL_API_ERROR,
                message="The catalog service could not be reached",
                detail=f"GET {url}: {e}",
                suggestion="Check the network connection and try again.",
            ) from e
        except ValueError as e:
            raise KnownError(
                kind=FailureKind.EXTERNAL_API_ERROR,
                message="The catalog service returned invalid data",
                detail=f"GET {url}: {e}",
            ) from e
        return data

    async def _get_json_many(
        self, client: httpx.AsyncClient, paths_or_urls: list[str]
    ) -> list[dict[str, Any]]:
        """
        Fetch several payloads concurrently, in request order.

        The first failure cancels the remaining requests and is raised as is.
        """
        try:
            async with asyncio.TaskGroup() as group:
                tasks = [group.create_task(self._get_json(client, p)) for p in paths_or_urls]
        except ExceptionGroup as eg:
            raise eg.exceptions[0]
        return [task.result() for task in tasks]

    @staticmethod
    def _format_error(error: PokeApiFormatError, what: str) -> KnownError:
        return KnownError(
            kind=FailureKind.EXTERNAL_API_ERROR,
            message=f"The catalog service returned unexpected data for {what}",
            detail=str(error),
        )

    async def list_entities(self, limit: int | None = None) -> list[CatalogListing]:
        """
        Fetch the catalog listing.

        Args:
            limit: Number of entries; defaults to settings.catalog_size

        Returns:
            Listings in catalog order; index is the 0-based position.
        """
        count = limit if limit is not None else settings.catalog_size
        async with self._session() as client:
            payload = await self._get_json(client, "pokemon", params={"limit": count, "offset": 0})
        try:
            listings = parse_listing(payload)
        except PokeApiFormatError as e:
            raise self._format_error(e, "the catalog listing") from e

        logger.info("catalog_listed", extra={"entry_count": len(listings)})
        return listings

    async def entity_detail(self, raw_name: str) -> EntityDetail:
        """
        Fetch types and forms of one entity.

        Forms are the species varieties, default variety first. Variety
        payloads are fetched concurrently; the default variety reuses the
        pokemon payload.
        """
        async with self._session() as client:
            pokemon = await self._get_json(client, f"pokemon/{raw_name}")
            try:
                types = parse_types(pokemon)
                species = await self._get_json(client, parse_species_url(pokemon))
                varieties = parse_varieties(species)
            except PokeApiFormatError as e:
                raise self._format_error(e, raw_name) from e

            own_name = pokemon.get("name", raw_name)
            others = [ref for ref in varieties if ref["name"] != own_name]
            fetched = await self._get_json_many(client, [ref["url"] for ref in others])

        by_name = {ref["name"]: payload for ref, payload in zip(others, fetched, strict=True)}
        payloads = [by_name.get(ref["name"], pokemon) for ref in varieties]

        try:
            forms = tuple(
                parse_form(payload, ref["name"])
                for ref, payload in zip(varieties, payloads, strict=True)
            )
            if not forms:
                forms = (parse_form(pokemon),)
        except PokeApiFormatError as e:
            raise self._format_error(e, raw_name) from e

        logger.debug(
            "entity_detail_loaded",
            extra={"raw_name": raw_name, "form_count": len(forms), "types": list(types)},
        )
        return EntityDetail(types=types, forms=forms)

    async def type_relations(self, tag: str) -> TypeRelations:
        """Fetch the defensive damage relations of one type."""
        async with self._session() as client:
            payload = await self._get_json(client, f"type/{tag}")
        try:
            return parse_type_relations(payload)
        except PokeApiFormatError as e:
            raise self._format_error(e, f"type '{tag}'") from e

    async def all_type_relations(self, tags: list[str]) -> dict[str, TypeRelations]:
        """Fetch relations for several types concurrently."""
        async with self._session() as client:
            payloads = await self._get_json_many(client, [f"type/{t}" for t in tags])
        try:
            return {
                tag: parse_type_relations(payload)
                for tag, payload in zip(tags, payloads, strict=True)
            }
        except PokeApiFormatError as e:
            raise self._format_error(e, "type relations") from e
