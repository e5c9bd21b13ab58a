"""Blocking Telegraph API client.

Same operations and errors as the async Telegraph client, over requests, for
code that can't use async/await.

Example:
    with BlockingTelegraph(token) as telegraph:
        page = telegraph.create_page("title", html_to_nodes("<p>Hello, world</p>"))
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from types import TracebackType
from typing import Optional, TypeVar

from pydantic import BaseModel

from ..http.blocking import BlockingHttpClient
from ..http.protocols import SyncHttpClient
from ..models.config import ClientConfig
from ..models.nodes import Node
from ..models.types import Account, Page, PageList, PageViews
from . import methods
from .methods import ApiRequest, decode_response
from .upload import StrPath, upload_files_blocking

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class BlockingTelegraph:
    """Blocking client for the Telegraph API. See Telegraph for semantics."""

    def __init__(
        self,
        access_token: str = "",
        config: Optional[ClientConfig] = None,
        http_client: Optional[SyncHttpClient] = None,
        api_url: Optional[str] = None,
        author_name: Optional[str] = None,
        author_url: Optional[str] = None,
    ) -> None:
        self._access_token = access_token
        self._author_name = author_name
        self._author_url = author_url
        self._config = config or ClientConfig()
        if api_url:
            self._config = self._config.model_copy(update={"api_url": api_url})
        self._owned_http: Optional[BlockingHttpClient] = None
        if http_client is None:
            self._owned_http = BlockingHttpClient(
                user_agent=self._config.effective_user_agent,
                proxy=self._config.proxy,
                default_timeout=self._config.timeout,
                max_content_size=self._config.max_response_size,
            )
            http_client = self._owned_http
        self._http: SyncHttpClient = http_client

    @property
    def access_token(self) -> str:
        return self._access_token

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def author_name(self) -> Optional[str]:
        return self._author_name

    @property
    def author_url(self) -> Optional[str]:
        return self._author_url

    def __enter__(self) -> BlockingTelegraph:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Close the owned HTTP session, if any."""
        if self._owned_http is not None:
            self._owned_http.close()
            self._owned_http = None

    def with_access_token(self, access_token: str) -> BlockingTelegraph:
        """Return a client for another token sharing this client's config, transport and author defaults."""
        return BlockingTelegraph(
            access_token,
            config=self._config,
            http_client=self._http,
            author_name=self._author_name,
            author_url=self._author_url,
        )

    def with_account(self, account: Account) -> BlockingTelegraph:
        """Return a client acting as the given account, with its author defaults."""
        if not account.access_token:
            raise ValueError("Account has no access_token")
        return BlockingTelegraph(
            account.access_token,
            config=self._config,
            http_client=self._http,
            author_name=account.author_name or account.short_name,
            author_url=account.author_url or None,
        )

    def _author_fields(
        self, author_name: Optional[str], author_url: Optional[str]
    ) -> tuple[Optional[str], Optional[str]]:
        return (
            author_name if author_name is not None else self._author_name,
            author_url if author_url is not None else self._author_url,
        )

    def _call(self, request: ApiRequest[T]) -> T:
        body = request.body(self._access_token)
        url = self._config.method_url(request.method, request.path)
        logger.debug(f"Calling {request.method}")
        response = self._http.post(url, json=body, timeout=self._config.timeout)
        return decode_response(request, response)

    def create_account(
        self,
        short_name: str,
        author_name: Optional[str] = None,
        author_url: Optional[str] = None,
    ) -> Account:
        return self._call(methods.create_account(short_name, author_name, author_url))

    def edit_account_info(
        self,
        short_name: Optional[str] = None,
        author_name: Optional[str] = None,
        author_url: Optional[str] = None,
    ) -> Account:
        return self._call(methods.edit_account_info(short_name, author_name, author_url))

    def get_account_info(self, fields: Optional[list[str]] = None) -> Account:
        return self._call(methods.get_account_info(fields))

    def revoke_access_token(self) -> Account:
        return self._call(methods.revoke_access_token())

    def create_page(
        self,
        title: str,
        content: list[Node],
        author_name: Optional[str] = None,
        author_url: Optional[str] = None,
        return_content: bool = False,
    ) -> Page:
        author_name, author_url = self._author_fields(author_name, author_url)
        return self._call(methods.create_page(title, content, author_name, author_url, return_content))

    def edit_page(
        self,
        path: str,
        title: str,
        content: list[Node],
        author_name: Optional[str] = None,
        author_url: Optional[str] = None,
        return_content: bool = False,
    ) -> Page:
        author_name, author_url = self._author_fields(author_name, author_url)
        return self._call(methods.edit_page(path, title, content, author_name, author_url, return_content))

    def get_page(self, path: str, return_content: bool = False) -> Page:
        return self._call(methods.get_page(path, return_content))

    def get_page_list(self, offset: int = 0, limit: int = 50) -> PageList:
        return self._call(methods.get_page_list(offset, limit))

    def get_views(
        self,
        path: str,
        year: Optional[int] = None,
        month: Optional[int] = None,
        day: Optional[int] = None,
        hour: Optional[int] = None,
    ) -> PageViews:
        return self._call(methods.get_views(path, year, month, day, hour))

    def upload(self, paths: Sequence[StrPath]) -> list[str]:
        """Upload local files and return their URLs in input order."""
        return upload_files_blocking(self._http, paths, self._config.upload_url, self._config.timeout)
