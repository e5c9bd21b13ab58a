"""Async Telegraph API client."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from types import TracebackType
from typing import Optional, TypeVar

from pydantic import BaseModel

from ..http.client import AsyncHttpClient
from ..http.protocols import HttpClient
from ..models.config import ClientConfig
from ..models.nodes import Node
from ..models.types import Account, Page, PageList, PageViews
from . import methods
from .methods import ApiRequest, decode_response
from .upload import StrPath, upload_files

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class Telegraph:
    """
    Async client for the Telegraph API.

    Every method performs exactly one POST round trip and returns a typed
    result. Failures raise ApiError (the service said ``ok: false``) or
    TransportError (the request never completed or the reply was unreadable).
    Nothing is retried.

    The access token is fixed for the lifetime of the client. Methods that
    issue a new token (create_account, revoke_access_token) return it in the
    Account; use with_account() or with_access_token() to continue with it.
    Author defaults given at construction apply to create_page and edit_page
    whenever the call itself passes none.

    Example:
        async with Telegraph() as anonymous:
            account = await anonymous.create_account("sandbox", author_name="Anonymous")

            telegraph = anonymous.with_account(account)
            page = await telegraph.create_page("Hello", html_to_nodes("<p>Hello, world</p>"))
            print(page.url)
    """

    def __init__(
        self,
        access_token: str = "",
        config: Optional[ClientConfig] = None,
        http_client: Optional[HttpClient] = None,
        api_url: Optional[str] = None,
        author_name: Optional[str] = None,
        author_url: Optional[str] = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            access_token: Account access token ("" for calls that need none)
            config: Client settings (base URLs, timeout, proxy)
            http_client: Transport to use instead of an owned AsyncHttpClient;
                it is not entered or closed by this client
            api_url: Alternate API base URL, overriding config.api_url
            author_name: Default author name for create_page/edit_page
            author_url: Default author link for create_page/edit_page
        """
        self._access_token = access_token
        self._author_name = author_name
        self._author_url = author_url
        self._config = config or ClientConfig()
        if api_url:
            self._config = self._config.model_copy(update={"api_url": api_url})
        self._http: Optional[HttpClient] = http_client
        self._owned_http: Optional[AsyncHttpClient] = None

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

    async def __aenter__(self) -> Telegraph:
        """Enter async context, opening an owned HTTP session if needed."""
        if self._http is None:
            self._owned_http = AsyncHttpClient(
                user_agent=self._config.effective_user_agent,
                proxy=self._config.proxy,
                default_timeout=self._config.timeout,
                max_content_size=self._config.max_response_size,
            )
            self._http = await self._owned_http.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit async context, closing the owned HTTP session."""
        if self._owned_http is not None:
            await self._owned_http.__aexit__(exc_type, exc_val, exc_tb)
            self._owned_http = None
            self._http = None

    def with_access_token(self, access_token: str) -> Telegraph:
        """Return a client for another token sharing this client's config, transport and author defaults."""
        if self._http is None:
            raise RuntimeError("Client not initialized. Use 'async with' context manager.")
        return Telegraph(
            access_token,
            config=self._config,
            http_client=self._http,
            author_name=self._author_name,
            author_url=self._author_url,
        )

    def with_account(self, account: Account) -> Telegraph:
        """
        Return a client acting as the given account.

        The account's author name (or its short name, when it has none) and
        author URL become the defaults for new and edited pages.
        """
        if not account.access_token:
            raise ValueError("Account has no access_token")
        if self._http is None:
            raise RuntimeError("Client not initialized. Use 'async with' context manager.")
        return Telegraph(
            account.access_token,
            config=self._config,
            http_client=self._http,
            author_name=account.author_name or account.short_name,
            author_url=account.author_url or None,
        )

    def _author_fields(
        self, author_name: Optional[str], author_url: Optional[str]
    ) -> tuple[Optional[str], Optional[str]]:
        """Fill in the client's author defaults where the call passed none."""
        return (
            author_name if author_name is not None else self._author_name,
            author_url if author_url is not None else self._author_url,
        )

    async def _call(self, request: ApiRequest[T]) -> T:
        if self._http is None:
            raise RuntimeError("Client not initialized. Use 'async with' context manager.")
        body = request.body(self._access_token)
        url = self._config.method_url(request.method, request.path)
        logger.debug(f"Calling {request.method}")
        response = await self._http.post(url, json=body, timeout=self._config.timeout)
        return decode_response(request, response)

    async def create_account(
        self,
        short_name: str,
        author_name: Optional[str] = None,
        author_url: Optional[str] = None,
    ) -> Account:
        """
        Create a new Telegraph account.

        Args:
            short_name: Account name, shown only to the account owner (1-32 chars)
            author_name: Default author name for new pages (0-128 chars)
            author_url: Default profile link for new pages (0-512 chars)

        Returns:
            Account including access_token and auth_url
        """
        return await self._call(methods.create_account(short_name, author_name, author_url))

    async def edit_account_info(
        self,
        short_name: Optional[str] = None,
        author_name: Optional[str] = None,
        author_url: Optional[str] = None,
    ) -> Account:
        """Update account information. Only the fields passed are changed."""
        return await self._call(methods.edit_account_info(short_name, author_name, author_url))

    async def get_account_info(self, fields: Optional[list[str]] = None) -> Account:
        """
        Get information about the account.

        Args:
            fields: Fields to return, any of short_name, author_name,
                author_url, auth_url, page_count (service default if None)
        """
        return await self._call(methods.get_account_info(fields))

    async def revoke_access_token(self) -> Account:
        """
        Revoke the access token and generate a new one.

        This client keeps the old, now invalid, token. Returns an Account with
        the new access_token and auth_url.
        """
        return await self._call(methods.revoke_access_token())

    async def create_page(
        self,
        title: str,
        content: list[Node],
        author_name: Optional[str] = None,
        author_url: Optional[str] = None,
        return_content: bool = False,
    ) -> Page:
        """
        Create a new page.

        Args:
            title: Page title (1-256 chars)
            content: Page content as nodes (see html_to_nodes)
            author_name: Author name shown below the title
            author_url: Link opened when clicking the author name
            return_content: Include content in the returned Page
        """
        author_name, author_url = self._author_fields(author_name, author_url)
        return await self._call(methods.create_page(title, content, author_name, author_url, return_content))

    async def edit_page(
        self,
        path: str,
        title: str,
        content: list[Node],
        author_name: Optional[str] = None,
        author_url: Optional[str] = None,
        return_content: bool = False,
    ) -> Page:
        """Edit an existing page owned by this account."""
        author_name, author_url = self._author_fields(author_name, author_url)
        return await self._call(
            methods.edit_page(path, title, content, author_name, author_url, return_content)
        )

    async def get_page(self, path: str, return_content: bool = False) -> Page:
        """Get a page by path. No access token is needed."""
        return await self._call(methods.get_page(path, return_content))

    async def get_page_list(self, offset: int = 0, limit: int = 50) -> PageList:
        """
        List pages belonging to the account, most recently created first.

        Args:
            offset: Sequential number of the first page to return
            limit: Number of pages to return (0-200)
        """
        return await self._call(methods.get_page_list(offset, limit))

    async def get_views(
        self,
        path: str,
        year: Optional[int] = None,
        month: Optional[int] = None,
        day: Optional[int] = None,
        hour: Optional[int] = None,
    ) -> PageViews:
        """
        Get the number of views for a page.

        Without a date the total is returned. Narrower periods need the wider
        ones, e.g. get_views(path, 2016, 12) or get_views(path, 2019, 5, 19, 12).
        """
        return await self._call(methods.get_views(path, year, month, day, hour))

    async def upload(self, paths: Sequence[StrPath]) -> list[str]:
        """
        Upload local files (images, videos) and return their URLs in input order.

        Raises:
            OSError: If a file cannot be read (nothing is uploaded)
        """
        if self._http is None:
            raise RuntimeError("Client not initialized. Use 'async with' context manager.")
        return await upload_files(self._http, paths, self._config.upload_url, self._config.timeout)
