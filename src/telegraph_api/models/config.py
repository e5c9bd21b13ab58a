"""Pydantic configuration model for telegraph_api clients."""

from typing import Any, Optional
from urllib.parse import quote

from pydantic import BaseModel, Field

DEFAULT_API_URL = "https://api.telegra.ph"
DEFAULT_UPLOAD_URL = "https://telegra.ph/upload"
DEFAULT_USER_AGENT = "telegraph-api/0.1 (+https://telegra.ph/api)"


class ByteSize(int):
    """
    Custom type that parses human-readable byte sizes.

    Accepts:
        - Integers (bytes)
        - Strings like '200kb', '1mb', '5gb'

    Examples:
        >>> ByteSize._parse('200kb')
        204800
        >>> ByteSize._parse('1mb')
        1048576
        >>> ByteSize._parse(1024)
        1024
    """

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: Any) -> Any:
        from pydantic_core import core_schema

        return core_schema.no_info_plain_validator_function(cls._parse)

    @classmethod
    def _parse(cls, v: Any) -> int:
        size = cls._to_bytes(v)
        if size <= 0:
            raise ValueError(f"Byte size must be positive: {v}")
        return size

    @staticmethod
    def _to_bytes(v: Any) -> int:
        if isinstance(v, bool):
            raise ValueError(f"Invalid byte size: {v}")
        if isinstance(v, int):
            return v
        if isinstance(v, str):
            v = v.lower().strip()
            # Longer suffixes first so "mb" is not read as "b"
            units = [("gb", 1024**3), ("mb", 1024**2), ("kb", 1024), ("b", 1)]
            for unit, mult in units:
                if v.endswith(unit):
                    num_str = v[: -len(unit)].strip()
                    try:
                        return int(float(num_str) * mult)
                    except ValueError as err:
                        raise ValueError(f"Invalid number in byte size: {v}") from err
            try:
                return int(v)
            except ValueError:
                pass
        raise ValueError(f"Invalid byte size: {v}. Use format like '200kb', '1mb', or integer bytes.")


class ClientConfig(BaseModel):
    """
    Settings shared by the async and blocking clients.

    Configuration is programmatic only; nothing is read from the environment.

    Example:
        config = ClientConfig(timeout=10, proxy="http://127.0.0.1:8080")
        async with Telegraph(token, config=config) as telegraph:
            ...
    """

    api_url: str = Field(DEFAULT_API_URL, description="Base URL of the Telegraph API")
    upload_url: str = Field(DEFAULT_UPLOAD_URL, description="Full URL of the file upload endpoint")
    timeout: float = Field(30.0, gt=0, description="Request timeout in seconds")
    user_agent: Optional[str] = Field(None, description="Custom User-Agent header")
    proxy: Optional[str] = Field(None, description="HTTP/HTTPS proxy URL")
    max_response_size: ByteSize = Field(
        ByteSize(10 * 1024 * 1024),
        description="Maximum response body size (e.g. '512kb', '10mb')",
    )

    model_config = {"extra": "forbid", "frozen": True}

    def method_url(self, method: str, path: Optional[str] = None) -> str:
        """Build the endpoint URL for an API method, optionally with a page path."""
        url = f"{self.api_url.rstrip('/')}/{method}"
        if path:
            url = f"{url}/{quote(path.strip('/'), safe='')}"
        return url

    @property
    def effective_user_agent(self) -> str:
        return self.user_agent or DEFAULT_USER_AGENT
