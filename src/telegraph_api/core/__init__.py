"""Telegraph API clients and upload helper."""

from .blocking import BlockingTelegraph
from .client import Telegraph
from .methods import ApiRequest, decode_response
from .upload import guess_mime, upload_files, upload_files_blocking

__all__ = [
    "ApiRequest",
    "BlockingTelegraph",
    "Telegraph",
    "decode_response",
    "guess_mime",
    "upload_files",
    "upload_files_blocking",
]
