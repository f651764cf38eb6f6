"""
Resource fetcher for the Hue bridge CLIP v2 API
Issues authenticated GETs and decodes each response into its resource model
"""

import asyncio
import logging
from typing import Optional

import aiohttp
from pydantic import ValidationError
from yarl import URL

from exceptions import BridgeDecodeError, BridgeFetchError
from http_helper import create_bridge_session
from .models import RESOURCE_MODELS, ResourceList

logger = logging.getLogger(__name__)

RESOURCE_PATH = "clip/v2/resource/"
APPLICATION_KEY_HEADER = "hue-application-key"

def resolve_resource_url(bridge_url: str, kind: str) -> URL:
    """
    Resolve the resource path against the bridge base URL
    A path prefix on the base URL is kept (https://host/hue -> https://host/hue/clip/v2/...)
    """
    try:
        base = URL(bridge_url)
    except (TypeError, ValueError) as e:
        raise BridgeFetchError(f"invalid bridge url {bridge_url!r}: {e}", bridge_url) from e
    
    if not base.is_absolute():
        raise BridgeFetchError(f"invalid bridge url {bridge_url!r}: not an absolute URL", bridge_url)
    
    if not base.path.endswith("/"):
        base = base.with_path(base.path + "/")
    return base.join(URL(RESOURCE_PATH + kind))

class ResourceFetcher:
    """Fetches bridge resources using one lazily created, shared HTTP session"""
    
    def __init__(self, timeout: int = 10, debug: bool = False):
        self.timeout = timeout
        self.debug = debug
        self._session: Optional[aiohttp.ClientSession] = None
    
    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = create_bridge_session(self.timeout)
        return self._session
    
    async def close(self):
        """Close the shared session (if one was ever created)"""
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None
    
    async def fetch(self, bridge_url: str, application_key: str, kind: str) -> ResourceList:
        """
        Fetch one resource collection from a bridge
        Raises BridgeFetchError for transport/status failures and BridgeDecodeError for bad bodies
        """
        model = RESOURCE_MODELS[kind]
        url = resolve_resource_url(bridge_url, kind)
        
        if self.debug:
            logger.info(f"Fetching JSON from: {url}")
        
        headers = {APPLICATION_KEY_HEADER: application_key}
        session = self._get_session()
        
        try:
            async with session.get(url, headers=headers) as response:
                if response.status != 200:
                    raise BridgeFetchError(
                        f"failed to retrieve json data from {url} ({response.status} {response.reason})",
                        str(url)
                    )
                body = await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise BridgeFetchError(f"failed to retrieve json data from {url} ({e!r})", str(url)) from e
        except (ValueError, TypeError) as e:
            # Rejected while writing the request, e.g. a non-string key or one with CR/LF
            raise BridgeFetchError(
                f"failed to retrieve json data from {url} (invalid request: {type(e).__name__})",
                str(url)
            ) from e

        try:
            return model.model_validate_json(body)
        except ValidationError as e:
            raise BridgeDecodeError(
                f"failed to decode {kind} data from {url} ({e.error_count()} errors)",
                str(url)
            ) from e
