# HTTP Helper for Hue bridge connections
# Bridges present self-signed certificates, so peer verification is always off

import aiohttp
import logging

logger = logging.getLogger(__name__)

def create_bridge_session(timeout_seconds: float = 10) -> aiohttp.ClientSession:
    """
    Create aiohttp session for Hue bridge connections
    Overall timeout and read timeout both use the configured value
    """
    connector = aiohttp.TCPConnector(
        ssl=False,                  # Skip certificate verification
        limit_per_host=4,           # Bridges throttle parallel requests
        enable_cleanup_closed=True
    )
    
    logger.debug(f"Creating bridge session (timeout={timeout_seconds}s)")
    
    return aiohttp.ClientSession(
        connector=connector,
        timeout=aiohttp.ClientTimeout(total=timeout_seconds, sock_read=timeout_seconds)
    )
