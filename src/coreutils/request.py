import time
from urllib3.util.retry import Retry
import requests
from requests.adapters import HTTPAdapter
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)

DEFAULT_RETRY_STRATEGY = Retry(
    total=5,  # Total number of retries
    backoff_factor=2,  # The backoff factor (2 seconds, then 4, 8...)
    status_forcelist=[429, 500, 502, 503, 504],  # HTTP status codes to retry on
)


def new_session() -> requests.Session:
    """Create a new requests session with retry strategy"""
    session = requests.Session()
    adapter = HTTPAdapter(max_retries=DEFAULT_RETRY_STRATEGY)
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    session.headers.update({"User-Agent": "rescale-pipeline/1.0", "Accept": "*/*"})

    return session


def get_content(
    session: requests.Session,
    url: str,
    headers: Optional[Dict[str, str]] = None,
    retry_attempts: int = 3,
    params: Optional[Dict[str, Any]] = None,
    timeout: int = 30,
    rate_limit_delay: float = 0.1,
) -> bytes:
    """Fetch the raw body of a URL with retries and rate limiting.

    Args:
        session: HTTP session to use
        url: URL to fetch
        headers: Optional extra headers
        retry_attempts: Number of retry attempts
        params: Optional query parameters
        timeout: Request timeout in seconds
        rate_limit_delay: Delay between requests in seconds

    Returns:
        Response body as bytes

    Raises:
        requests.RequestException: When every attempt failed
    """
    # Simple rate limiting
    if hasattr(get_content, "_last_request_time"):
        elapsed = time.time() - get_content._last_request_time
        if elapsed < rate_limit_delay:
            time.sleep(rate_limit_delay - elapsed)

    get_content._last_request_time = time.time()

    for attempt in range(retry_attempts):
        try:
            start = time.time()
            response = session.get(url, headers=headers, params=params, timeout=timeout)
            response.raise_for_status()

            logger.info(f"Fetched {url}: {time.time() - start:.2f} seconds")
            return response.content

        except requests.RequestException as e:
            if attempt == retry_attempts - 1:
                raise requests.RequestException(
                    f"HTTP request failed for {url}: {str(e)}"
                ) from e

            # Retry with exponential backoff
            wait_time = 2**attempt
            logger.warning(
                f"Attempt {attempt + 1} failed for {url}, retrying in {wait_time}s..."
            )
            time.sleep(wait_time)

    raise requests.RequestException(
        f"Failed to fetch {url} after {retry_attempts} attempts"
    )
