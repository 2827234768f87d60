"""Hot-ranking client: fetch the ranking page and turn it into RankingItems."""

from typing import Any, List
from urllib.parse import urlencode

import requests

from .config import RunConfig
from .errors import RankingFetchError, RankingFormatError
from .logger import get_logger
from .retry import RetryError, exponential_backoff, should_retry_http_status
from .schema import RankingItem, validate_ranking_item

logger = get_logger()


class RetryableStatusError(Exception):
    """Response status worth another attempt (429, 5xx...)."""

    def __init__(self, status_code: int):
        super().__init__(f"HTTP {status_code}")
        self.status_code = status_code


def build_ranking_url(config: RunConfig) -> str:
    return f"{config.base_url}?{urlencode(config.query_params())}"


def _log_retry(attempt: int, exc: Exception, delay: float):
    logger.warning("Ranking request failed, retrying", attempt=attempt, error=str(exc), delay=delay)


def _get_with_retry(url: str, config: RunConfig, session=None) -> requests.Response:
    http = session if session is not None else requests

    @exponential_backoff(
        max_retries=config.max_retries,
        base_delay=config.retry_delay,
        exceptions=(requests.exceptions.Timeout, requests.exceptions.ConnectionError, RetryableStatusError),
        on_retry=_log_retry,
    )
    def _get():
        logger.record_api_call()
        resp = http.get(url, timeout=config.timeout)
        if should_retry_http_status(resp.status_code):
            raise RetryableStatusError(resp.status_code)
        return resp

    return _get()


def fetch_hot_ranking(config: RunConfig, session=None) -> List[RankingItem]:
    """Fetch one ranking page and parse it.

    Args:
        config: Run configuration (endpoint, page, month, timeout, retries)
        session: Optional requests.Session; module-level requests is used otherwise

    Returns:
        Ranking items in presentation order

    Raises:
        RankingFetchError: On connection failure, timeout or an HTTP error status
        RankingFormatError: If the body is not the expected JSON payload
    """
    url = build_ranking_url(config)
    logger.info("Fetching hot ranking", url=url)

    try:
        resp = _get_with_retry(url, config, session=session)
        resp.raise_for_status()
    except RetryError as e:
        cause = e.__cause__
        logger.record_error(type(cause).__name__)
        if isinstance(cause, RetryableStatusError):
            logger.error("Ranking request failed", url=url, status=cause.status_code)
            raise RankingFetchError(f"Ranking request failed ({cause.status_code}): {url}")
        if isinstance(cause, requests.exceptions.Timeout):
            logger.error("Ranking request timed out", url=url)
            raise RankingFetchError(f"Ranking request timed out after {config.max_retries + 1} attempts: {url}")
        logger.error("Ranking request could not connect", url=url, error=str(cause))
        raise RankingFetchError(f"Ranking request could not connect: {cause}")
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else "HTTPError"
        logger.record_error(f"HTTPError_{status}")
        logger.error("Ranking request failed", url=url, status=status)
        raise RankingFetchError(f"Ranking request failed ({status}): {url}")
    except requests.exceptions.RequestException as e:
        logger.record_error("RequestException")
        logger.error("Ranking request error", url=url, error=str(e))
        raise RankingFetchError(f"Ranking request error: {e}")

    try:
        payload = resp.json()
    except ValueError as e:
        logger.record_error("InvalidJSON")
        raise RankingFormatError(f"Ranking response is not valid JSON: {e}")

    items = parse_ranking_payload(payload)
    logger.info(f"Fetched {len(items)} ranking entries")
    return items


def parse_ranking_payload(payload: Any) -> List[RankingItem]:
    """
    Extract ranking items from the decoded response body.

    The body must be an object with a ``content`` list; each entry needs
    ``ranking`` and ``playletName``.

    Raises:
        RankingFormatError: If the payload or any entry has the wrong shape
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("content"), list):
        raise RankingFormatError("Ranking response has no 'content' list")

    items: List[RankingItem] = []
    for i, entry in enumerate(payload["content"]):
        errors = validate_ranking_item(entry)
        if errors:
            raise RankingFormatError(f"Ranking entry {i} is invalid: {'; '.join(errors)}")
        items.append(RankingItem(rank=entry["ranking"], title=entry["playletName"]))
    return items
