"""Blocking HTTP transport for authority documents."""

from typing import Optional

import requests

from .errors import FetchError, FetchErrorKind
from .logger import StructuredLogger
from .retry import (
    RetryError,
    TransientHTTPError,
    exponential_backoff,
    should_retry_http_status,
)

USER_AGENT = "ubiows/0.1 (+http://www.ubio.org/)"


class HttpTransport:
    """
    `get(url) -> bytes` over a shared requests session.

    Timeouts, dropped connections and retryable statuses are retried
    with exponential backoff. Whatever still fails is raised as a
    FetchError; nothing is defaulted.
    """

    def __init__(
        self,
        logger: StructuredLogger,
        timeout: float = 15.0,
        max_retries: int = 3,
        base_delay: float = 1.0,
        session: Optional[requests.Session] = None,
    ):
        self.logger = logger
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = USER_AGENT
        self._get_with_retry = exponential_backoff(
            max_retries=max_retries,
            base_delay=base_delay,
            exceptions=(
                requests.exceptions.Timeout,
                requests.exceptions.ConnectionError,
                TransientHTTPError,
            ),
            on_retry=self._on_retry,
        )(self._get_once)

    def _on_retry(self, attempt: int, error: Exception, delay: float):
        self.logger.warning(
            "Retrying authority request",
            attempt=attempt,
            delay=delay,
            error=str(error),
        )

    def _get_once(self, url: str) -> requests.Response:
        self.logger.record_remote_call()
        resp = self.session.get(url, timeout=self.timeout)
        if should_retry_http_status(resp.status_code):
            raise TransientHTTPError(resp.status_code, url)
        return resp

    def get(self, url: str) -> bytes:
        """Fetch `url` and return the response body.

        Raises:
            FetchError: NOT_FOUND on 404, NETWORK_FAILURE on anything else
        """
        self.logger.debug("GET", url=url)
        try:
            resp = self._get_with_retry(url)
            resp.raise_for_status()
        except RetryError as e:
            cause = e.__cause__
            status = cause.status_code if isinstance(cause, TransientHTTPError) else None
            self.logger.error("Authority unreachable", url=url, attempts=e.attempts, error=str(cause))
            raise FetchError(
                FetchErrorKind.NETWORK_FAILURE, url, status=status, detail=str(cause)
            ) from e
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            if status == 404:
                self.logger.warning("Authority document not found", url=url, status=404)
                raise FetchError(FetchErrorKind.NOT_FOUND, url, status=404) from e
            self.logger.error("Authority request failed", url=url, status=status)
            raise FetchError(
                FetchErrorKind.NETWORK_FAILURE, url, status=status, detail=str(e)
            ) from e
        except requests.exceptions.RequestException as e:
            self.logger.error("Authority request error", url=url, error=str(e))
            raise FetchError(FetchErrorKind.NETWORK_FAILURE, url, detail=str(e)) from e
        return resp.content
