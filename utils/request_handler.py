"""
Request Handler for the Shinden client

This module provides the HTTP layer used by ``ShindenClient``:
- Requests through one ``requests.Session`` with browser-like headers
- Optional, already authenticated, session cookie
- Mapping of error statuses to ``shinden.exceptions`` errors
- Form submission for the profile edit and settings pages

Usage:
    from utils.request_handler import create_request_handler_from_config

    handler = create_request_handler_from_config(timeout=10)
    html, final_url = handler.get_page('/user/123')
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple
from urllib.parse import urljoin

import requests

from shinden.constants import SHINDEN_URL
from shinden.exceptions import ForbiddenError, HttpError, NotFoundError
from utils.masking import mask_full, mask_headers

logger = logging.getLogger(__name__)


@dataclass
class RequestConfig:
    """Configuration for request handler"""
    base_url: str = SHINDEN_URL
    timeout: int = 30
    session_cookie: Optional[str] = None
    session_cookie_name: str = 'sess_shinden'
    user_agent: Optional[str] = None


class RequestHandler:
    """
    HTTP request handler for Shinden pages.

    Errors are not retried: a failed request raises right away and the
    caller decides what to do with it.
    """

    # Browser-like headers; the site serves Polish content by default
    BROWSER_HEADERS = {
        'User-Agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36',
        'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8',
        'Accept-Language': 'pl-PL,pl;q=0.9,en-US;q=0.8,en;q=0.7',
        'Connection': 'keep-alive',
        'Upgrade-Insecure-Requests': '1',
        'DNT': '1',
    }

    def __init__(self, config: Optional[RequestConfig] = None, session: Optional[requests.Session] = None):
        """
        Initialize request handler.

        Args:
            config: RequestConfig instance with configuration settings
            session: Optional session to reuse (a new one is created otherwise)
        """
        self.config = config or RequestConfig()
        self.session = session or requests.Session()
        logger.debug(f"Request handler for {self.config.base_url} "
                     f"(session cookie: {mask_full(self.config.session_cookie)})")

    def build_url(self, path: str) -> str:
        """Resolve *path* against the configured base URL; absolute URLs are kept."""
        return urljoin(self.config.base_url.rstrip('/') + '/', path.lstrip('/'))

    def build_headers(self) -> Dict[str, str]:
        headers = dict(self.BROWSER_HEADERS)
        if self.config.user_agent:
            headers['User-Agent'] = self.config.user_agent
        if self.config.session_cookie:
            headers['Cookie'] = f'{self.config.session_cookie_name}={self.config.session_cookie}'
        return headers

    def _do_request(self, url: str, params: Optional[Dict]) -> requests.Response:
        """Execute a single HTTP request."""
        headers = self.build_headers()
        logger.debug(f"Requesting: {url} params={params}")
        logger.debug(f"Headers: {mask_headers(headers)}")
        try:
            response = self.session.get(url, params=params, headers=headers, timeout=self.config.timeout)
        except requests.RequestException as e:
            logger.error(f"Request to {url} failed: {e}")
            raise
        logger.debug(f"Response: HTTP {response.status_code}, Text-Length: {len(response.text)} chars")
        return response

    @staticmethod
    def raise_for_status(response: requests.Response):
        """Translate an error status into the matching ``HttpError``."""
        status = response.status_code
        if status < 400:
            return
        url = response.url
        if status == 404:
            raise NotFoundError(status, url)
        if status in (401, 403):
            raise ForbiddenError(status, url)
        raise HttpError(status, url)

    def get_page(self, path: str, params: Optional[Dict] = None) -> Tuple[str, str]:
        """
        Fetch a page.

        Args:
            path: Site path (``/user/1``) or absolute URL
            params: Optional query parameters

        Returns:
            Tuple of (HTML content, final URL after redirects)

        Raises:
            NotFoundError, ForbiddenError, HttpError: on error statuses
            requests.RequestException: on connection failures
        """
        url = self.build_url(path)
        response = self._do_request(url, params)
        try:
            self.raise_for_status(response)
        except HttpError as e:
            logger.warning(f"HTTP {e.status_code} for {url}")
            raise
        return response.text, response.url or url

    def post_form(self, path: str, data) -> requests.Response:
        """
        Submit form data to a page.

        Error statuses are not raised: the caller inspects the returned
        response (see ``ShindenClient`` update methods).

        Args:
            path: Site path or absolute URL
            data: Dict or list of (name, value) pairs

        Raises:
            requests.RequestException: on connection failures
        """
        url = self.build_url(path)
        headers = self.build_headers()
        logger.debug(f"Posting {len(data)} form fields to {url}")
        logger.debug(f"Headers: {mask_headers(headers)}")
        try:
            response = self.session.post(url, data=data, headers=headers, timeout=self.config.timeout)
        except requests.RequestException as e:
            logger.error(f"Form submission to {url} failed: {e}")
            raise
        logger.debug(f"Response: HTTP {response.status_code}")
        return response


def create_request_handler_from_config(session: Optional[requests.Session] = None,
                                       **config_kwargs) -> RequestHandler:
    """
    Create a RequestHandler instance from configuration.

    Args:
        session: Optional requests.Session to reuse
        **config_kwargs: Configuration parameters for RequestConfig

    Returns:
        Configured RequestHandler instance
    """
    config = RequestConfig(**config_kwargs)
    return RequestHandler(config=config, session=session)
