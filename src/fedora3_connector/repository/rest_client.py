"""
Fedora 3 REST API client.

Implements the RepositoryClient protocol over the Fedora 3 REST API
(``/objects/{pid}/datastreams/{dsid}``) using httpx.
"""
from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import quote

import httpx

from ..errors import DatastreamNotFoundError, RetrievalError
from ..settings import Settings, create_settings_from_env
from .base import DatastreamProfile, RepositoryClient
from .content import DatastreamContent
from .profile_xml import parse_datastream_profile

__all__ = ["FedoraRestClient"]

logger = logging.getLogger(__name__)

USER_AGENT = "fedora3-connector/0.1.0"


class FedoraRestClient(RepositoryClient):
    """
    HTTP client for the datastream operations of the Fedora 3 REST API.

    Profiles are fetched and parsed eagerly; content is returned as a
    streamed DatastreamContent the caller must close. No request is retried.
    """

    def __init__(self, settings: Settings, *, transport: Optional[httpx.BaseTransport] = None):
        """
        Initialize the REST client.

        Args:
            settings: Repository URL, credentials and timeouts
            transport: Optional httpx transport (tests inject httpx.MockTransport)
        """
        self._settings = settings

        auth = None
        if settings.has_credentials:
            auth = httpx.BasicAuth(settings.fedora_user, settings.fedora_pass)
            logger.debug(f"Fedora client using basic auth as {settings.fedora_user}")
        else:
            logger.debug(f"No auth configured for {settings.fedora_url}, proceeding anonymous")

        self.client = httpx.Client(
            base_url=settings.fedora_url,
            auth=auth,
            timeout=httpx.Timeout(settings.http_timeout_s),
            follow_redirects=True,
            verify=not settings.fedora_insecure,
            headers={"User-Agent": USER_AGENT},
            transport=transport,
        )
        logger.debug(f"Fedora client timeout: {settings.http_timeout_s}s, insecure: {settings.fedora_insecure}")

    @classmethod
    def from_env(cls, *, transport: Optional[httpx.BaseTransport] = None) -> "FedoraRestClient":
        """Create a client configured from FEDORA3_* environment variables."""
        return cls(create_settings_from_env(), transport=transport)

    @property
    def settings(self) -> Settings:
        return self._settings

    def get_datastream_profile(self, pid: str, dsid: str) -> DatastreamProfile:
        """
        Fetch and parse the datastreamProfile of pid/dsid.

        Raises:
            DatastreamNotFoundError: If the object or datastream does not exist
            ProfileParseError: If the response is not a datastream profile
            RetrievalError: For network, auth or other HTTP errors
        """
        path = self._datastream_path(pid, dsid)
        logger.debug(f"Getting datastream profile for {pid}.{dsid}")

        try:
            response = self.client.get(path, params={"format": "xml"})
        except httpx.RequestError as e:
            raise RetrievalError(f"Network error fetching profile of {pid}/{dsid}: {e}") from e

        self._raise_for_status(response, f"profile of {pid}/{dsid}")
        return parse_datastream_profile(response.content)

    def open_datastream_content(self, pid: str, dsid: str) -> DatastreamContent:
        """
        Open a streamed request for the content of pid/dsid.

        Returns:
            Content stream; closing it releases the connection

        Raises:
            DatastreamNotFoundError: If the object or datastream does not exist
            RetrievalError: For network, auth or other HTTP errors
        """
        path = f"{self._datastream_path(pid, dsid)}/content"
        request = self.client.build_request("GET", path)

        try:
            response = self.client.send(request, stream=True)
        except httpx.RequestError as e:
            raise RetrievalError(f"Network error fetching content of {pid}/{dsid}: {e}") from e

        try:
            self._raise_for_status(response, f"content of {pid}/{dsid}")
        except RetrievalError:
            response.close()
            raise

        return DatastreamContent(response, description=f"{pid}/{dsid}")

    def _raise_for_status(self, response: httpx.Response, what: str) -> None:
        """Map non-success HTTP statuses onto the connector's error taxonomy."""
        if response.is_success:
            return

        status = response.status_code
        logger.debug(f"Fedora returned {status} for {what}")
        if status == 404:
            raise DatastreamNotFoundError(f"Not found: {what}", status_code=status)
        elif status in (401, 403):
            raise RetrievalError(f"Authentication failed for {what}", status_code=status)
        else:
            raise RetrievalError(f"Fedora error {status} for {what}", status_code=status)

    @staticmethod
    def _datastream_path(pid: str, dsid: str) -> str:
        return f"/objects/{quote(pid, safe=':')}/datastreams/{quote(dsid, safe='')}"

    def close(self):
        """Close HTTP client."""
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
