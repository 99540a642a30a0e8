"""
Avatar enrichment.

Every user returned by the API carries an ``image`` URL obtained from
an external echo endpoint: the service POSTs ``{"url": IMAGE_URL}`` to
``ECHO_URL`` and reads the URL back from the ``json`` key of the echoed
response.  The call is best effort.  Any failure yields an empty
string and is only logged; it never reaches the HTTP client.

No timeout beyond the ``requests`` default is set and nothing is
retried.
"""

import logging
from typing import Optional

import requests
from fastapi import Request


logger = logging.getLogger(__name__)

ECHO_URL = "http://httpbin.org/anything"
IMAGE_URL = "https://cdn1.iconfinder.com/data/icons/DarkGlass_Reworked/128x128/apps/user-3.png"


class AvatarClient:
    """Client for the echo endpoint that supplies avatar URLs."""

    def __init__(
        self,
        *,
        echo_url: str = ECHO_URL,
        image_url: str = IMAGE_URL,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialise the client.

        Args:
            echo_url: Endpoint that echoes posted JSON under ``json``.
            image_url: URL sent to the endpoint and expected back.
            session: Optional requests session.  If not supplied, each
                call goes through ``requests.post`` and its own
                short‑lived session.  The client is shared by the worker
                threads and a ``requests.Session`` is not thread safe, so
                only pass one that is safe to share.
        """
        self.echo_url = echo_url
        self.image_url = image_url
        self.session = session

    def fetch_image_url(self) -> str:
        """Return the echoed avatar URL, or ``""`` on any failure."""
        try:
            logger.debug("Sending POST request to %s", self.echo_url)
            post = self.session.post if self.session is not None else requests.post
            response = post(self.echo_url, json={"url": self.image_url})
            if response.status_code != requests.codes.ok:
                logger.warning(
                    "Avatar lookup returned HTTP %s from %s",
                    response.status_code,
                    self.echo_url,
                )
                return ""
            url = response.json()["json"]["url"]
        except requests.RequestException as exc:
            logger.warning("Avatar lookup failed: %s", exc)
            return ""
        except (ValueError, KeyError, TypeError) as exc:
            # Body was not JSON or did not have the ``json.url`` shape.
            logger.warning("Avatar lookup returned an unexpected body: %s", exc)
            return ""
        if not isinstance(url, str):
            logger.warning("Avatar lookup returned a non-string url: %r", url)
            return ""
        return url

    def close(self) -> None:
        if self.session is not None:
            self.session.close()


def get_avatar_client(request: Request) -> AvatarClient:
    """FastAPI dependency returning the client created at startup."""
    return request.app.state.avatars
