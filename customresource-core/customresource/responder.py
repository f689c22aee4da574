import logging
from typing import Awaitable, Optional, Protocol

import requests

from customresource import config
from customresource.constants import RESPONSE_CONTENT_TYPE
from customresource.models import CustomResourceResponse, serialize_response
from customresource.utils.asyncio import run_sync

LOG = logging.getLogger(__name__)


class Responder(Protocol):
    """
    Delivers a complete response to the callback URL of a lifecycle event. Implementations must
    not retry, and must raise if the response could not be handed over to the peer.
    """

    def __call__(self, url: str, response: CustomResourceResponse) -> Awaitable[None]:
        ...


class RequestsResponder:
    """
    Responder which PUTs the JSON encoded response to the (usually presigned) callback URL using
    ``requests``. The blocking call runs in a worker thread, so the calling coroutine only suspends.
    """

    session: Optional[requests.Session]
    timeout: Optional[float]

    def __init__(self, session: requests.Session = None, timeout: float = None):
        self.session = session
        self.timeout = timeout if timeout is not None else config.CFN_RESPONSE_TIMEOUT

    async def __call__(self, url: str, response: CustomResourceResponse) -> None:
        await run_sync(self.put, url, response)

    def put(self, url: str, response: CustomResourceResponse) -> requests.Response:
        """
        Send the response synchronously.

        :param url: the callback URL
        :param response: the complete response
        :return: the HTTP response of the peer
        :raises requests.exceptions.RequestException: if the connection could not be established
        """
        body = serialize_response(response)
        headers = {"Content-Type": RESPONSE_CONTENT_TYPE}

        LOG.debug(
            "Sending %s response for request %s to %s",
            response.get("Status"),
            response.get("RequestId"),
            url,
        )
        client = self.session or requests
        result = client.put(url, data=body.encode("utf-8"), headers=headers, timeout=self.timeout)

        # the peer accepted the write, the status code is informational only
        if not result.ok:
            LOG.warning(
                "Callback URL responded with status %s for request %s: %s",
                result.status_code,
                response.get("RequestId"),
                result.text,
            )
        return result


async def presigned_url_responder(url: str, response: CustomResourceResponse) -> None:
    """Default responder, sends the response with a new ``RequestsResponder``."""
    await RequestsResponder()(url, response)
