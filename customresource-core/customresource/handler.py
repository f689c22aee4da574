from __future__ import annotations

import asyncio
import logging
from typing import Generic, Optional

from customresource import config
from customresource.constants import REASON_UNKNOWN_ERROR, REASON_UNKNOWN_REQUEST_TYPE
from customresource.logging.format import bind_request, request_context
from customresource.models import (
    CreateRequest,
    CustomResourceRequest,
    CustomResourceResponse,
    DeleteRequest,
    Properties,
    RequestType,
    ResourceResult,
    UpdateRequest,
)
from customresource.provider import ResourceProvider
from customresource.responder import Responder, presigned_url_responder
from customresource.utils.asyncio import maybe_await

LOG = logging.getLogger(__name__)


class CustomResourceHandler(Generic[Properties]):
    """
    Turns one lifecycle event into exactly one response delivered to the event's callback URL.

    The resource logic lives in a ``ResourceProvider``. Subclasses may also override ``on_create``,
    ``on_update`` and ``on_delete`` directly, which by default delegate to the provider.
    Failures of these operations never escape ``handle``, they are reported as ``FAILED`` responses.
    Failures to deliver the response are raised to the caller.
    """

    def __init__(
        self,
        identifier: str,
        respond: Responder = presigned_url_responder,
        provider: ResourceProvider[Properties] = None,
    ):
        """
        :param identifier: the physical resource id stamped onto every response
        :param respond: the responder used to deliver responses
        :param provider: the provider implementing the operations, defaults to a no-op provider
        """
        self._identifier = identifier
        self.respond = respond
        self.provider = provider or ResourceProvider()

    @property
    def identifier(self) -> str:
        return self._identifier

    async def on_create(self, request: CreateRequest[Properties]) -> ResourceResult:
        return await maybe_await(self.provider.on_create(request))

    async def on_update(self, request: UpdateRequest[Properties]) -> ResourceResult:
        return await maybe_await(self.provider.on_update(request))

    async def on_delete(self, request: DeleteRequest[Properties]) -> ResourceResult:
        return await maybe_await(self.provider.on_delete(request))

    async def _handle_with_errors(
        self, request: CustomResourceRequest[Properties]
    ) -> ResourceResult:
        request_type = request.get("RequestType")
        try:
            match request_type:
                case RequestType.CREATE:
                    result = await maybe_await(self.on_create(request))
                case RequestType.UPDATE:
                    result = await maybe_await(self.on_update(request))
                case RequestType.DELETE:
                    result = await maybe_await(self.on_delete(request))
                case _:
                    LOG.warning(
                        'Unknown request type "%s" for resource %s',
                        request_type,
                        request.get("LogicalResourceId"),
                    )
                    return ResourceResult.failed(REASON_UNKNOWN_REQUEST_TYPE)

            if not isinstance(result, ResourceResult):
                raise TypeError(
                    f"Operation {request_type} returned {type(result).__name__}, "
                    "expected a ResourceResult"
                )
            return result.validated()
        except Exception as e:
            log_method = LOG.error
            if config.CFN_VERBOSE_ERRORS or LOG.isEnabledFor(logging.DEBUG):
                log_method = LOG.exception
            log_method(
                "Error during %s of resource %s (type %s): %s",
                request_type,
                request.get("LogicalResourceId"),
                request.get("ResourceType"),
                e,
            )
            return ResourceResult.failed(REASON_UNKNOWN_ERROR)

    async def handle(self, request: CustomResourceRequest[Properties]) -> CustomResourceResponse:
        """
        Handle a lifecycle event and deliver the response to its callback URL. If the event does
        not carry a callback URL, the delivery is skipped.

        :param request: the lifecycle event
        :return: the response that was delivered
        :raises Exception: any error raised by the responder while delivering the response
        """
        token = bind_request(request)
        try:
            return await self._handle(request)
        finally:
            request_context.reset(token)

    async def _handle(self, request: CustomResourceRequest[Properties]) -> CustomResourceResponse:
        result = await self._handle_with_errors(request)
        response = result.to_response(
            physical_resource_id=self.identifier,
            stack_id=request.get("StackId"),
            request_id=request.get("RequestId"),
            logical_resource_id=request.get("LogicalResourceId"),
        )

        response_url: Optional[str] = request.get("ResponseURL")
        if not response_url:
            LOG.warning(
                "No ResponseURL in request %s, not sending %s response",
                request.get("RequestId"),
                response["Status"],
            )
            return response

        await self.respond(response_url, response)
        return response

    def handle_sync(self, request: CustomResourceRequest[Properties]) -> CustomResourceResponse:
        """Run ``handle`` to completion on a new event loop, for callers without a running loop."""
        return asyncio.run(self.handle(request))
