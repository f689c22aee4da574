from __future__ import annotations

from typing import Generic

from customresource.models import (
    CreateRequest,
    DeleteRequest,
    Properties,
    ResourceResult,
    UpdateRequest,
)


class ResourceProvider(Generic[Properties]):
    """
    This provides a base class onto which concrete custom resources are built. Every operation
    succeeds without doing anything unless it is overridden.

    Operations may be coroutines or plain functions, and either return a ``ResourceResult`` or
    raise. Exceptions are reported back to the orchestrator as a generic failure by the handler.
    """

    async def on_create(self, request: CreateRequest[Properties]) -> ResourceResult:
        return ResourceResult.success()

    async def on_update(self, request: UpdateRequest[Properties]) -> ResourceResult:
        return ResourceResult.success()

    async def on_delete(self, request: DeleteRequest[Properties]) -> ResourceResult:
        return ResourceResult.success()
