import json
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Generic, Literal, NotRequired, Optional, TypedDict, TypeVar, Union

from customresource.constants import (
    REQUEST_TYPE_CREATE,
    REQUEST_TYPE_DELETE,
    REQUEST_TYPE_UPDATE,
    STATUS_FAILED,
    STATUS_SUCCESS,
)
from customresource.exceptions import InvalidRequestError

Properties = TypeVar("Properties")


class RequestType(str, Enum):
    CREATE = REQUEST_TYPE_CREATE
    UPDATE = REQUEST_TYPE_UPDATE
    DELETE = REQUEST_TYPE_DELETE


class OperationStatus(str, Enum):
    SUCCESS = STATUS_SUCCESS
    FAILED = STATUS_FAILED


class _BaseRequest(TypedDict, Generic[Properties]):
    RequestType: str
    ResponseURL: str
    StackId: str
    RequestId: str
    ResourceType: str
    LogicalResourceId: str
    ResourceProperties: NotRequired[Properties]


class CreateRequest(_BaseRequest[Properties]):
    RequestType: Literal["Create"]


class UpdateRequest(_BaseRequest[Properties]):
    RequestType: Literal["Update"]
    PhysicalResourceId: str
    OldResourceProperties: Properties


class DeleteRequest(_BaseRequest[Properties]):
    RequestType: Literal["Delete"]
    PhysicalResourceId: str


CustomResourceRequest = Union[
    CreateRequest[Properties], UpdateRequest[Properties], DeleteRequest[Properties]
]


class CustomResourceResponse(TypedDict):
    Status: str
    Reason: NotRequired[str]
    NoEcho: NotRequired[bool]
    Data: NotRequired[Any]
    PhysicalResourceId: str
    StackId: str
    RequestId: str
    LogicalResourceId: str


@dataclass
class ResourceResult:
    """
    The outcome of a single resource operation, as returned by the create/update/delete hooks.
    It only becomes a deliverable ``CustomResourceResponse`` once the handler stamps in the
    correlation fields via ``to_response``.
    """

    status: OperationStatus
    reason: Optional[str] = None
    no_echo: Optional[bool] = None
    data: Optional[Any] = None

    @classmethod
    def success(
        cls, data: Any = None, no_echo: bool = None, reason: str = None
    ) -> "ResourceResult":
        return cls(status=OperationStatus.SUCCESS, reason=reason, no_echo=no_echo, data=data)

    def validated(self) -> "ResourceResult":
        """
        Return a copy with the status coerced to an ``OperationStatus``.

        :raises ValueError: if the status is not a known status
        :raises TypeError: if the reason, flag or data cannot be encoded as JSON
        """
        status = OperationStatus(self.status)
        json.dumps([self.reason, self.no_echo, self.data])
        return replace(self, status=status)

    @classmethod
    def failed(cls, reason: str = None) -> "ResourceResult":
        return cls(status=OperationStatus.FAILED, reason=reason)

    def to_response(
        self,
        physical_resource_id: str,
        stack_id: str,
        request_id: str,
        logical_resource_id: str,
    ) -> CustomResourceResponse:
        response: CustomResourceResponse = {"Status": OperationStatus(self.status).value}
        if self.reason is not None:
            response["Reason"] = self.reason
        if self.no_echo is not None:
            response["NoEcho"] = self.no_echo
        if self.data is not None:
            response["Data"] = self.data
        response["PhysicalResourceId"] = physical_resource_id
        response["StackId"] = stack_id
        response["RequestId"] = request_id
        response["LogicalResourceId"] = logical_resource_id
        return response


def parse_request(payload: Union[str, bytes, dict]) -> CustomResourceRequest:
    """
    Decode a lifecycle event as received on the wire. Field presence is not validated, the
    handler treats the request type as the only discriminator.

    :param payload: a JSON document (str or bytes) or an already decoded dict
    :return: the lifecycle event
    :raises InvalidRequestError: if the payload is not a JSON object
    """
    if isinstance(payload, (str, bytes, bytearray)):
        try:
            payload = json.loads(payload)
        except ValueError as e:
            raise InvalidRequestError(f"Unable to decode lifecycle event: {e}") from e

    if not isinstance(payload, dict):
        raise InvalidRequestError(
            f"Lifecycle event must be a JSON object, got {type(payload).__name__}"
        )

    return dict(payload)


def serialize_response(response: CustomResourceResponse) -> str:
    return json.dumps(response, separators=(",", ":"))
