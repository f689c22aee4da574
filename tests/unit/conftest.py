import pytest

from customresource.models import CustomResourceResponse

TEST_RESPONSE_URL = "https://cb.example/x"


class CapturingResponder:
    """Responder test double which records every delivery instead of sending it."""

    def __init__(self):
        self.calls: list[tuple[str, CustomResourceResponse]] = []

    async def __call__(self, url: str, response: CustomResourceResponse) -> None:
        self.calls.append((url, response))

    @property
    def responses(self) -> list[CustomResourceResponse]:
        return [response for _, response in self.calls]


@pytest.fixture
def responder() -> CapturingResponder:
    return CapturingResponder()


@pytest.fixture
def create_request():
    def _create(request_type: str = "Create", **kwargs) -> dict:
        request = {
            "RequestType": request_type,
            "ResponseURL": TEST_RESPONSE_URL,
            "StackId": "S1",
            "RequestId": "R1",
            "ResourceType": "Custom::Test",
            "LogicalResourceId": "L1",
            "ResourceProperties": {"Name": "test"},
        }
        if request_type in ("Update", "Delete"):
            request["PhysicalResourceId"] = "P1"
        if request_type == "Update":
            request["OldResourceProperties"] = {"Name": "old"}
        request.update(kwargs)
        return request

    return _create
