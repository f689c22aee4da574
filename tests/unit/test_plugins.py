import asyncio

import pytest
from plux import PluginFinder, PluginManager, PluginSpec

from customresource.constants import REASON_UNKNOWN_ERROR, RESOURCE_PROVIDER_NAMESPACE
from customresource.exceptions import NoResourceProvider
from customresource.handler import CustomResourceHandler
from customresource.models import ResourceResult
from customresource.plugins import PluginResourceProvider, ResourceProviderPlugin
from customresource.provider import ResourceProvider


class BucketProvider(ResourceProvider):
    instances = 0

    def __init__(self):
        BucketProvider.instances += 1

    async def on_create(self, request):
        return ResourceResult.success(data={"BucketName": request["ResourceProperties"]["Name"]})


class BucketProviderPlugin(ResourceProviderPlugin):
    name = "Custom::Bucket"

    def load(self):
        self.factory = BucketProvider


class BrokenProviderPlugin(ResourceProviderPlugin):
    name = "Custom::Broken"

    def load(self):
        raise ImportError("missing optional dependency")


class EmptyProviderPlugin(ResourceProviderPlugin):
    name = "Custom::Empty"

    def load(self):
        pass


class StaticPluginFinder(PluginFinder):
    def __init__(self, *plugins):
        self.plugins = plugins

    def find_plugins(self) -> list[PluginSpec]:
        return [
            PluginSpec(RESOURCE_PROVIDER_NAMESPACE, plugin.name, plugin) for plugin in self.plugins
        ]


@pytest.fixture
def plugin_provider():
    BucketProvider.instances = 0
    finder = StaticPluginFinder(BucketProviderPlugin, BrokenProviderPlugin, EmptyProviderPlugin)
    return PluginResourceProvider(PluginManager(RESOURCE_PROVIDER_NAMESPACE, finder=finder))


def test_load_resource_provider(plugin_provider):
    provider = plugin_provider.load_resource_provider("Custom::Bucket")

    assert isinstance(provider, BucketProvider)
    assert plugin_provider.load_resource_provider("Custom::Bucket") is provider
    assert BucketProvider.instances == 1


@pytest.mark.parametrize("resource_type", ["Custom::Unknown", "Custom::Broken", "Custom::Empty"])
def test_load_resource_provider_fails(plugin_provider, resource_type):
    with pytest.raises(NoResourceProvider) as e:
        plugin_provider.load_resource_provider(resource_type)

    assert e.value.resource_type == resource_type
    assert resource_type in str(e.value)


def test_handler_routes_by_resource_type(plugin_provider, responder, create_request):
    handler = CustomResourceHandler("handler-1", responder, provider=plugin_provider)

    asyncio.run(handler.handle(create_request("Create", ResourceType="Custom::Bucket")))
    asyncio.run(handler.handle(create_request("Delete", ResourceType="Custom::Bucket")))

    create_response, delete_response = responder.responses
    assert create_response["Status"] == "SUCCESS"
    assert create_response["Data"] == {"BucketName": "test"}
    assert delete_response["Status"] == "SUCCESS"
    assert BucketProvider.instances == 1


def test_handler_reports_unknown_resource_type(plugin_provider, responder, create_request):
    handler = CustomResourceHandler("handler-1", responder, provider=plugin_provider)

    asyncio.run(handler.handle(create_request("Update", ResourceType="Custom::Unknown")))

    response = responder.responses[0]
    assert response["Status"] == "FAILED"
    assert response["Reason"] == REASON_UNKNOWN_ERROR
