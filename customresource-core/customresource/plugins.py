"""
Resource providers can be shipped as plugins and resolved by the ``ResourceType`` of a lifecycle event.
A plugin is registered as an entry point in the ``customresource.resource_providers`` namespace, named
after the resource type it handles (e.g., ``Custom::DnsRecord``), and sets ``factory`` when loaded::

    class DnsRecordProviderPlugin(ResourceProviderPlugin):
        name = "Custom::DnsRecord"

        def load(self):
            from mypackage.dns import DnsRecordProvider

            self.factory = DnsRecordProvider
"""
import logging
import threading
from typing import Optional, Type

from plux import Plugin, PluginManager

from customresource import config
from customresource.constants import RESOURCE_PROVIDER_NAMESPACE
from customresource.exceptions import NoResourceProvider
from customresource.models import (
    CreateRequest,
    CustomResourceRequest,
    DeleteRequest,
    ResourceResult,
    UpdateRequest,
)
from customresource.provider import ResourceProvider
from customresource.utils.asyncio import maybe_await

LOG = logging.getLogger(__name__)


class ResourceProviderPlugin(Plugin):
    """
    Base class for resource provider plugins.
    """

    namespace = RESOURCE_PROVIDER_NAMESPACE

    def __init__(self):
        self.factory: Optional[Type[ResourceProvider]] = None


class PluginResourceProvider(ResourceProvider):
    """
    Resource provider that forwards each operation to the provider plugin registered for the
    ``ResourceType`` of the request. Providers are instantiated once per resource type.
    """

    def __init__(self, plugin_manager: PluginManager = None):
        self.plugin_manager = plugin_manager or PluginManager(RESOURCE_PROVIDER_NAMESPACE)
        self._providers: dict[str, ResourceProvider] = {}
        self._mutex = threading.RLock()

    def load_resource_provider(self, resource_type: str) -> ResourceProvider:
        if provider := self._providers.get(resource_type):
            return provider

        with self._mutex:
            if provider := self._providers.get(resource_type):
                return provider

            try:
                plugin = self.plugin_manager.load(resource_type)
            except ValueError:
                # could not find a plugin for that name
                raise NoResourceProvider(resource_type)
            except Exception as e:
                LOG.warning(
                    "Failed to load resource type %s as a ResourceProvider: %s",
                    resource_type,
                    e,
                    exc_info=config.CFN_VERBOSE_ERRORS or LOG.isEnabledFor(logging.DEBUG),
                )
                raise NoResourceProvider(resource_type) from e

            if not plugin.factory:
                raise NoResourceProvider(resource_type)

            provider = self._providers[resource_type] = plugin.factory()
            LOG.debug("Loaded resource provider %s for %s", type(provider).__name__, resource_type)
            return provider

    def _get_provider(self, request: CustomResourceRequest) -> ResourceProvider:
        return self.load_resource_provider(request.get("ResourceType"))

    async def on_create(self, request: CreateRequest) -> ResourceResult:
        return await maybe_await(self._get_provider(request).on_create(request))

    async def on_update(self, request: UpdateRequest) -> ResourceResult:
        return await maybe_await(self._get_provider(request).on_update(request))

    async def on_delete(self, request: DeleteRequest) -> ResourceResult:
        return await maybe_await(self._get_provider(request).on_delete(request))
