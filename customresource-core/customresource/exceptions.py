class CustomResourceError(Exception):
    """Base class for errors raised by the custom resource handler."""


class InvalidRequestError(CustomResourceError):
    """Raised when an incoming lifecycle event cannot be decoded into a JSON object."""


class NoResourceProvider(CustomResourceError):
    """Raised when no resource provider is registered for a resource type."""

    def __init__(self, resource_type: str):
        super().__init__(f'No resource provider found for "{resource_type}"')
        self.resource_type = resource_type
