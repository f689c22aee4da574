# request types sent by the orchestrator
REQUEST_TYPE_CREATE = "Create"
REQUEST_TYPE_UPDATE = "Update"
REQUEST_TYPE_DELETE = "Delete"

# outcome status values
STATUS_SUCCESS = "SUCCESS"
STATUS_FAILED = "FAILED"

# generic reasons reported back to the orchestrator
REASON_UNKNOWN_REQUEST_TYPE = "Could not understand Request Type"
REASON_UNKNOWN_ERROR = "Unknown Error"

# the presigned callback URLs reject any content type they were not signed with
RESPONSE_CONTENT_TYPE = ""

# plux namespace for resource provider plugins
RESOURCE_PROVIDER_NAMESPACE = "customresource.resource_providers"

TRUE_STRINGS = ("1", "true", "True")

# log level values accepted by the CFN_LOG environment variable
CFN_LOG_TRACE = "trace"
LOG_LEVELS = ("trace", "debug", "info", "warn", "error", "warning")
TRACE_LOG_LEVELS = [CFN_LOG_TRACE]
