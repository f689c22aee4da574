import os
from typing import Optional, Union

from customresource.constants import LOG_LEVELS, TRACE_LOG_LEVELS, TRUE_STRINGS


def is_env_true(env_var_name: str) -> bool:
    """Whether the given environment variable has a truthy value."""
    return os.environ.get(env_var_name, "").lower().strip() in TRUE_STRINGS


def eval_log_type(env_var_name: str) -> Union[str, bool]:
    """Get the log type from environment variable"""
    cfn_log = os.environ.get(env_var_name, "").lower().strip()
    return cfn_log if cfn_log in LOG_LEVELS else False


def parse_float_env(env_var_name: str) -> Optional[float]:
    """Parse the value of the given env variable as a float, or return None if it is unset or empty."""
    value = os.environ.get(env_var_name, "").strip()
    if not value:
        return None
    return float(value)


def is_trace_logging_enabled() -> bool:
    if CFN_LOG:
        return CFN_LOG in TRACE_LOG_LEVELS
    return False


# whether to enable verbose debug logging
CFN_LOG = eval_log_type("CFN_LOG")
DEBUG = is_env_true("DEBUG") or CFN_LOG in TRACE_LOG_LEVELS

# whether to log the full stack trace of failing resource operations
CFN_VERBOSE_ERRORS = is_env_true("CFN_VERBOSE_ERRORS")

# timeout (in seconds) for delivering a response to the callback URL, unset means no timeout
CFN_RESPONSE_TIMEOUT = parse_float_env("CFN_RESPONSE_TIMEOUT")
