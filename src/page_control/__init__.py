from .clients import PageControlClient
from .config import ClientConfig, ConfigError, load_config
from .error_presenter import present_error, submission_error_message
from .exceptions import (
    ApiError,
    EmptySelection,
    InvalidSelectionError,
    MalformedRegistryState,
    SubmissionInProgressError,
    SubmissionRejected,
    TransportFailure,
)
from .http_client import HttpClient, TraceContext
from .models import CatalogEntry, ExistingGrant, GrantRequest, NavigationNode, SubmissionAck, normalize_url
from .navigation import CONSOLE_NAVIGATION, build_catalog, console_catalog, navigation_forest
from .payload import DEFAULT_STATUS, DEFAULT_USER_IDS, build_payload
from .permission_cache import PermissionCache
from .provisioning import ProvisioningSession, ProvisioningState
from .registry import RegistryReadResult, parse_existing, read_registry
from .selection import ALL_OPTION, Selection, SelectionKind, available_page_options, resolve, select_page
from .submitter import ProvisioningSubmitter, SubmissionResult

__version__ = "0.1.0"

__all__ = [
    "ALL_OPTION",
    "ApiError",
    "CONSOLE_NAVIGATION",
    "CatalogEntry",
    "ClientConfig",
    "ConfigError",
    "DEFAULT_STATUS",
    "DEFAULT_USER_IDS",
    "EmptySelection",
    "ExistingGrant",
    "GrantRequest",
    "HttpClient",
    "InvalidSelectionError",
    "MalformedRegistryState",
    "NavigationNode",
    "PageControlClient",
    "PermissionCache",
    "ProvisioningSession",
    "ProvisioningState",
    "ProvisioningSubmitter",
    "RegistryReadResult",
    "Selection",
    "SelectionKind",
    "SubmissionAck",
    "SubmissionInProgressError",
    "SubmissionRejected",
    "SubmissionResult",
    "TraceContext",
    "TransportFailure",
    "available_page_options",
    "build_catalog",
    "build_payload",
    "console_catalog",
    "load_config",
    "navigation_forest",
    "normalize_url",
    "parse_existing",
    "present_error",
    "read_registry",
    "resolve",
    "select_page",
    "submission_error_message",
]
