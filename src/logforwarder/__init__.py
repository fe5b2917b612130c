"""
Azure log forwarder for LogicMonitor.

Normalizes Azure diagnostic log events delivered by Event Hub into
LogicMonitor log entries and submits each batch to the log ingestion API.
"""

from __future__ import annotations

from ._version import __version__
from .adapters.azure import AzureLogAdapter
from .client.api import LogIngestClient
from .client.provider import ClientProvider, build_client
from .core.errors import ConfigurationError, ForwarderError
from .core.models import DispatchOutcome, LogEntry, LogResponse, ResponseHeaders
from .core.pipeline import decode_event_bodies, process_events
from .core.settings import ForwarderSettings, load_settings
from .dispatch import Dispatcher
from .forwarder import InvocationContext, LogForwarder

__all__ = [
    "AzureLogAdapter",
    "ClientProvider",
    "ConfigurationError",
    "DispatchOutcome",
    "Dispatcher",
    "ForwarderError",
    "ForwarderSettings",
    "InvocationContext",
    "LogEntry",
    "LogForwarder",
    "LogIngestClient",
    "LogResponse",
    "ResponseHeaders",
    "build_client",
    "decode_event_bodies",
    "load_settings",
    "process_events",
    "__version__",
]
