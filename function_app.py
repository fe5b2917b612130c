"""
Azure Function forwarding Azure logs to the LogicMonitor endpoint.

Triggered by batches from the Event Hub ``eventHub`` (connection string in
``LogsEventHubConnectionString``). Account and HTTP client settings come
from the application settings read by ``logforwarder.core.settings``:
LogicMonitorCompanyName, LogicMonitorAccessId, LogicMonitorAccessKey,
LogApiClientConnectTimeout, LogApiClientReadTimeout, LogApiClientDebugging.
"""
import logging
from typing import List

import azure.functions as func

from logforwarder import InvocationContext, LogForwarder, decode_event_bodies
from logforwarder.metrics.metrics import MetricsCollector

# Shared across invocations; the client itself is built on first use
FORWARDER = LogForwarder(metrics=MetricsCollector(enabled=True))

app = func.FunctionApp()


@app.function_name(name="LogForwarder")
@app.event_hub_message_trigger(
    arg_name="events",
    event_hub_name="eventHub",
    connection="LogsEventHubConnectionString",
    cardinality=func.Cardinality.MANY,
)
def forward(events: List[func.EventHubEvent], context: func.Context) -> None:
    """Forward one Event Hub batch."""
    log_events = decode_event_bodies([event.get_body() for event in events])
    FORWARDER.forward(
        log_events,
        InvocationContext.from_azure(context, logging.getLogger("logforwarder")),
    )
