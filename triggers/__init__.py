"""
Triggers Package.

Azure Functions trigger implementations.

Event Grid:
    upload_notifier: Microsoft.Storage.BlobCreated -> RDP API registration

HTTP Endpoints:
    /api/health: Configuration health check

Trigger functions should be imported directly from their modules.
"""
