"""Audit side-channel: interception, serialization and dispatch."""

from taskroster.audit.dispatcher import AuditDispatcher, dispatcher
from taskroster.audit.interceptor import audited
from taskroster.audit.serialization import to_json
from taskroster.audit.sinks import (
    AuditSink,
    HttpAuditSink,
    LambdaAuditSink,
    LoggingAuditSink,
    build_audit_sink,
    get_audit_sink,
    set_audit_sink,
)

__all__ = [
    "AuditDispatcher",
    "AuditSink",
    "HttpAuditSink",
    "LambdaAuditSink",
    "LoggingAuditSink",
    "audited",
    "build_audit_sink",
    "dispatcher",
    "get_audit_sink",
    "set_audit_sink",
    "to_json",
]
