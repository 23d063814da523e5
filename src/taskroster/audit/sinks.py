"""Audit sinks - remote destinations for serialized audit records."""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Optional

import httpx

from taskroster.config import AuditSinkKind, settings
from taskroster.errors import ConfigurationError

logger = logging.getLogger("taskroster.audit")


class AuditSink(ABC):
    """Abstract base class for audit sinks."""

    @abstractmethod
    async def send(self, payload: str) -> None:
        """
        Ship one serialized audit record.

        Callers never inspect the outcome; implementations may raise freely.
        """
        pass


class LambdaAuditSink(AuditSink):
    """
    Invoke a Lambda function asynchronously (``InvocationType="Event"``).

    Credentials and region follow the standard boto3 resolution chain
    (environment, shared config, instance role); ``region_name`` overrides.
    """

    def __init__(self, function_name: str, region_name: Optional[str] = None):
        self.function_name = function_name
        self.region_name = region_name
        self._lambda_client = None

    @property
    def lambda_client(self):
        """Lazy initialization of the Lambda client."""
        if self._lambda_client is None:
            import boto3

            self._lambda_client = boto3.client("lambda", region_name=self.region_name)
        return self._lambda_client

    def _invoke(self, payload: str) -> dict:
        return self.lambda_client.invoke(
            FunctionName=self.function_name,
            InvocationType="Event",
            Payload=payload.encode("utf-8"),
        )

    async def send(self, payload: str) -> None:
        # boto3 is blocking; keep it off the event loop
        response = await asyncio.to_thread(self._invoke, payload)
        logger.debug(
            f"Lambda {self.function_name} accepted audit event "
            f"(status {response.get('StatusCode')})"
        )


class HttpAuditSink(AuditSink):
    """POST the audit record to an HTTP endpoint."""

    def __init__(
        self,
        endpoint: str,
        timeout_ms: int = 2000,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.endpoint = endpoint
        self.timeout_ms = timeout_ms
        self._transport = transport

    async def send(self, payload: str) -> None:
        async with httpx.AsyncClient(
            timeout=self.timeout_ms / 1000, transport=self._transport
        ) as client:
            response = await client.post(
                self.endpoint,
                content=payload,
                headers={"Content-Type": "application/json"},
            )
            response.raise_for_status()


class LoggingAuditSink(AuditSink):
    """Write audit records to the log (development)."""

    async def send(self, payload: str) -> None:
        logger.info(f"Audit event: {payload}")


def build_audit_sink(kind: AuditSinkKind) -> AuditSink:
    """Build a sink from settings."""
    if kind == AuditSinkKind.LAMBDA:
        return LambdaAuditSink(settings.audit_function_name, region_name=settings.aws_region)
    if kind == AuditSinkKind.HTTP:
        if not settings.audit_endpoint:
            raise ConfigurationError("audit_endpoint is required for the http audit sink")
        return HttpAuditSink(settings.audit_endpoint, timeout_ms=settings.audit_timeout_ms)
    if kind == AuditSinkKind.LOG:
        return LoggingAuditSink()
    raise ConfigurationError(f"Unknown audit sink: {kind}")


_audit_sink: Optional[AuditSink] = None


def get_audit_sink() -> AuditSink:
    """Get or create the configured audit sink singleton."""
    global _audit_sink
    if _audit_sink is None:
        _audit_sink = build_audit_sink(settings.audit_sink)
        logger.info(f"Audit sink: {type(_audit_sink).__name__}")
    return _audit_sink


def set_audit_sink(sink: Optional[AuditSink]) -> None:
    """Replace the audit sink singleton (``None`` rebuilds it from settings)."""
    global _audit_sink
    _audit_sink = sink
