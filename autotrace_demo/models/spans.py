"""Read-only view of the span JSON printed by the console exporter."""

from datetime import datetime, timedelta
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class SpanContextRecord(BaseModel):
    """Identifiers of a printed span."""

    model_config = ConfigDict(extra="ignore")

    trace_id: str = Field(description="Trace id, 0x-prefixed hex")
    span_id: str = Field(description="Span id, 0x-prefixed hex")
    trace_state: str = Field(default="[]", description="Trace state as printed")


class SpanStatusRecord(BaseModel):
    """Status of a printed span."""

    model_config = ConfigDict(extra="ignore")

    status_code: str = Field(description="UNSET, OK or ERROR")
    description: Optional[str] = Field(default=None, description="Status description")


class ResourceRecord(BaseModel):
    """Resource the span was emitted under."""

    model_config = ConfigDict(extra="ignore")

    attributes: dict[str, Any] = Field(default_factory=dict, description="Resource attributes")
    schema_url: str = Field(default="", description="Resource schema URL")


class SpanRecord(BaseModel):
    """One span as printed by ``ConsoleSpanExporter``."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(description="Span name")
    context: SpanContextRecord = Field(description="Span identifiers")
    kind: str = Field(description="Span kind, e.g. SpanKind.SERVER")
    parent_id: Optional[str] = Field(default=None, description="Parent span id")
    start_time: Optional[datetime] = Field(default=None, description="Start timestamp")
    end_time: Optional[datetime] = Field(default=None, description="End timestamp")
    status: Optional[SpanStatusRecord] = Field(default=None, description="Span status")
    attributes: dict[str, Any] = Field(default_factory=dict, description="Span attributes")
    events: list[dict[str, Any]] = Field(default_factory=list, description="Span events")
    links: list[dict[str, Any]] = Field(default_factory=list, description="Span links")
    resource: ResourceRecord = Field(default_factory=ResourceRecord, description="Resource")

    @property
    def trace_id(self) -> str:
        return self.context.trace_id

    @property
    def span_id(self) -> str:
        return self.context.span_id

    @property
    def kind_name(self) -> str:
        """Kind without the ``SpanKind.`` prefix."""
        return self.kind.rsplit(".", 1)[-1]

    @property
    def is_server(self) -> bool:
        return self.kind_name == "SERVER"

    @property
    def is_client(self) -> bool:
        return self.kind_name == "CLIENT"

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    @property
    def duration(self) -> Optional[timedelta]:
        if self.start_time is None or self.end_time is None:
            return None
        return self.end_time - self.start_time
