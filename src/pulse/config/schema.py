"""Schema for declarative metric definition files.

A definition file lists the metrics an application creates at start-up:

    metrics:
      - kind: histogram
        name: request_latency_seconds
        help: Request latency
        labels: [route]
        static_labels: {service: api}
        buckets:
          exponential: {start: 0.005, factor: 2, count: 10}
      - kind: summary
        name: payload_bytes
        help: Payload size
        objectives:
          - {quantile: 0.5, epsilon: 0.05}
        max_age_seconds: 600

Validation happens here so that a bad file fails before any metric is
registered.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing_extensions import Self

from ..buckets import exponential_buckets, linear_buckets, powers_of_ten_divided_buckets


class MetricKind(str, Enum):
    COUNTER = "counter"
    GAUGE = "gauge"
    HISTOGRAM = "histogram"
    SUMMARY = "summary"


class ExponentialBucketSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    start: float = Field(gt=0, description="Upper bound of the first bucket.")
    factor: float = Field(gt=1, description="Growth factor between buckets.")
    count: int = Field(ge=1, description="Number of buckets.")


class LinearBucketSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    start: float = Field(description="Upper bound of the first bucket.")
    width: float = Field(description="Distance between consecutive bounds.")
    count: int = Field(ge=1, description="Number of buckets.")


class PowersOfTenBucketSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    start_power: int
    end_power: int
    divisions: int = Field(ge=1)

    @model_validator(mode="after")
    def validate_range(self) -> Self:
        if self.end_power <= self.start_power:
            raise ValueError(
                f"end_power ({self.end_power}) must be greater than start_power ({self.start_power})"
            )
        return self


class BucketSpec(BaseModel):
    """Histogram buckets: an explicit list or exactly one generator."""

    model_config = ConfigDict(extra="forbid")

    explicit: list[float] | None = None
    exponential: ExponentialBucketSpec | None = None
    linear: LinearBucketSpec | None = None
    powers_of_ten: PowersOfTenBucketSpec | None = None

    @model_validator(mode="after")
    def validate_single_source(self) -> Self:
        given = [
            key
            for key in ("explicit", "exponential", "linear", "powers_of_ten")
            if getattr(self, key) is not None
        ]
        if len(given) != 1:
            raise ValueError(
                "buckets must define exactly one of explicit, exponential, linear, "
                f"powers_of_ten (got {given or 'none'})"
            )
        if self.explicit is not None and not self.explicit:
            raise ValueError("explicit buckets cannot be empty")
        return self

    def generate(self) -> tuple[float, ...]:
        """Return the bucket upper bounds."""
        if self.exponential is not None:
            e = self.exponential
            return exponential_buckets(e.start, e.factor, e.count)
        if self.linear is not None:
            return linear_buckets(self.linear.start, self.linear.width, self.linear.count)
        if self.powers_of_ten is not None:
            p = self.powers_of_ten
            return powers_of_ten_divided_buckets(p.start_power, p.end_power, p.divisions)
        return tuple(self.explicit or ())


class ObjectiveSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    quantile: float = Field(gt=0.0, lt=1.0)
    epsilon: float = Field(ge=0.0)


class MetricDefinition(BaseModel):
    """One metric in a definition file."""

    model_config = ConfigDict(extra="forbid")

    kind: MetricKind
    name: str = Field(min_length=1)
    help: str = ""
    labels: list[str] = Field(default_factory=list, description="Mutable label names.")
    static_labels: dict[str, str] = Field(default_factory=dict, description="Labels fixed at creation.")
    publish_on_creation: bool = True
    buckets: BucketSpec | None = None
    objectives: list[ObjectiveSpec] | None = None
    max_age_seconds: float | None = Field(default=None, gt=0)
    age_buckets: int | None = Field(default=None, ge=1)
    buffer_size: int | None = Field(default=None, ge=1)

    @model_validator(mode="after")
    def validate_labels(self) -> Self:
        """Label names must be unique and not double as static labels."""
        if len(set(self.labels)) != len(self.labels):
            raise ValueError(f"Metric '{self.name}': duplicate label names in {self.labels}")
        overlap = sorted(set(self.labels) & set(self.static_labels))
        if overlap:
            raise ValueError(
                f"Metric '{self.name}': labels {overlap} are declared both mutable and static"
            )
        return self

    @model_validator(mode="after")
    def validate_kind_fields(self) -> Self:
        """Histogram and summary options are only allowed on their own kind."""
        if self.buckets is not None and self.kind is not MetricKind.HISTOGRAM:
            raise ValueError(f"Metric '{self.name}': buckets are only valid for histograms")
        summary_fields = [
            key
            for key in ("objectives", "max_age_seconds", "age_buckets", "buffer_size")
            if getattr(self, key) is not None
        ]
        if summary_fields and self.kind is not MetricKind.SUMMARY:
            raise ValueError(
                f"Metric '{self.name}': {', '.join(summary_fields)} only valid for summaries"
            )
        return self


class MetricsFile(BaseModel):
    """Top level of a definition file."""

    model_config = ConfigDict(extra="forbid")

    metrics: list[MetricDefinition] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_unique_names(self) -> Self:
        seen: set[str] = set()
        duplicates: list[str] = []
        for definition in self.metrics:
            if definition.name in seen:
                duplicates.append(definition.name)
            seen.add(definition.name)
        if duplicates:
            raise ValueError(f"Duplicate metric names: {sorted(set(duplicates))}")
        return self
