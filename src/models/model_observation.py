"""Observation models flowing through the ingestion pipeline."""

from datetime import UTC, date, datetime
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StrictStr, field_validator
from pydantic.alias_generators import to_camel


class ModelMeta(BaseModel):
    """Partial model metadata reported alongside an observation.

    Every field is optional. ``None`` means the source did not report the
    field, so it must never overwrite a stored value.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    vendor: str | None = Field(default=None, description="Publisher of the model")
    release_date: date | None = Field(default=None, description="Public release date")
    param_size: str | None = Field(default=None, description="Parameter count, e.g. '70B'")
    open_source: bool | None = Field(default=None, description="Whether weights are public")
    description: str | None = Field(default=None, description="Short description")
    access_url: str | None = Field(default=None, description="Where the model can be used")

    def present_fields(self) -> dict[str, Any]:
        """Return only the fields the source actually reported."""
        return self.model_dump(exclude_none=True)


class RawObservation(BaseModel):
    """One scraped data point, exactly as a scraper emitted it."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    source: str = Field(description="Human-readable data source")
    model_name: str = Field(description="Model name as reported by the source")
    dimension_name: str = Field(description="Evaluation dimension as reported by the source")
    score: float = Field(description="Reported score")
    scraped_at: datetime = Field(description="When the observation was collected")
    raw_payload: str = Field(default="", description="Source payload for auditing")
    model_meta: ModelMeta | None = Field(default=None, description="Optional model metadata")


class ValidatedObservation(RawObservation):
    """Observation that passed validation, with normalized identifiers."""

    normalized_model_name: str = Field(description="Trimmed, lower-cased model name")
    normalized_dimension_name: str = Field(description="Trimmed, lower-cased dimension name")

    @property
    def dedup_key(self) -> tuple[str, str, str]:
        """Key under which repeated observations collapse."""
        return (self.normalized_model_name, self.normalized_dimension_name, self.source)


def _require_non_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


NonBlankStr = Annotated[StrictStr, AfterValidator(_require_non_blank)]


class ObservationInput(BaseModel):
    """Strict shape a scraped record must have to enter the pipeline.

    Accepts snake_case or camelCase keys. Scores must be real, finite numbers
    and timestamps must be datetimes or ISO-8601 strings.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        allow_inf_nan=False,
        protected_namespaces=(),
    )

    source: NonBlankStr
    model_name: NonBlankStr
    dimension_name: NonBlankStr
    score: float
    scraped_at: datetime
    raw_payload: StrictStr
    model_meta: ModelMeta | None = None

    @field_validator("score", mode="before")
    @classmethod
    def _real_number(cls, value: Any) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError("score must be a number")
        try:
            return float(value)
        except OverflowError as e:
            raise ValueError("score out of range") from e

    @field_validator("scraped_at", mode="before")
    @classmethod
    def _instant_like(cls, value: Any) -> Any:
        if not isinstance(value, (str, datetime)):
            raise ValueError("scraped_at must be a datetime or ISO-8601 string")
        return value

    @field_validator("scraped_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # naive timestamps are taken to be UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value
