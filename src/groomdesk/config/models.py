"""Pydantic models for the YAML application configuration."""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_SERVICES = [
    "Banho",
    "Tosa",
    "Banho e Tosa",
    "Tosa Higiênica",
    "Corte de Unha",
]


class SchemaProbeConfig(BaseModel):
    """Column used to detect an outdated database schema."""

    model_config = ConfigDict(frozen=True)

    table: str = Field(default="clients", description="Table expected to exist")
    column: str = Field(default="pet_name", description="Most recently added column")


class AppConfig(BaseModel):
    """Root configuration for the grooming desk UI."""

    model_config = ConfigDict(frozen=True)

    services: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SERVICES),
        description="Service suggestions offered on the appointment form",
    )
    default_service: str = Field(default="Banho")
    currency_symbol: str = Field(default="R$")
    schema_probe: SchemaProbeConfig = Field(default_factory=SchemaProbeConfig)

    @field_validator("services")
    @classmethod
    def validate_services(cls, v: list[str]) -> list[str]:
        """Drop blank entries and require at least one service."""
        cleaned = [s.strip() for s in v if s and s.strip()]
        if not cleaned:
            raise ValueError("At least one service must be configured")
        return cleaned

    @model_validator(mode="after")
    def check_default_service(self) -> "AppConfig":
        if self.default_service not in self.services:
            raise ValueError(
                f"default_service '{self.default_service}' is not one of the configured services"
            )
        return self
