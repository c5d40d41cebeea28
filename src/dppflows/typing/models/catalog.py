"""Form template and certificate rule models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from dppflows.typing.enums import FormFieldType
from dppflows.typing.models.common import FlowModel


class FormTemplateInput(FlowModel):
    """Industry and category a passport form is generated for."""

    industry_name: str = Field(description="The name of the industry, e.g. 'Battery'.")
    category_name: str = Field(description="The name of the product category, e.g. 'EV Battery'.")


class FormTemplateField(BaseModel):
    """One field of a generated passport form."""

    model_config = ConfigDict(extra="forbid")

    field_id: str = Field(
        pattern=r"^[a-z][a-z0-9_]*$",
        description="A unique snake_case ID, e.g. 'product_weight_kg'.",
    )
    label: str = Field(description="A human-readable label, e.g. 'Product Weight (kg)'.")
    type: FormFieldType = Field(description="The data type of the field.")
    required: bool = Field(description="Whether the field is mandatory.")
    placeholder: str | None = Field(default=None, description="Example text shown in the input.")
    options: list[str] | None = Field(default=None, description="Options, only for 'select' fields.")


class FormTemplateOutput(BaseModel):
    """Generated passport form schema."""

    model_config = ConfigDict(extra="forbid")

    fields_schema: list[FormTemplateField] = Field(description="An exhaustive list of passport form fields.")

    def to_json_dict(self) -> dict[str, object]:
        """Return the JSON-shaped payload.

        Returns:
            dict[str, object]: Serialized model.
        """
        return self.model_dump(mode="json", exclude_none=True)


class CertificateSuggestionInput(FlowModel):
    """Product and market a certificate list is suggested for."""

    product_description: str = Field(
        description="The product type, materials used (e.g. cobalt, plastic) and intended use.",
    )
    target_region: str = Field(description="The target market or region, e.g. 'EU', 'USA'.")


class CertificateSuggestion(FlowModel):
    """Recommended certificate requirement."""

    certificate_name: str = Field(description="The certificate name, e.g. 'UN 38.3' or 'REACH Declaration'.")
    description: str = Field(description="What this certificate is for.")
    regulation: str = Field(description="The primary regulation, e.g. 'EU Battery Regulation 2023/1542'.")


class CertificateSuggestionOutput(FlowModel):
    """Suggested certificate requirements."""

    suggestions: list[CertificateSuggestion] = Field(description="Suggested certificate requirements.")
