from __future__ import annotations

import pytest

from dppflows.exceptions import OutputValidationError
from dppflows.flows import generate_form_template, suggest_certificate_rules
from dppflows.typing.enums import FormFieldType

FORM_REQUEST = {"industryName": "Battery", "categoryName": "EV Battery"}


def test_generate_form_template_returns_snake_case_fields(make_backend) -> None:
    backend = make_backend(
        [
            {
                "fields_schema": [
                    {
                        "field_id": "battery_chemistry",
                        "label": "Battery Chemistry",
                        "type": "select",
                        "required": True,
                        "placeholder": None,
                        "options": ["NMC", "LFP"],
                    },
                    {
                        "field_id": "rated_capacity_kwh",
                        "label": "Rated Capacity (kWh)",
                        "type": "float",
                        "required": True,
                        "placeholder": "75.0",
                        "options": None,
                    },
                ],
            },
        ],
    )

    result = generate_form_template(FORM_REQUEST, backend=backend)

    assert [field.type for field in result.fields_schema] == [FormFieldType.SELECT, FormFieldType.FLOAT]
    assert result.to_json_dict()["fields_schema"][0] == {
        "field_id": "battery_chemistry",
        "label": "Battery Chemistry",
        "type": "select",
        "required": True,
        "options": ["NMC", "LFP"],
    }
    assert "Product Category: EV Battery" in backend.calls[0][0].text


def test_generate_form_template_rejects_duplicate_field_ids(make_backend) -> None:
    field = {"field_id": "weight_kg", "label": "Weight", "type": "float", "required": False}
    backend = make_backend([{"fields_schema": [field, field]}])

    with pytest.raises(OutputValidationError, match="Duplicate field id 'weight_kg'"):
        generate_form_template(FORM_REQUEST, backend=backend)


def test_generate_form_template_rejects_invalid_field_type(make_backend) -> None:
    backend = make_backend(
        [{"fields_schema": [{"field_id": "weight_kg", "label": "Weight", "type": "number", "required": False}]}],
    )

    with pytest.raises(OutputValidationError) as exc_info:
        generate_form_template(FORM_REQUEST, backend=backend)

    assert [violation.location for violation in exc_info.value.violations] == ["fields_schema.0.type"]


def test_suggest_certificate_rules(make_backend) -> None:
    backend = make_backend(
        [
            {
                "suggestions": [
                    {
                        "certificateName": "UN 38.3",
                        "description": "Transport safety testing for lithium batteries.",
                        "regulation": "UN Manual of Tests and Criteria",
                    },
                ],
            },
        ],
    )

    result = suggest_certificate_rules(
        {"productDescription": "Lithium-ion EV battery with cobalt cathode", "targetRegion": "EU"},
        backend=backend,
    )

    assert result.suggestions[0].certificate_name == "UN 38.3"
    assert backend.calls[0][1].name == "suggest_certificate_rules"
