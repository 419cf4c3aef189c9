from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MeasurementField:
    """Configuration for one health measurement input.

    ``min_value``/``max_value``/``step`` are the declared input hints. Whether
    they are enforced is decided by the range policy in ``validation``.
    """

    key: str
    alias: str
    label: str
    unit: str
    min_value: float
    max_value: float
    step: float
    is_integer: bool
    placeholder: str


FIELDS: tuple[MeasurementField, ...] = (
    MeasurementField(
        "pregnancies", "pregnancies", "Pregnancies", "", 0, 17, 1, True,
        "Enter number of pregnancies (0-17)",
    ),
    MeasurementField(
        "glucose", "glucose", "Glucose Level", "mg/dL", 0, 300, 1, True,
        "Enter glucose level (mg/dL)",
    ),
    MeasurementField(
        "blood_pressure", "bloodPressure", "Blood Pressure", "mmHg", 0, 200, 1, True,
        "Enter blood pressure (mmHg)",
    ),
    MeasurementField(
        "skin_thickness", "skinThickness", "Skin Thickness", "mm", 0, 100, 1, True,
        "Enter skin thickness (mm)",
    ),
    MeasurementField(
        "insulin", "insulin", "Insulin Level", "μU/mL", 0, 900, 1, True,
        "Enter insulin level (μU/mL)",
    ),
    MeasurementField("bmi", "bmi", "BMI", "kg/m2", 10, 70, 0.1, False, "Enter BMI"),
    MeasurementField(
        "diabetes_pedigree", "diabetesPedigree", "Diabetes Pedigree Function", "", 0, 2.5, 0.001, False,
        "Enter diabetes pedigree function",
    ),
    MeasurementField("age", "age", "Age", "years", 1, 120, 1, True, "Enter age in years"),
)

FIELDS_BY_KEY = {field.key: field for field in FIELDS}
FIELD_KEYS = [field.key for field in FIELDS]

DEFAULT_RISK_THRESHOLD = 4
DEFAULT_PROCESSING_DELAY_SECONDS = 1.5

DISCLAIMER = (
    "This is an educational tool and should not replace professional medical advice. "
    "Please consult with a healthcare provider for proper diagnosis and treatment."
)

INCOMPLETE_TITLE = "Incomplete Information"
INCOMPLETE_DESCRIPTION = "Please fill in all fields to get a prediction."
INVALID_TITLE = "Invalid Input"
COMPLETE_TITLE = "Prediction Complete"
