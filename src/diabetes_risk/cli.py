from __future__ import annotations

import asyncio
from enum import Enum

import typer
from loguru import logger

from diabetes_risk import constants
from diabetes_risk.config import Settings, configure_logging
from diabetes_risk.session import AssessmentSession
from diabetes_risk.state import NoticeKind


class RangePolicyOption(str, Enum):
    """Enumeration of range policies accepted on the command line."""

    REJECT = "reject"
    CLAMP = "clamp"
    PASS = "pass"


app = typer.Typer(help="Diabetes risk assessment from eight health measurements.", no_args_is_help=True)


async def _run_assessment(inputs: dict[str, str], settings: Settings) -> AssessmentSession:
    session = AssessmentSession(settings)
    try:
        for key, value in inputs.items():
            session.edit(key, value)
        session.submit()
        await session.wait()
    finally:
        await session.aclose()
    return session


@app.command()
def assess(
    pregnancies: str = typer.Option("", help="Number of pregnancies (0-17)."),
    glucose: str = typer.Option("", help="Glucose level in mg/dL (0-300)."),
    blood_pressure: str = typer.Option("", "--blood-pressure", help="Blood pressure in mmHg (0-200)."),
    skin_thickness: str = typer.Option("", "--skin-thickness", help="Skin thickness in mm (0-100)."),
    insulin: str = typer.Option("", help="Insulin level in μU/mL (0-900)."),
    bmi: str = typer.Option("", help="Body mass index (10-70)."),
    diabetes_pedigree: str = typer.Option("", "--diabetes-pedigree", help="Diabetes pedigree function (0-2.5)."),
    age: str = typer.Option("", help="Age in years (1-120)."),
    range_policy: RangePolicyOption | None = typer.Option(
        None,
        "--range-policy",
        help="How to treat out-of-range values: reject, clamp or pass. Defaults to the configured policy.",
    ),
    delay: float | None = typer.Option(None, "--delay", min=0, help="Simulated processing delay in seconds."),
) -> None:
    """
    Classify diabetes risk for one set of measurements.

    Args:
    ----
        pregnancies: Number of pregnancies.
        glucose: Glucose level (mg/dL).
        blood_pressure: Blood pressure (mmHg).
        skin_thickness: Skin thickness (mm).
        insulin: Insulin level (μU/mL).
        bmi: Body mass index.
        diabetes_pedigree: Diabetes pedigree function.
        age: Age in years.
        range_policy: Override for the configured range policy.
        delay: Override for the configured processing delay.
    """
    settings = Settings()
    configure_logging(settings.log_level)
    overrides: dict[str, object] = {}
    if range_policy is not None:
        overrides["range_policy"] = range_policy.value
    if delay is not None:
        overrides["processing_delay_seconds"] = delay
    if overrides:
        settings = settings.model_copy(update=overrides)

    inputs = {
        "pregnancies": pregnancies,
        "glucose": glucose,
        "blood_pressure": blood_pressure,
        "skin_thickness": skin_thickness,
        "insulin": insulin,
        "bmi": bmi,
        "diabetes_pedigree": diabetes_pedigree,
        "age": age,
    }
    session = asyncio.run(_run_assessment(inputs, settings))
    state = session.state

    if state.notice is not None and state.notice.kind is not NoticeKind.COMPLETE:
        typer.echo(f"{state.notice.title}: {state.notice.description}", err=True)
        raise typer.Exit(code=1)
    if state.assessment is None:
        logger.error("Assessment finished without a result")
        raise typer.Exit(code=1)

    assessment = state.assessment
    headline = "High Risk Detected" if assessment.is_diabetic else "Low Risk Assessment"
    typer.echo(headline)
    typer.echo(f"Classification: {assessment.prediction.value}")
    typer.echo(f"Risk score: {assessment.score} (threshold {settings.risk_threshold})")
    for factor in assessment.factors:
        label = constants.FIELDS_BY_KEY[factor.factor].label
        band = f" ({factor.band})" if factor.band else ""
        typer.echo(f"  {label}: {factor.value:g} -> +{factor.points}{band}")
    typer.echo(f"Disclaimer: {constants.DISCLAIMER}")


@app.command()
def fields() -> None:
    """List the measurement fields and their declared ranges."""
    for field in constants.FIELDS:
        unit = f" ({field.unit})" if field.unit else ""
        typer.echo(f"{field.key}: {field.label}{unit} [{field.min_value:g}-{field.max_value:g}, step {field.step:g}]")


if __name__ == "__main__":
    app()
