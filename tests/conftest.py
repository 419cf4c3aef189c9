import sys

import pytest
from loguru import logger

from diabetes_risk.config import Settings

# Pima-style example from the original form: scores 9.
SAMPLE_INPUTS = {
    "pregnancies": "6",
    "glucose": "148",
    "blood_pressure": "72",
    "skin_thickness": "35",
    "insulin": "0",
    "bmi": "33.6",
    "diabetes_pedigree": "0.627",
    "age": "50",
}

LOW_RISK_INPUTS = {
    "pregnancies": "1",
    "glucose": "85",
    "blood_pressure": "66",
    "skin_thickness": "29",
    "insulin": "0",
    "bmi": "22.6",
    "diabetes_pedigree": "0.151",
    "age": "31",
}


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    for variable in ("RISK_THRESHOLD", "RANGE_POLICY", "PROCESSING_DELAY_SECONDS", "LOG_LEVEL"):
        monkeypatch.delenv(f"DIABETES_RISK_{variable}", raising=False)
    # Keep a developer's .env out of the tests.
    monkeypatch.chdir(tmp_path)
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture()
def sample_inputs():
    return dict(SAMPLE_INPUTS)


@pytest.fixture()
def low_risk_inputs():
    return dict(LOW_RISK_INPUTS)


@pytest.fixture()
def settings():
    return Settings(processing_delay_seconds=0)
