from __future__ import annotations

import asyncio

import streamlit as st

from diabetes_risk import constants
from diabetes_risk.config import Settings
from diabetes_risk.constants import MeasurementField
from diabetes_risk.scoring import RiskAssessment
from diabetes_risk.session import AssessmentSession
from diabetes_risk.state import FieldEdited, FormState, NoticeKind, reduce

STATE_KEY = "form_state"

BASE_CSS = """
@import url('https://fonts.googleapis.com/css2?family=Space+Grotesk:wght@400;600;700&display=swap');
@import url('https://fonts.googleapis.com/css2?family=Source+Serif+4:wght@400;600&display=swap');

:root {
  --bg-1: #f4f1e8;
  --bg-2: #e7f2ef;
  --text: #1f2937;
  --muted: #475569;
  --accent: #1f7a6b;
  --danger: #b42318;
  --success: #027a48;
  --card: rgba(255, 255, 255, 0.78);
  --border: rgba(15, 23, 42, 0.12);
}

html, body, [class*="css"] {
  font-family: "Source Serif 4", serif;
}

.stApp {
  background: linear-gradient(125deg, var(--bg-1), var(--bg-2));
  color: var(--text);
}

h1, h2, h3, h4, h5 {
  font-family: "Space Grotesk", sans-serif;
  letter-spacing: -0.02em;
}

#MainMenu, footer {
  visibility: hidden;
}

.hero {
  text-align: center;
  border: 1px solid var(--border);
  border-radius: 22px;
  padding: 1.75rem 2rem;
  margin-bottom: 1.5rem;
  background: linear-gradient(135deg, rgba(31, 122, 107, 0.12), rgba(37, 99, 235, 0.10));
  animation: rise 0.8s ease-out both;
}

.hero-title {
  font-size: 2.2rem;
  margin: 0.3rem 0 0.6rem;
}

.hero-sub {
  color: var(--muted);
}

button[kind="primary"] {
  background: var(--accent);
  border-radius: 14px;
  padding: 0.65rem 1.8rem;
  font-weight: 600;
}

.result-card {
  text-align: center;
  border-radius: 22px;
  border: 2px solid var(--border);
  padding: 1.8rem;
  background: rgba(255, 255, 255, 0.85);
  animation: fade-in 0.7s ease-out both;
}

.result-card.diabetic {
  border-color: var(--danger);
  color: var(--danger);
}

.result-card.not-diabetic {
  border-color: var(--success);
  color: var(--success);
}

.result-icon {
  font-size: 3.5rem;
}

.result-title {
  font-size: 1.6rem;
  font-weight: 600;
  margin-bottom: 0.4rem;
}

.result-sub {
  color: var(--muted);
}

.disclaimer {
  margin-top: 1rem;
  padding: 1rem;
  border-radius: 12px;
  background: rgba(15, 23, 42, 0.05);
  color: var(--muted);
  font-size: 0.9rem;
}

@keyframes rise {
  from {
    opacity: 0;
    transform: translateY(14px);
  }
  to {
    opacity: 1;
    transform: translateY(0);
  }
}

@keyframes fade-in {
  from {
    opacity: 0;
    transform: translateY(10px);
  }
  to {
    opacity: 1;
    transform: translateY(0);
  }
}
"""


def apply_base_styles() -> None:
    """Inject the base theme styling."""
    st.markdown(f"<style>{BASE_CSS}</style>", unsafe_allow_html=True)


def input_key(field: MeasurementField) -> str:
    """Return the Streamlit widget key of a measurement field."""
    return f"{field.key}_input"


def field_label(field: MeasurementField) -> str:
    return field.label if not field.unit else f"{field.label} ({field.unit})"


def field_help(field: MeasurementField) -> str:
    """Describe the declared range of a field for its tooltip."""
    return f"Expected range {field.min_value:g} to {field.max_value:g} (step {field.step:g})."


def get_form_state() -> FormState:
    if STATE_KEY not in st.session_state:
        st.session_state[STATE_KEY] = FormState()
    return st.session_state[STATE_KEY]


def on_field_change(field_key: str, widget_key: str) -> None:
    """Record an edit; any shown or pending result is cleared.

    Args:
        field_key: Measurement field that changed.
        widget_key: Streamlit key holding the new text.
    """
    state = get_form_state()
    st.session_state[STATE_KEY] = reduce(state, FieldEdited(field_key, st.session_state[widget_key]))


async def run_submission(state: FormState, settings: Settings) -> FormState:
    """Validate, wait out the processing delay and score the inputs.

    Args:
        state: Form state holding the submitted inputs.
        settings: Delay, threshold and range policy.

    Returns:
        The state after the submission, carrying a notice or a result.
    """
    session = AssessmentSession(settings, state)
    try:
        session.submit()
        return await session.wait()
    finally:
        await session.aclose()


def render_field(field: MeasurementField, disabled: bool) -> None:
    st.text_input(
        field_label(field),
        key=input_key(field),
        placeholder=field.placeholder,
        help=field_help(field),
        on_change=on_field_change,
        args=(field.key, input_key(field)),
        disabled=disabled,
    )


def render_result(assessment: RiskAssessment, threshold: int) -> None:
    """Render the prediction result panel.

    Args:
        assessment: Scored profile.
        threshold: Score at which a profile is classified as diabetic.
    """
    if assessment.is_diabetic:
        css_class, icon, title = "diabetic", "⚠️", "High Risk Detected"
    else:
        css_class, icon, title = "not-diabetic", "✅", "Low Risk Assessment"

    card = f"""
    <div class="result-card {css_class}">
      <div class="result-icon">{icon}</div>
      <div class="result-title">{title}</div>
      <div class="result-sub">
        Based on the provided health parameters, you are classified as
        <strong>{assessment.prediction.value}</strong>.
      </div>
      <div class="disclaimer"><strong>Disclaimer:</strong> {constants.DISCLAIMER}</div>
    </div>
    """
    st.markdown(card, unsafe_allow_html=True)

    with st.expander(f"Risk score: {assessment.score} (classified as diabetic from {threshold})"):
        st.table(
            [
                {
                    "Factor": constants.FIELDS_BY_KEY[factor.factor].label,
                    "Value": f"{factor.value:g}",
                    "Band": factor.band or "-",
                    "Points": factor.points,
                }
                for factor in assessment.factors
            ]
        )


def show_notice(state: FormState) -> None:
    """Show the notice of a submission as a transient toast."""
    notice = state.notice
    if notice is None:
        return
    if notice.kind is NoticeKind.COMPLETE:
        icon = "⚠️" if state.assessment is not None and state.assessment.is_diabetic else "✅"
    else:
        icon = "🚫"
    st.toast(f"**{notice.title}**: {notice.description}", icon=icon)


def main() -> None:
    """Run the Streamlit frontend."""
    st.set_page_config(page_title="Diabetes Risk Assessment", layout="centered")
    apply_base_styles()
    settings = Settings()

    st.markdown(
        """
        <div class="hero">
          <div class="hero-title">Diabetes Risk Assessment</div>
          <div class="hero-sub">
            Enter your health parameters to assess your diabetes risk using medical threshold guidelines
          </div>
        </div>
        """,
        unsafe_allow_html=True,
    )

    state = get_form_state()

    st.subheader("Health Parameters")
    st.caption("Please enter your current health measurements in the input fields below")
    col_a, col_b = st.columns(2)
    for index, field in enumerate(constants.FIELDS):
        with col_a if index % 2 == 0 else col_b:
            render_field(field, disabled=state.is_loading)

    submitted = st.button(
        "Predict Diabetes Risk",
        key="assess",
        type="primary",
        disabled=state.is_loading,
    )

    if submitted:
        with st.spinner("Analyzing..."):
            state = asyncio.run(run_submission(state, settings))
        st.session_state[STATE_KEY] = state
        show_notice(state)

    if state.assessment is not None:
        render_result(state.assessment, settings.risk_threshold)


if __name__ == "__main__":
    main()
