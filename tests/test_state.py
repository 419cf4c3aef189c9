import pytest

from diabetes_risk.config import Settings
from diabetes_risk.scoring import Prediction, assess
from diabetes_risk.state import (
    AssessmentCompleted,
    FieldEdited,
    FormReset,
    FormState,
    NoticeKind,
    SubmitRequested,
    reduce,
)


def filled_state(inputs: dict[str, str]) -> FormState:
    state = FormState()
    for key, value in inputs.items():
        state = reduce(state, FieldEdited(key, value))
    return state


def completed_state(inputs: dict[str, str], settings: Settings) -> FormState:
    state = reduce(filled_state(inputs), SubmitRequested(), settings)
    return reduce(state, AssessmentCompleted(state.submission, assess(state.profile)))


def test_initial_state_is_empty():
    state = FormState()
    assert set(state.inputs.values()) == {""}
    assert state.prediction is None
    assert not state.is_loading
    assert state.notice is None


def test_submit_with_empty_field_reports_incomplete(sample_inputs, settings):
    sample_inputs["insulin"] = ""
    state = reduce(filled_state(sample_inputs), SubmitRequested(), settings)
    assert state.notice is not None
    assert state.notice.kind is NoticeKind.INCOMPLETE
    assert state.notice.title == "Incomplete Information"
    assert state.prediction is None
    assert not state.is_loading


def test_submit_with_invalid_field_reports_invalid(sample_inputs, settings):
    sample_inputs["bmi"] = "heavy"
    state = reduce(filled_state(sample_inputs), SubmitRequested(), settings)
    assert state.notice.kind is NoticeKind.INVALID
    assert "BMI" in state.notice.description
    assert state.prediction is None


def test_submit_starts_loading_without_prediction(sample_inputs, settings):
    before = filled_state(sample_inputs)
    state = reduce(before, SubmitRequested(), settings)
    assert state.is_loading
    assert state.prediction is None
    assert state.profile is not None
    assert state.submission == before.submission + 1


def test_completion_sets_prediction(sample_inputs, settings):
    state = completed_state(sample_inputs, settings)
    assert state.prediction is Prediction.DIABETIC
    assert not state.is_loading
    assert state.notice.kind is NoticeKind.COMPLETE
    assert state.notice.description == "Analysis shows: High diabetes risk"


def test_low_risk_completion_notice(low_risk_inputs, settings):
    state = completed_state(low_risk_inputs, settings)
    assert state.prediction is Prediction.NOT_DIABETIC
    assert state.notice.description == "Analysis shows: Low diabetes risk"


@pytest.mark.parametrize("field", ["glucose", "skin_thickness", "age"])
def test_edit_clears_prediction(sample_inputs, settings, field):
    state = completed_state(sample_inputs, settings)
    assert state.prediction is not None
    state = reduce(state, FieldEdited(field, "1"))
    assert state.prediction is None
    assert state.assessment is None
    assert state.inputs[field] == "1"


def test_edit_while_loading_drops_the_pending_result(sample_inputs, settings):
    loading = reduce(filled_state(sample_inputs), SubmitRequested(), settings)
    edited = reduce(loading, FieldEdited("glucose", "90"))
    assert not edited.is_loading
    late = reduce(edited, AssessmentCompleted(loading.submission, assess(loading.profile)))
    assert late.prediction is None


def test_submit_while_loading_is_ignored(sample_inputs, settings):
    loading = reduce(filled_state(sample_inputs), SubmitRequested(), settings)
    assert reduce(loading, SubmitRequested(), settings) is loading


def test_stale_completion_is_ignored(sample_inputs, settings):
    state = reduce(filled_state(sample_inputs), SubmitRequested(), settings)
    stale = AssessmentCompleted(state.submission - 1, assess(state.profile))
    assert reduce(state, stale) is state


def test_reduce_never_mutates_state(sample_inputs, settings):
    before = filled_state(sample_inputs)
    reduce(before, FieldEdited("glucose", "90"))
    reduce(before, SubmitRequested(), settings)
    assert before.inputs["glucose"] == "148"
    assert not before.is_loading
    with pytest.raises(TypeError):
        before.inputs["glucose"] = "90"


def test_reset_clears_everything(sample_inputs, settings):
    state = reduce(completed_state(sample_inputs, settings), FormReset())
    assert set(state.inputs.values()) == {""}
    assert state.prediction is None


def test_unknown_field_is_rejected():
    with pytest.raises(KeyError):
        reduce(FormState(), FieldEdited("cholesterol", "200"))


def test_range_policy_comes_from_settings(sample_inputs):
    sample_inputs["glucose"] = "400"
    state = filled_state(sample_inputs)
    rejected = reduce(state, SubmitRequested(), Settings(range_policy="reject"))
    clamped = reduce(state, SubmitRequested(), Settings(range_policy="clamp"))
    assert rejected.notice.kind is NoticeKind.INVALID
    assert clamped.profile.glucose == 300
