"""Immutable form state and the reducer that drives every transition."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Union

from diabetes_risk import constants
from diabetes_risk.config import Settings
from diabetes_risk.scoring import HealthProfile, Prediction, RiskAssessment
from diabetes_risk.validation import IncompleteProfileError, InvalidMeasurementError, parse_profile


class NoticeKind(str, Enum):
    """Enumeration of transient notices shown to the user."""

    INCOMPLETE = "incomplete"
    INVALID = "invalid"
    COMPLETE = "complete"


@dataclass(frozen=True)
class Notice:
    kind: NoticeKind
    title: str
    description: str


def _empty_inputs() -> Mapping[str, str]:
    return MappingProxyType({key: "" for key in constants.FIELD_KEYS})


@dataclass(frozen=True)
class FormState:
    """Everything the form shows, as one value.

    ``submission`` identifies the most recent accepted submission. A pending
    assessment whose id no longer matches has been superseded or cancelled.
    """

    inputs: Mapping[str, str] = field(default_factory=_empty_inputs)
    profile: HealthProfile | None = None
    assessment: RiskAssessment | None = None
    is_loading: bool = False
    notice: Notice | None = None
    submission: int = 0

    @property
    def prediction(self) -> Prediction | None:
        return self.assessment.prediction if self.assessment else None


@dataclass(frozen=True)
class FieldEdited:
    field: str
    value: str


@dataclass(frozen=True)
class SubmitRequested:
    pass


@dataclass(frozen=True)
class AssessmentCompleted:
    submission: int
    assessment: RiskAssessment


@dataclass(frozen=True)
class FormReset:
    pass


Action = Union[FieldEdited, SubmitRequested, AssessmentCompleted, FormReset]


def _edit(state: FormState, action: FieldEdited) -> FormState:
    if action.field not in state.inputs:
        raise KeyError(f"Unknown field '{action.field}'")
    inputs = dict(state.inputs)
    inputs[action.field] = action.value
    return replace(
        state,
        inputs=MappingProxyType(inputs),
        profile=None,
        assessment=None,
        notice=None,
        is_loading=False,
        # Any pending assessment belongs to the old inputs.
        submission=state.submission + 1 if state.is_loading else state.submission,
    )


def _submit(state: FormState, settings: Settings) -> FormState:
    if state.is_loading:
        return state
    try:
        profile = parse_profile(state.inputs, settings.range_policy)
    except IncompleteProfileError:
        notice = Notice(NoticeKind.INCOMPLETE, constants.INCOMPLETE_TITLE, constants.INCOMPLETE_DESCRIPTION)
        return replace(state, profile=None, assessment=None, notice=notice)
    except InvalidMeasurementError as exc:
        description = "; ".join(
            f"{constants.FIELDS_BY_KEY[key].label}: {message}" for key, message in exc.errors.items()
        )
        notice = Notice(NoticeKind.INVALID, constants.INVALID_TITLE, description)
        return replace(state, profile=None, assessment=None, notice=notice)
    return replace(
        state,
        profile=profile,
        assessment=None,
        notice=None,
        is_loading=True,
        submission=state.submission + 1,
    )


def _complete(state: FormState, action: AssessmentCompleted) -> FormState:
    if not state.is_loading or action.submission != state.submission:
        return state
    risk = "High diabetes risk" if action.assessment.is_diabetic else "Low diabetes risk"
    notice = Notice(NoticeKind.COMPLETE, constants.COMPLETE_TITLE, f"Analysis shows: {risk}")
    return replace(state, assessment=action.assessment, is_loading=False, notice=notice)


def reduce(state: FormState, action: Action, settings: Settings | None = None) -> FormState:
    """Return the state that follows ``action``.

    Args:
        state: Current form state.
        action: The transition to apply.
        settings: Supplies the range policy for submissions.

    Returns:
        The next form state. ``state`` itself is never modified.
    """
    if isinstance(action, FieldEdited):
        return _edit(state, action)
    if isinstance(action, SubmitRequested):
        return _submit(state, settings or Settings())
    if isinstance(action, AssessmentCompleted):
        return _complete(state, action)
    if isinstance(action, FormReset):
        return FormState(submission=state.submission + 1)
    raise TypeError(f"Unsupported action: {action!r}")
