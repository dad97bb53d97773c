"""Event preconditions for Delve.

A precondition is a pure boolean gate over GameState. Each kind is a frozen
Pydantic model with a type discriminator; evaluation dispatches on the kind.
Absent or wrongly typed variables evaluate False and never raise.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator, TypeAdapter, ValidationError

from .errors import DataIntegrityError
from .state import GameState, GlobalValue


class GlobalVariableIs(BaseModel):
    """Variable holds exactly the expected value."""

    model_config = ConfigDict(frozen=True)
    type: Literal["global_variable_is"] = "global_variable_is"

    variable_name: str
    expected_value: GlobalValue


class GlobalVariableIsGreaterThan(BaseModel):
    """Numeric variable is strictly above a threshold."""

    model_config = ConfigDict(frozen=True)
    type: Literal["global_variable_is_greater_than"] = "global_variable_is_greater_than"

    variable_name: str
    threshold: float


class GlobalVariableIsLessThan(BaseModel):
    """Numeric variable is strictly below a threshold."""

    model_config = ConfigDict(frozen=True)
    type: Literal["global_variable_is_less_than"] = "global_variable_is_less_than"

    variable_name: str
    threshold: float


Precondition = Annotated[
    Union[
        GlobalVariableIs,
        GlobalVariableIsGreaterThan,
        GlobalVariableIsLessThan,
    ],
    Discriminator("type"),
]

_PreconditionAdapter: TypeAdapter[Precondition] = TypeAdapter(Precondition)


def _is_number(value: object) -> bool:
    # bool is an int subclass but never counts as a number here
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _values_match(actual: GlobalValue, expected: GlobalValue) -> bool:
    if _is_number(actual) and _is_number(expected):
        return actual == expected
    return type(actual) is type(expected) and actual == expected


def evaluate_precondition(precondition: Precondition, state: GameState) -> bool:
    """Evaluate a single precondition against the state."""
    match precondition:
        case GlobalVariableIs():
            value = state.get_variable(precondition.variable_name)
            if value is None:
                return False
            return _values_match(value, precondition.expected_value)
        case GlobalVariableIsGreaterThan():
            value = state.get_variable(precondition.variable_name)
            return _is_number(value) and value > precondition.threshold
        case GlobalVariableIsLessThan():
            value = state.get_variable(precondition.variable_name)
            return _is_number(value) and value < precondition.threshold
        case _:
            return False


def evaluate_all(preconditions: tuple[Precondition, ...] | list[Precondition], state: GameState) -> bool:
    """AND of all preconditions. An empty list is always satisfied."""
    return all(evaluate_precondition(p, state) for p in preconditions)


def precondition_from_dict(data: dict[str, Any]) -> Precondition:
    """Build a precondition from its tagged form.

    Raises:
        DataIntegrityError: Unknown type tag or invalid fields
    """
    try:
        return _PreconditionAdapter.validate_python(data)
    except ValidationError as e:
        tag = data.get("type") if isinstance(data, dict) else None
        raise DataIntegrityError(
            f"Invalid precondition (type={tag!r})",
            errors=[str(err["msg"]) for err in e.errors()],
        ) from e


def precondition_to_dict(precondition: Precondition) -> dict[str, Any]:
    """Serialize a precondition to its tagged form."""
    return precondition.model_dump(mode="json")
