"""Completion evaluation, progress and the per-type answer mutation rules.

Every mutation takes the current Answer (or its stored dict) and returns a
new Answer; the input is never modified, so callers can keep the previous
state around until the new one is persisted.
"""

from dataclasses import replace
from typing import Any, Dict, List, Mapping, Optional

from models import Answer, Question, Schema
from models.models import empty_goal
from storage.errors import ValidationError


GOAL_FIELDS = ("goal", "amount", "timeline")


# ---------------------------------------------------------------------------
# Completion
# ---------------------------------------------------------------------------

def is_answered(answer: Any) -> bool:
    if answer is None:
        return False
    a = Answer.from_dict(answer)
    return bool(
        a.selections
        or a.value.strip()
        or a.follow_up_checks
        or a.filled_goals()
        or a.account_values
        or a.assets.strip()
        or a.liabilities.strip()
    )


def answered_count(schema: Schema, answers: Optional[Mapping[str, Any]]) -> int:
    answers = answers or {}
    return sum(1 for qid in schema.all_question_ids() if is_answered(answers.get(qid)))


def progress(schema: Schema, answers: Optional[Mapping[str, Any]]) -> float:
    total = schema.question_count()
    if total == 0:
        return 0.0
    return 100.0 * answered_count(schema, answers) / total


def first_unanswered(schema: Schema, answers: Optional[Mapping[str, Any]]) -> Optional[str]:
    answers = answers or {}
    for qid in schema.all_question_ids():
        if not is_answered(answers.get(qid)):
            return qid
    return None


def section_progress(schema: Schema, answers: Optional[Mapping[str, Any]]) -> List[Dict[str, int]]:
    answers = answers or {}
    out = []
    for s in schema.sections:
        questions = s.questions()
        out.append({
            "num": s.num,
            "answered": sum(1 for q in questions if is_answered(answers.get(q.id))),
            "total": len(questions),
        })
    return out


def progress_summary(schema: Schema, answers: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    return {
        "answered": answered_count(schema, answers),
        "total": schema.question_count(),
        "percent": progress(schema, answers),
        "firstUnanswered": first_unanswered(schema, answers),
        "sections": section_progress(schema, answers),
    }


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------

def set_value(answer, value: str) -> Answer:
    return replace(Answer.from_dict(answer), value=value or "")


def toggle_combo(question: Question, answer, option: str) -> Answer:
    a = Answer.from_dict(answer)
    if option in a.selections:
        return replace(a, selections=[])
    return replace(a, selections=[option])


def toggle_check(question: Question, answer, option: str) -> Answer:
    a = Answer.from_dict(answer)
    if option in a.selections:
        return replace(a, selections=[s for s in a.selections if s != option])
    if question.is_none_option(option):
        return replace(a, selections=[option])
    kept = [s for s in a.selections if not question.is_none_option(s)]
    return replace(a, selections=kept + [option])


def toggle_checkval(question: Question, answer, option: str) -> Answer:
    a = Answer.from_dict(answer)
    values = dict(a.account_values)
    if option in a.selections:
        values.pop(option, None)
        selections = [s for s in a.selections if s != option]
    elif question.is_none_option(option):
        selections = [option]
        values = {}
    else:
        selections = [s for s in a.selections if not question.is_none_option(s)] + [option]
    return replace(a, selections=selections, account_values=values)


def toggle_option(question: Question, answer, option: str) -> Answer:
    if option not in question.options:
        raise ValidationError(f"{option!r} is not an option of {question.id}")
    if question.type == "combo":
        return toggle_combo(question, answer, option)
    if question.type == "check":
        return toggle_check(question, answer, option)
    if question.type == "checkval":
        return toggle_checkval(question, answer, option)
    raise ValidationError(f"{question.id} ({question.type}) has no selectable options")


def toggle_follow_up_check(question: Question, answer, option: str) -> Answer:
    if option not in question.follow_up_check:
        raise ValidationError(f"{option!r} is not a follow-up choice of {question.id}")
    a = Answer.from_dict(answer)
    if option in a.follow_up_checks:
        return replace(a, follow_up_checks=[c for c in a.follow_up_checks if c != option])
    return replace(a, follow_up_checks=a.follow_up_checks + [option])


def set_account_value(question: Question, answer, option: str, value: str) -> Answer:
    a = Answer.from_dict(answer)
    # only selected, non-none options carry a balance
    if option not in a.selections or question.is_none_option(option):
        return a
    values = dict(a.account_values)
    values[option] = value or ""
    return replace(a, account_values=values)


def current_goals(answer) -> List[Dict[str, str]]:
    a = Answer.from_dict(answer)
    if not a.goals:
        return [empty_goal()]
    return [dict(g) for g in a.goals]


def set_goal_field(answer, index: int, field: str, value: str) -> Answer:
    if field not in GOAL_FIELDS:
        raise ValidationError(f"Unknown goal field: {field}")
    goals = current_goals(answer)
    if not 0 <= index < len(goals):
        raise ValidationError(f"No goal row {index}")
    goals[index][field] = value or ""
    return replace(Answer.from_dict(answer), goals=goals)


def add_goal(answer) -> Answer:
    return replace(Answer.from_dict(answer), goals=current_goals(answer) + [empty_goal()])


def remove_goal(answer, index: int) -> Answer:
    goals = [g for i, g in enumerate(current_goals(answer)) if i != index]
    return replace(Answer.from_dict(answer), goals=goals or [empty_goal()])


def set_assets(answer, value: str) -> Answer:
    return replace(Answer.from_dict(answer), assets=value or "")


def set_liabilities(answer, value: str) -> Answer:
    return replace(Answer.from_dict(answer), liabilities=value or "")


# action name -> question types it applies to
ACTION_TYPES = {
    "toggle_option": ("combo", "check", "checkval"),
    "toggle_follow_up_check": ("combo",),
    "set_value": ("text", "combo", "check"),
    "set_account_value": ("checkval",),
    "set_goal_field": ("goals",),
    "add_goal": ("goals",),
    "remove_goal": ("goals",),
    "set_assets": ("assets_liabilities",),
    "set_liabilities": ("assets_liabilities",),
}


def apply_action(question: Question, answer, action: str, params: Optional[Mapping[str, Any]] = None,
                 **kwargs) -> Answer:
    """Apply a named form interaction to a question's answer.

    Parameters come from `params` (e.g. a request body, whose keys may be
    anything) and/or keyword arguments.
    """
    params = dict(params or {}, **kwargs)
    allowed = ACTION_TYPES.get(action)
    if allowed is None:
        raise ValidationError(f"Unknown action: {action}")
    if question.type not in allowed:
        raise ValidationError(f"Action {action} does not apply to {question.type} question {question.id}")

    try:
        if action == "toggle_option":
            return toggle_option(question, answer, params["option"])
        if action == "toggle_follow_up_check":
            return toggle_follow_up_check(question, answer, params["option"])
        if action == "set_value":
            return set_value(answer, params["value"])
        if action == "set_account_value":
            return set_account_value(question, answer, params["option"], params["value"])
        if action == "set_goal_field":
            return set_goal_field(answer, int(params["index"]), params["field"], params["value"])
        if action == "add_goal":
            return add_goal(answer)
        if action == "remove_goal":
            return remove_goal(answer, int(params["index"]))
        if action == "set_assets":
            return set_assets(answer, params["value"])
        return set_liabilities(answer, params["value"])
    except KeyError as e:
        raise ValidationError(f"Missing parameter {e.args[0]!r} for {action}") from e
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid parameters for {action}: {e}") from e
