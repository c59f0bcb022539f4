from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Tuple
import time


QUESTION_TYPES = ("text", "combo", "check", "goals", "checkval", "assets_liabilities")


def now_ms() -> int:
    return int(time.time() * 1000)


def today_iso() -> str:
    return date.today().isoformat()


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Question:
    id: str
    text: str
    type: str = "text"
    options: Tuple[str, ...] = ()
    none_options: Tuple[str, ...] = ()
    follow_up: Optional[str] = None
    follow_up_check: Tuple[str, ...] = ()

    def is_none_option(self, option: str) -> bool:
        return option in self.none_options

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"id": self.id, "text": self.text, "type": self.type}
        if self.options:
            d["options"] = list(self.options)
        if self.none_options:
            d["noneOptions"] = list(self.none_options)
        if self.follow_up:
            d["followUp"] = self.follow_up
        if self.follow_up_check:
            d["followUpCheck"] = list(self.follow_up_check)
        return d


@dataclass(frozen=True)
class Subsection:
    label: Optional[str]
    questions: Tuple[Question, ...] = ()


@dataclass(frozen=True)
class Section:
    num: int
    title: str
    subtitle: str = ""
    instruction: Optional[str] = None
    subsections: Tuple[Subsection, ...] = ()

    def questions(self) -> List[Question]:
        return [q for sub in self.subsections for q in sub.questions]


@dataclass(frozen=True)
class Schema:
    """Ordered, immutable questionnaire definition.

    Everything derived from the section list (ids, numbering, section start
    ordinals) is computed from it on demand, so two schemas never share state.
    """

    key: str
    title: str
    sections: Tuple[Section, ...] = ()

    def questions(self) -> List[Question]:
        return [q for s in self.sections for q in s.questions()]

    def all_question_ids(self) -> List[str]:
        return [q.id for q in self.questions()]

    def question_count(self) -> int:
        return sum(len(sub.questions) for s in self.sections for sub in s.subsections)

    def section_starts(self) -> Dict[int, int]:
        starts = {}
        seen = 0
        for s in self.sections:
            starts[s.num] = seen + 1
            seen += len(s.questions())
        return starts

    def question_number(self, question_id: str) -> Optional[int]:
        for n, q in enumerate(self.questions(), start=1):
            if q.id == question_id:
                return n
        return None

    def find_question(self, question_id: str) -> Optional[Question]:
        for q in self.questions():
            if q.id == question_id:
                return q
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "title": self.title,
            "sections": [
                {
                    "num": s.num,
                    "title": s.title,
                    "subtitle": s.subtitle,
                    "instruction": s.instruction,
                    "startNumber": self.section_starts()[s.num],
                    "subsections": [
                        {"label": sub.label, "questions": [q.to_dict() for q in sub.questions]}
                        for sub in s.subsections
                    ],
                }
                for s in self.sections
            ],
        }


def build_schema(key: str, title: str, sections: List[Dict[str, Any]]) -> Schema:
    """Build a frozen Schema from the nested dict definitions in questionnaire/."""
    built = []
    for s in sections:
        subsections = []
        for sub in s.get("subsections", []):
            questions = []
            for q in sub.get("questions", []):
                qtype = q.get("type", "text")
                if qtype not in QUESTION_TYPES:
                    raise ValueError(f"unknown question type {qtype!r} for {q.get('id')}")
                questions.append(Question(
                    id=q["id"],
                    text=q["text"],
                    type=qtype,
                    options=tuple(q.get("options", ())),
                    none_options=tuple(q.get("noneOptions", ())),
                    follow_up=q.get("followUp"),
                    follow_up_check=tuple(q.get("followUpCheck", ())),
                ))
            subsections.append(Subsection(label=sub.get("label"), questions=tuple(questions)))
        built.append(Section(
            num=s["num"],
            title=s["title"],
            subtitle=s.get("subtitle", ""),
            instruction=s.get("instruction"),
            subsections=tuple(subsections),
        ))
    schema = Schema(key=key, title=title, sections=tuple(built))
    ids = schema.all_question_ids()
    if len(ids) != len(set(ids)):
        raise ValueError(f"duplicate question ids in {key} schema")
    return schema


# ---------------------------------------------------------------------------
# Answers and clients
# ---------------------------------------------------------------------------

def _str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _str_list(value: Any) -> List[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [v for v in value if isinstance(v, str)]


def _ms(value: Any) -> int:
    """Epoch milliseconds from stored JSON; anything non-numeric reads as 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    try:
        return int(value)
    except (OverflowError, ValueError):
        return 0


def empty_goal() -> Dict[str, str]:
    return {"goal": "", "amount": "", "timeline": ""}


@dataclass
class Answer:
    selections: List[str] = field(default_factory=list)
    value: str = ""
    follow_up_checks: List[str] = field(default_factory=list)
    goals: List[Dict[str, str]] = field(default_factory=list)
    account_values: Dict[str, str] = field(default_factory=dict)
    assets: str = ""
    liabilities: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "Answer":
        """Read a stored answer, treating anything malformed as empty."""
        if isinstance(data, Answer):
            return data
        if not isinstance(data, dict):
            return cls()
        goals = []
        raw_goals = data.get("goals")
        if isinstance(raw_goals, (list, tuple)):
            for g in raw_goals:
                if isinstance(g, dict):
                    goals.append({k: _str(g.get(k)) for k in ("goal", "amount", "timeline")})
        account_values = {}
        raw_values = data.get("accountValues")
        if isinstance(raw_values, dict):
            account_values = {str(k): str(v) if isinstance(v, (int, float)) else _str(v)
                              for k, v in raw_values.items()}
        return cls(
            selections=_str_list(data.get("selections")),
            value=_str(data.get("value")),
            follow_up_checks=_str_list(data.get("followUpChecks")),
            goals=goals,
            account_values=account_values,
            assets=_str(data.get("assets")),
            liabilities=_str(data.get("liabilities")),
        )

    def filled_goals(self) -> List[Dict[str, str]]:
        return [g for g in self.goals if g.get("goal") or g.get("amount") or g.get("timeline")]

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {}
        if self.selections:
            d["selections"] = list(self.selections)
        if self.value:
            d["value"] = self.value
        if self.follow_up_checks:
            d["followUpChecks"] = list(self.follow_up_checks)
        if self.goals:
            d["goals"] = [dict(g) for g in self.goals]
        if self.account_values:
            d["accountValues"] = dict(self.account_values)
        if self.assets:
            d["assets"] = self.assets
        if self.liabilities:
            d["liabilities"] = self.liabilities
        return d


@dataclass
class IndexEntry:
    id: str
    name: str
    created_at: int
    updated_at: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "IndexEntry":
        return cls(
            id=str(data.get("id", "")),
            name=_str(data.get("name")),
            created_at=_ms(data.get("createdAt")),
            updated_at=_ms(data.get("updatedAt")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "createdAt": self.created_at, "updatedAt": self.updated_at}


@dataclass
class ClientRecord:
    id: str = ""
    client_name: str = ""
    date: str = field(default_factory=today_iso)
    advisor: str = ""
    answers: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    created_at: int = field(default_factory=now_ms)
    updated_at: int = 0

    def __post_init__(self):
        if not self.updated_at:
            self.updated_at = self.created_at

    @classmethod
    def new(cls, client_id: str, name: str) -> "ClientRecord":
        now = now_ms()
        return cls(id=client_id, client_name=name.strip(), created_at=now, updated_at=now)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], client_id: Optional[str] = None) -> "ClientRecord":
        answers = data.get("answers")
        if not isinstance(answers, dict):
            answers = {}
        created = data.get("createdAt")
        updated = data.get("updatedAt")
        return cls(
            id=client_id or _str(data.get("id")),
            client_name=_str(data.get("clientName")),
            date=_str(data.get("date")),
            advisor=_str(data.get("advisor")),
            answers={str(k): v for k, v in answers.items() if isinstance(v, dict)},
            created_at=_ms(created),
            updated_at=_ms(updated),
        )

    def answer(self, question_id: str) -> Answer:
        return Answer.from_dict(self.answers.get(question_id))

    def index_entry(self) -> IndexEntry:
        return IndexEntry(id=self.id, name=self.client_name, created_at=self.created_at,
                          updated_at=self.updated_at)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "clientName": self.client_name,
            "date": self.date,
            "advisor": self.advisor,
            "answers": {k: dict(v) for k, v in self.answers.items()},
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
