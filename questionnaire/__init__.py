from storage.errors import ValidationError

from .ips import IPS_SCHEMA
from .cps import CPS_SCHEMA

SCHEMAS = {
    IPS_SCHEMA.key: IPS_SCHEMA,
    CPS_SCHEMA.key: CPS_SCHEMA,
}


def get_schema(kind):
    schema = SCHEMAS.get((kind or "").lower())
    if schema is None:
        raise ValidationError(f"Unknown questionnaire: {kind}")
    return schema


def find_question(question_id):
    """Locate a question in either questionnaire (their id namespaces are disjoint)."""
    for schema in SCHEMAS.values():
        q = schema.find_question(question_id)
        if q is not None:
            return schema, q
    return None, None


__all__ = ["IPS_SCHEMA", "CPS_SCHEMA", "SCHEMAS", "get_schema", "find_question"]
