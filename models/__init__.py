from .models import (
	Question, Subsection, Section, Schema, build_schema,
	Answer, ClientRecord, IndexEntry, QUESTION_TYPES
)

__all__ = [
	'Question', 'Subsection', 'Section', 'Schema', 'build_schema',
	'Answer', 'ClientRecord', 'IndexEntry', 'QUESTION_TYPES'
]
