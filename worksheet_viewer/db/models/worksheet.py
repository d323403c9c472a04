import uuid

from sqlalchemy import Column, JSON, String, Uuid, literal
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.functions import FunctionElement

from worksheet_viewer.core.config import settings
from worksheet_viewer.db.base import Base

# Имена полей документа в том виде, в котором их пишет процесс генерации
SUBJECT_FIELD = "chatInput"
CONTENT_FIELD = "text"
CREATED_AT_FIELD = "combined_at"

# json_type() в SQLite отдает 'text', json_typeof() в PostgreSQL - 'string'
JSON_STRING_TYPES = ("text", "string")


class json_field_type(FunctionElement):
    """Тип JSON-значения поля документа: json_field_type(document, key)"""

    type = String()
    name = "json_field_type"
    inherit_cache = True


@compiles(json_field_type)
def _compile_json_field_type(element, compiler, **kw):
    document, key = list(element.clauses)
    return "json_type(%s, '$.\"' || %s || '\"')" % (
        compiler.process(document, **kw),
        compiler.process(key, **kw),
    )


@compiles(json_field_type, "postgresql")
def _compile_json_field_type_pg(element, compiler, **kw):
    document, key = list(element.clauses)
    return "json_typeof(%s -> %s)" % (
        compiler.process(document, **kw),
        compiler.process(key, **kw),
    )


class Worksheet(Base):
    """Документ хранилища: первичный ключ + произвольный JSON без схемы"""

    __tablename__ = settings.collection_name

    uuid = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    document = Column(JSON, nullable=False, default=dict)

    @classmethod
    def field(cls, name: str):
        """Строковое значение поля документа как выражение SQL"""
        return cls.document[name].as_string()

    @classmethod
    def is_string(cls, name: str):
        """Условие: поле документа хранит строку, а не число или bool"""
        return json_field_type(cls.document, literal(name, String())).in_(JSON_STRING_TYPES)
