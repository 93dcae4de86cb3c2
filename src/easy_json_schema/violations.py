from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from jsonschema.exceptions import ValidationError


def _jp_escape(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def _pointer(parts: Iterable[Any]) -> str:
    return "".join(f"/{_jp_escape(str(p))}" for p in parts)


@dataclass(frozen=True)
class SchemaViolation:
    """One way an instance fails to satisfy a schema.

    ``path`` is a JSON pointer into the instance (``""`` for the root) and
    ``schema_path`` a JSON pointer into the schema that was selected.
    """

    message: str
    path: str
    schema_path: str
    keyword: str
    keyword_value: Any
    instance: Any
    schema_id: str

    @classmethod
    def from_error(cls, error: ValidationError, schema_id: str) -> "SchemaViolation":
        return cls(
            message=error.message,
            path=_pointer(error.absolute_path),
            schema_path=_pointer(error.absolute_schema_path),
            keyword=str(error.validator),
            keyword_value=error.validator_value,
            instance=error.instance,
            schema_id=schema_id,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_human(self) -> str:
        where = self.path or "<root>"
        return f" - at {where}: {self.message}"


def violations_from_errors(errors: Iterable[ValidationError], schema_id: str) -> List[SchemaViolation]:
    """Convert validator errors to violations, ordered by instance path."""
    ordered = sorted(errors, key=_path_key)
    return [SchemaViolation.from_error(e, schema_id) for e in ordered]


def _path_key(error: ValidationError) -> Tuple[Tuple[bool, Any], ...]:
    # Array indexes compare as numbers and never against property names
    return tuple((isinstance(p, str), p) for p in error.absolute_path)


def format_violations(title: str, violations: Sequence[SchemaViolation]) -> str:
    """Readable multi-line report, one line per violation."""
    if not violations:
        return f"Data is valid against schema '{title}'"
    lines = [f"Validation failed for schema '{title}':"]
    lines.extend(v.to_human() for v in violations)
    return "\n".join(lines)
