"""
Local drafts for the admin create/edit forms.

A form is loaded from an entity when editing (or starts empty when
creating), collects field changes, validates them client-side and only then
calls the service. Validation errors are keyed by field name and block the
network call.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from models.question import QUESTION_EDITABLE_FIELDS, Pillar, Question, QuestionType
from models.role import ROLE_EDITABLE_FIELDS, Role
from services.entity_service import CachedEntityService
from utils.errors import ValidationError

logger = logging.getLogger(__name__)

MIN_OPTIONS = 2


class EntityForm:
    """Draft state, field errors and submit flow shared by both forms."""

    defaults: Dict[str, Any] = {}

    def __init__(self, draft: Optional[Dict[str, Any]] = None, entity_id: Any = None):
        self.entity_id = entity_id
        self.draft: Dict[str, Any] = dict(self.defaults)
        if draft:
            self.draft.update(draft)
        self.errors: Dict[str, str] = {}

    @property
    def is_edit(self) -> bool:
        return self.entity_id is not None

    def set(self, field: str, value: Any) -> None:
        """
        Change one draft field and clear its error.

        Writing "" over a field that is None leaves it None, so a text input
        rendering a missing value does not turn it into an empty string.
        """
        if field not in self.draft:
            raise KeyError(f"Unknown field: {field}")
        if value == "" and self.draft[field] is None:
            return
        self.draft[field] = value
        self.errors.pop(field, None)

    def validate(self) -> Dict[str, str]:
        self.errors = self._collect_errors()
        return self.errors

    def payload(self) -> Dict[str, Any]:
        """Request body for create (no id) or update (with id)."""
        body = self._body()
        if self.is_edit:
            return {"id": self.entity_id, **body}
        return body

    def submit(self, service: CachedEntityService):
        """
        Validate, then create or update through the service.

        Returns:
            The saved entity

        Raises:
            ValidationError: If any field is invalid; nothing is sent
        """
        if self.validate():
            logger.debug("Form rejected: %s", self.errors)
            raise ValidationError(self.errors)
        if self.is_edit:
            return service.update(self.payload())
        return service.create(self.payload())

    def _collect_errors(self) -> Dict[str, str]:
        raise NotImplementedError

    def _body(self) -> Dict[str, Any]:
        raise NotImplementedError


def _blank(value: Optional[str]) -> bool:
    return not value or not value.strip()


class RoleForm(EntityForm):
    """Create/edit form for a role. Name and category are required."""

    defaults = {"name": "", "description": "", "category": "", "active": True}

    @classmethod
    def from_entity(cls, role: Role) -> "RoleForm":
        return cls(
            draft={field: getattr(role, field) for field in ROLE_EDITABLE_FIELDS if field != "id"},
            entity_id=role.id,
        )

    def _collect_errors(self) -> Dict[str, str]:
        errors = {}
        if _blank(self.draft["name"]):
            errors["name"] = "Role name is required"
        if _blank(self.draft["category"]):
            errors["category"] = "Category is required"
        return errors

    def _body(self) -> Dict[str, Any]:
        body = {
            "name": self.draft["name"],
            "description": self.draft["description"],
            "category": self.draft["category"],
        }
        if self.is_edit:
            body["active"] = self.draft["active"]
        return body


class QuestionForm(EntityForm):
    """
    Create/edit form for a question.

    LIKERT and MULTIPLE questions need at least two options; switching to
    TEXT clears the option list.
    """

    defaults = {
        "text": "",
        "type": QuestionType.TEXT,
        "pillar": Pillar.TECH,
        "options": [],
        "context": "",
    }

    def __init__(self, draft: Optional[Dict[str, Any]] = None, entity_id: Any = None):
        super().__init__(draft, entity_id)
        self.draft["options"] = list(self.draft["options"] or [])
        self.draft["type"] = QuestionType(self.draft["type"])
        self.draft["pillar"] = Pillar(self.draft["pillar"])

    @classmethod
    def from_entity(cls, question: Question) -> "QuestionForm":
        return cls(
            draft={field: getattr(question, field) for field in QUESTION_EDITABLE_FIELDS if field != "id"},
            entity_id=question.id,
        )

    @property
    def needs_options(self) -> bool:
        return self.draft["type"].needs_options

    def set(self, field: str, value: Any) -> None:
        if field == "type":
            self.change_type(value)
        elif field == "pillar":
            super().set(field, Pillar(value))
        elif field == "options":
            super().set(field, list(value or []))
        else:
            super().set(field, value)

    def change_type(self, question_type: Union[QuestionType, str]) -> None:
        question_type = QuestionType(question_type)
        if question_type == self.draft["type"]:
            return
        self.draft["type"] = question_type
        if question_type is QuestionType.TEXT:
            self.draft["options"] = []
        self.errors.pop("type", None)
        self.errors.pop("options", None)

    def add_option(self, text: str) -> bool:
        """Append a trimmed option. Blank input is ignored."""
        text = (text or "").strip()
        if not text:
            return False
        self.draft["options"].append(text)
        self.errors.pop("options", None)
        return True

    def remove_option(self, index: int) -> None:
        options: List[str] = self.draft["options"]
        if 0 <= index < len(options):
            del options[index]

    def _collect_errors(self) -> Dict[str, str]:
        errors = {}
        if _blank(self.draft["text"]):
            errors["text"] = "Question text is required"
        if self.needs_options and len(self.draft["options"]) < MIN_OPTIONS:
            errors["options"] = f"At least {MIN_OPTIONS} options are required for this question type"
        return errors

    def _body(self) -> Dict[str, Any]:
        return {
            "text": self.draft["text"],
            "type": self.draft["type"].value,
            "pillar": self.draft["pillar"].value,
            "options": list(self.draft["options"]),
            "context": self.draft["context"],
        }
