from enum import Enum

from sqlalchemy import delete
from sqlmodel import Session, select

from claimdesk.core.errors import ConflictError, ValidationError
from claimdesk.db.models import FormField
from claimdesk.services.common import require


class FieldType(str, Enum):
    TEXT = "Text"
    DROPDOWN = "Dropdown"
    RADIO = "Radio"
    CHECKBOX = "Checkbox"
    NUMBER = "Number"
    TEXTAREA = "Textarea"


class FieldRepository:
    """Custom form fields a company adds to its claim forms."""

    def __init__(self, session: Session):
        self.session = session

    def list_fields(self, company_id: str) -> list:
        rows = self.session.exec(
            select(FormField).where(FormField.company_id == company_id).order_by(FormField.name)
        ).all()
        return [row.model_dump() for row in rows]

    def create_field(self, fields: dict) -> int:
        require(fields, "name", "type", "company_id")
        try:
            field_type = FieldType(fields["type"])
        except ValueError:
            raise ValidationError(f"Invalid field type: {fields['type']}")

        duplicate = self.session.exec(
            select(FormField.id).where(
                FormField.company_id == fields["company_id"], FormField.name == fields["name"]
            )
        ).first()
        if duplicate:
            raise ConflictError(f"Field '{fields['name']}' already exists for this company")

        field = FormField(
            name=fields["name"],
            type=field_type.value,
            required=bool(fields.get("required", False)),
            company_id=fields["company_id"],
        )
        self.session.add(field)
        self.session.commit()
        self.session.refresh(field)
        return field.id

    def delete_field(self, field_id: int) -> int:
        result = self.session.exec(delete(FormField).where(FormField.id == field_id))
        self.session.commit()
        return result.rowcount
