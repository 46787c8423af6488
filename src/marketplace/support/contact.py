"""ContactRequest aggregate — the public "get in touch" form."""

from protean.exceptions import ValidationError
from protean.fields import DateTime, String, Text

from marketplace.domain import marketplace
from marketplace.utils.timeutils import utcnow


@marketplace.aggregate
class ContactRequest:
    name = String(required=True, max_length=150)
    email = String(required=True, max_length=254)
    country_code = String(required=True, max_length=6)
    contact = String(required=True, max_length=20)
    requirement = Text(required=True)
    created_at = DateTime()

    @classmethod
    def submit(cls, name: str, email: str, country_code: str, contact: str, requirement: str):
        values = {
            "name": (name or "").strip(),
            "email": (email or "").strip().lower(),
            "country_code": (country_code or "").strip(),
            "contact": (contact or "").strip(),
            "requirement": (requirement or "").strip(),
        }
        missing = [field for field, value in values.items() if not value]
        if missing:
            raise ValidationError({field: ["This field is required"] for field in missing})
        return cls(**values, created_at=utcnow())
