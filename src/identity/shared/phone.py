"""PhoneNumber value object for validated phone numbers."""

import re

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from identity.domain import identity


@identity.value_object
class PhoneNumber:
    """Value object for phone numbers.

    Exactly eleven digits, no separators or country prefix.
    """

    number: String(required=True, max_length=20)

    @invariant.post
    def validate_phone_format(self):
        """Ensure the phone number is eleven digits and nothing else."""
        if not re.fullmatch(r"[0-9]{11}", self.number):
            raise ValidationError({"number": ["Phone number must be an 11-digit number"]})

    def __str__(self):
        return self.number
