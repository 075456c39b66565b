"""EmailAddress value object for validated email addresses."""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from identity.domain import identity


@identity.value_object
class EmailAddress:
    """An email address: non-blank and containing an ``@``."""

    address: String(required=True, max_length=254)

    @invariant.post
    def verify_email_address(self):
        email = self.address

        if not email.strip() or "@" not in email:
            raise ValidationError({"address": [f"Invalid email address: {email!r}"]})

    def __str__(self):
        return self.address
