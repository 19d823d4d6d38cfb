# =============================================================================
# GLOS-SITE Contact Form
# =============================================================================
"""
Contact form validation.

No mail provider is wired in: valid submissions are logged and acknowledged.
"""

import re
from typing import Any, Optional

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

REQUIRED_FIELDS_ERROR = "Nome, email e messaggio sono obbligatori"
INVALID_EMAIL_ERROR = "Email non valida"
SUCCESS_MESSAGE = "Messaggio inviato con successo"


def validate_contact(body: Any) -> Optional[str]:
    """Return an error message for an invalid submission, None when valid."""
    if not isinstance(body, dict):
        return REQUIRED_FIELDS_ERROR

    name = body.get("name")
    email = body.get("email")
    message = body.get("message")

    if not name or not email or not message:
        return REQUIRED_FIELDS_ERROR

    if not isinstance(email, str) or not EMAIL_PATTERN.match(email):
        return INVALID_EMAIL_ERROR

    return None
