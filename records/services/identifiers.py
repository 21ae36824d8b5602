import secrets
import string

ID_ALPHABET = string.ascii_uppercase + string.digits
ID_SUFFIX_LENGTH = 9


def new_record_id(prefix: str) -> str:
    """Return ``PREFIX-XXXXXXXXX`` with a random upper-case alphanumeric suffix.

    Uniqueness is not checked here; the store relies on the primary key
    and draws again on a collision.
    """
    suffix = ''.join(secrets.choice(ID_ALPHABET) for _ in range(ID_SUFFIX_LENGTH))
    return f"{prefix}-{suffix}"
