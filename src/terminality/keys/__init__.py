"""Key events and the escape-sequence decoder."""

from terminality.keys.decoder import MAX_SEQUENCE_LENGTH, decode
from terminality.keys.models import KeyStroke, KeyType

__all__ = ["MAX_SEQUENCE_LENGTH", "KeyStroke", "KeyType", "decode"]
