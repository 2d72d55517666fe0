"""
Object key generation.

Pattern: {stem}-{uuid4}_{unix_timestamp}{extension}

Example: ``photo.png`` -> ``photo-9f1c...-4e2a_1700000000.png``

- UUID prevents collisions, even for uploads within the same second
- Timestamp keeps keys roughly sortable and eases debugging
- Extension is preserved for content-type hints

No existence check is made before writing; collision avoidance relies on
the random component.
"""
import time
import uuid
from typing import Callable, Tuple


def split_filename(original_filename: str) -> Tuple[str, str]:
    """
    Split a client-supplied filename into (stem, extension).

    Any directory part is dropped (``/`` and ``\\`` separators) so the key
    never contains a path separator. The extension is the text from the
    last ``.`` inclusive, or ``""`` when there is none.

    Args:
        original_filename: Filename as sent by the client

    Returns:
        Tuple of (stem, extension)
    """
    name = original_filename.replace("\\", "/").rsplit("/", 1)[-1]
    stem, dot, ext = name.rpartition(".")
    if not dot:
        return name, ""
    return stem, f".{ext}"


class KeyGenerator:
    """
    Derives collision-resistant object keys from filenames.

    The random and clock sources are injectable so tests can assert the
    exact key composition.
    """

    def __init__(
        self,
        uuid_factory: Callable[[], uuid.UUID] = uuid.uuid4,
        clock: Callable[[], float] = time.time
    ):
        self._uuid_factory = uuid_factory
        self._clock = clock

    def generate(self, original_filename: str) -> str:
        """
        Generate a unique object key for ``original_filename``.

        Args:
            original_filename: Filename as sent by the client

        Returns:
            Object key string
        """
        stem, extension = split_filename(original_filename)
        base = f"{stem}-{self._uuid_factory()}"
        timestamp = int(self._clock())
        return f"{base}_{timestamp}{extension}"


_default_generator = KeyGenerator()


def generate_key(original_filename: str) -> str:
    """Generate an object key with the system random source and clock."""
    return _default_generator.generate(original_filename)
