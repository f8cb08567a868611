"""Default filename generator.

Hosts normally pass their own generator to ``StorageAdapter.store``. This one
is used when none is given: random names are unique without a lookup, so the
disambiguation index is never needed.
"""

import secrets
from pathlib import PurePosixPath
from typing import Callable

from .errors import FilenameGenerationError
from .storage_models import FileRecord

# (file, index) -> storage key
FilenameGenerator = Callable[[FileRecord, int], str]


def random_filename(file: FileRecord, index: int = 0) -> str:
    """Return 16 random hex characters plus the file's lower-cased extension.

    Raises:
        FilenameGenerationError: If index is negative or the record has no name
    """
    if index < 0:
        raise FilenameGenerationError(f"Invalid disambiguation index: {index}")

    source = file.originalname or (file.path.name if file.path else None)
    if not source:
        raise FilenameGenerationError("Cannot generate a filename for a file without a name")

    return secrets.token_hex(8) + PurePosixPath(source).suffix.lower()
