"""Scoped file reads and writes shared by the descriptors.

Every helper opens its handle in a ``with`` block so it is released on every
exit path. Errors from the filesystem and from the JSON decoder are left to
the caller, which decides how to wrap them.
"""

import json
import tempfile
from pathlib import Path
from typing import Any

# Suffix of the temporary file used while a write is in flight
TEMP_SUFFIX = ".tmp"


def read_text(path: Path) -> str:
    """Read the whole of ``path`` as UTF-8 text."""
    with path.open("r", encoding="utf-8") as f:
        return f.read()


def read_json(path: Path) -> Any:
    """Read and decode a JSON file.

    Raises:
        OSError: If the file cannot be read
        json.JSONDecodeError: If the file is not valid JSON
    """
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def dump_json(document: Any) -> str:
    """Serialize a document the way every descriptor file is written."""
    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"


def write_text_atomic(path: Path, text: str) -> None:
    """Write ``text`` to ``path`` through a uniquely named sibling file.

    The target is only replaced once the temporary file has been written in
    full, so a failed write never leaves ``path`` half-written. The temporary
    name is chosen by ``tempfile`` and never collides with an existing file.

    Raises:
        OSError: If the temporary file cannot be written or moved into place
    """
    temporary: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=path.name + ".",
            suffix=TEMP_SUFFIX,
            delete=False,
        ) as handle:
            temporary = Path(handle.name)
            handle.write(text)
        temporary.replace(path)
    except OSError:
        if temporary is not None:
            temporary.unlink(missing_ok=True)
        raise
