"""JSON output helpers."""
from __future__ import annotations

import json
import sys
from typing import Optional, TextIO

from lodging_importer.accommodations.models import Accommodation
from lodging_importer.errors import MappingError


def render_accommodation(accommodation: Accommodation, *, indent: int = 4) -> str:
    """Serialise one accommodation as a pretty-printed JSON document."""
    try:
        return json.dumps(
            accommodation.to_dict(),
            indent=indent,
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError) as exc:
        raise MappingError(
            f"Cannot serialise accommodation {accommodation.identifier!r}: {exc}",
            identifier=accommodation.identifier,
        ) from exc


class JsonStreamWriter:
    """Writes each accommodation as its own JSON document, newline separated."""

    def __init__(self, stream: Optional[TextIO] = None, *, indent: int = 4) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self._indent = indent

    def write(self, accommodation: Accommodation) -> None:
        document = render_accommodation(accommodation, indent=self._indent)
        self._stream.write(document)
        self._stream.write("\n")
        self._stream.flush()

    __call__ = write
