"""Token dumps for the CLI and for debugging."""

from __future__ import annotations

import json
import sys
from typing import TextIO

from ween.tokens import Token


def dump_tokens(tokens: list[Token], *, file: TextIO = sys.stderr) -> None:
    """Print one display line per token to *file*."""
    for tok in tokens:
        file.write(f"{tok}\n")


def tokens_to_json(tokens: list[Token]) -> str:
    return json.dumps(
        [
            {
                "type": str(tok.type),
                "value": tok.value,
                "text": tok.text,
                "line": tok.line,
                "column": tok.column,
            }
            for tok in tokens
        ],
        indent=2,
    )
