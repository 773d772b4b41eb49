"""Result printing shared by every command.

Verbosity contract:
  0  print nothing
  1  print the result as JSON
  2  print sorted key=value environment lines, a separator, then the JSON
"""

import dataclasses
import json
import sys
from dataclasses import dataclass
from typing import TextIO

VERBOSITY_LEVELS = (0, 1, 2)
SEPARATOR = "----- / -----"


def _jsonable(payload: object) -> object:
    if dataclasses.is_dataclass(payload) and not isinstance(payload, type):
        return dataclasses.asdict(payload)
    return payload


@dataclass(frozen=True)
class Printer:
    verbosity: int = 1

    def print(self, env: dict[str, str], payload: object, stream: TextIO | None = None) -> None:
        if self.verbosity <= 0:
            return
        out = stream if stream is not None else sys.stdout
        if self.verbosity >= 2:
            for key in sorted(env):
                out.write(f"{key}={env[key]}\n")
            out.write(SEPARATOR + "\n")
        out.write(json.dumps(_jsonable(payload), indent=2) + "\n")
        out.flush()
