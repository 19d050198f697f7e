"""Splits command arguments on prefixes such as ``d/`` and ``ti/``."""

import re
from typing import Iterable, Optional

from roster.errors import ParseError


class ArgumentMultimap:
    """Values collected per prefix, plus the text before the first prefix."""

    def __init__(self, preamble: str, values: dict[str, list[str]]) -> None:
        self.preamble = preamble
        self._values = values

    def get_value(self, prefix: str) -> Optional[str]:
        """Last value given for ``prefix``, or None when it is absent."""
        values = self._values.get(prefix)
        return values[-1] if values else None

    def get_all_values(self, prefix: str) -> list[str]:
        return list(self._values.get(prefix, []))

    def has(self, *prefixes: str) -> bool:
        """Check that every one of ``prefixes`` was supplied."""
        return all(prefix in self._values for prefix in prefixes)

    def verify_no_duplicate_prefixes_for(self, *prefixes: str) -> None:
        """Reject input that repeats a single-valued prefix.

        Raises:
            ParseError: Naming every repeated prefix.
        """
        duplicated = [p for p in prefixes if len(self._values.get(p, [])) > 1]
        if duplicated:
            raise ParseError(
                "Multiple values specified for the following single-valued field(s): "
                + " ".join(duplicated)
            )


def tokenize(args: str, prefixes: Iterable[str]) -> ArgumentMultimap:
    """Split ``args`` into a preamble and per-prefix values.

    A prefix only counts when it starts the string or follows whitespace,
    so "d/Mon" is split but "and/or" is not.

    Args:
        args: Raw argument text following the command word.
        prefixes: Prefixes to recognize, e.g. ("d/", "ti/").

    Returns:
        ArgumentMultimap with the values in the order they appeared.
    """
    prefixes = sorted(set(prefixes), key=len, reverse=True)
    if not prefixes:
        return ArgumentMultimap(args.strip(), {})

    pattern = re.compile(
        r"(?:^|(?<=\s))(" + "|".join(re.escape(prefix) for prefix in prefixes) + ")"
    )
    matches = list(pattern.finditer(args))

    preamble_end = matches[0].start() if matches else len(args)
    values: dict[str, list[str]] = {}
    for i, match in enumerate(matches):
        value_end = matches[i + 1].start() if i + 1 < len(matches) else len(args)
        values.setdefault(match.group(1), []).append(args[match.end():value_end].strip())

    return ArgumentMultimap(args[:preamble_end].strip(), values)
