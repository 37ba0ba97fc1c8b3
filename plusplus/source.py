"""Source provider.

Resolves the name of a Plus++ source unit and reads it. Source files use the
``.ppp`` suffix, which is added when the given name does not already carry
it. When no name is supplied the user is prompted for one.


File: source.py
Version: 0.1.0
License: MIT
"""

from typing import Callable, Optional

from plusplus.exceptions import SourceError

SOURCE_SUFFIX = ".ppp"
PROMPT = "Enter source file name (without extension): "


def source_filename(name: Optional[str] = None, prompt: Optional[Callable[[str], str]] = None) -> str:
    """
    Return the path of the source file to run.

    Parameters:
        name (str): Name given on the command line, if any.
        prompt (Callable[[str], str]): Asks the user for a name when none was given, ``input`` by default.

    Raises:
        SourceError: If no name could be read.
    """
    if name is None:
        prompt = prompt if prompt is not None else input
        try:
            name = prompt(PROMPT)
        except EOFError as e:
            raise SourceError("Failed to read input.") from e
    name = name.strip()
    if not name:
        raise SourceError("No source file name given.")
    if not name.endswith(SOURCE_SUFFIX):
        name += SOURCE_SUFFIX
    return name


def read_source(path: str) -> str:
    """
    Read a source file as text.

    Raises:
        SourceError: If the file cannot be opened or decoded.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise SourceError(f"Could not open source file '{path}'") from e
