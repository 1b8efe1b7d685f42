from pathlib import Path
from typing import Final

import platformdirs

platformdir = platformdirs.PlatformDirs("autocomplete", roaming=False)

PRIVATE_DIR_MODE: Final = 0o700


def private_folder(folder: Path) -> Path:
    """Return ``folder`` resolved through any links, creating it and its missing parents owner-only."""
    try:
        return folder.resolve(strict=True)
    except FileNotFoundError:
        parent = private_folder(folder.parent)
        (parent / folder.name).mkdir(PRIVATE_DIR_MODE, exist_ok=True)
        return (parent / folder.name).resolve(strict=True)


def normalize_word(word: str) -> str:
    """Fold a word for storage and lookup. Only case is folded; whitespace is kept."""
    return word.lower()
