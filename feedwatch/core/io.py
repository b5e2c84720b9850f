"""Text file I/O utilities."""

from pathlib import Path
from typing import Union

# How much of a file is sniffed when deciding whether it holds text
SNIFF_BYTES = 512


def looks_like_text(data: bytes) -> bool:
    """
    Guess whether raw bytes are text.

    NUL bytes in the sniffed prefix, or content that is not valid UTF-8,
    count as binary.
    """
    if b"\x00" in data[:SNIFF_BYTES]:
        return False
    try:
        data.decode("utf-8")
    except UnicodeDecodeError:
        return False
    return True


def read_text(path: Union[str, Path], *, encoding: str = "utf-8") -> str:
    """
    Read a text file, refusing binary or blank content.

    Args:
        path: Path to the file
        encoding: File encoding (default: utf-8)

    Returns:
        File content

    Raises:
        FileNotFoundError: If the file does not exist
        OSError: If the file cannot be read
        ValueError: If the content is blank or looks binary
    """
    path = Path(path)
    data = path.read_bytes()

    if not data.strip():
        raise ValueError(f"{path} is empty")
    if not looks_like_text(data):
        raise ValueError(f"{path} does not look like text")
    return data.decode(encoding)


def save_text(
    text: str,
    path: Union[str, Path],
    *,
    encoding: str = "utf-8",
    mkdir: bool = True,
) -> None:
    """
    Write text to a file, replacing it atomically.

    The content goes to a sibling ``.tmp`` file first so a crash mid-write
    never leaves a truncated file behind.

    Raises:
        OSError: If the directory cannot be created or the file written
    """
    path = Path(path)

    if mkdir:
        path.parent.mkdir(parents=True, exist_ok=True)

    tmp_path = path.with_name(path.name + ".tmp")
    tmp_path.write_text(text, encoding=encoding)
    tmp_path.replace(path)
