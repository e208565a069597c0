"""Load arithmetic expressions from text files and archives."""
from pathlib import Path
import tarfile
import tempfile
from typing import List
import zipfile

import py7zr

SUPPORTED_ARCHIVES = (".zip", ".tar.xz", ".7z")


def read_expressions(input_file: Path) -> List[str]:
    """
    Read the non-empty expression lines of a text file or archive.

    :param Path input_file: Path to a .txt file or a supported archive

    :return: Stripped, non-empty lines in file order
    :rtype: List[str]
    :raises ValueError: If the archive format is unsupported or contains no .txt file
    """
    if input_file.suffix == ".txt":
        content = input_file.read_text(encoding="utf-8")
    else:
        content = extract_archive(input_file)

    return [line.strip() for line in content.splitlines() if line.strip()]


def _first_txt(names: List[str], kind: str) -> str:
    txt_files = [name for name in names if name.endswith(".txt")]
    if not txt_files:
        raise ValueError(f"📄❌ No .txt file found in {kind} archive")
    return txt_files[0]


def extract_archive(archive_path: Path) -> str:
    """
    Extract the first .txt member of an archive and return its content.

    Supported formats: .zip, .tar.xz and .7z. Members are extracted into a temporary
    directory that is removed afterwards.

    :param Path archive_path: Path to the archive file

    :return: Content of the extracted .txt member
    :rtype: str
    :raises ValueError: If no .txt member is found or the format is unsupported
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        target = Path(tmpdir)

        if archive_path.suffix == ".zip":
            with zipfile.ZipFile(archive_path, "r") as zf:
                member = _first_txt(zf.namelist(), "zip")
                zf.extract(member, path=target)

        elif archive_path.suffixes[-2:] == [".tar", ".xz"]:
            with tarfile.open(archive_path, "r:xz") as tf:
                member = _first_txt([m.name for m in tf.getmembers() if m.isfile()], "tar.xz")
                tf.extract(member, path=target, filter="data")

        elif archive_path.suffix == ".7z":
            with py7zr.SevenZipFile(archive_path, mode="r") as archive:
                member = _first_txt(archive.getnames(), "7z")
                archive.extract(path=target, targets=[member])

        else:
            raise ValueError(
                f"📄❌ Unsupported archive format: {archive_path.suffix} "
                f"(expected .txt or one of {', '.join(SUPPORTED_ARCHIVES)})"
            )

        return (target / member).read_text(encoding="utf-8")
