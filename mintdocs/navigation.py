"""Resolve docs-config page entries and folders into docs.json navigation."""

import os
import posixpath
from typing import Iterable, Optional

from .utils import MDX_EXT, group_title, is_hidden, page_ref, strip_mdx


def process_manual_pages(entries: list, base_path: str = '') -> list:
    """Recursively convert PageEntry items into nav pages.

    Page paths are placed under ``base_path`` unless they already start with
    it. Subgroups share the same base path as their parent.
    """
    pages = []
    for entry in entries:
        if entry.page:
            if base_path and not entry.page.startswith(base_path + '/'):
                pages.append(page_ref(base_path, entry.page))
            else:
                pages.append(strip_mdx(entry.page))
        elif entry.group:
            pages.append({
                "group": entry.group,
                "pages": process_manual_pages(entry.pages, base_path),
            })
    return pages


def scan_folder(folder: str, order: Optional[list[str]] = None) -> list:
    """Build nav pages from the .mdx files in ``folder``.

    Files listed in ``order`` come first, the rest follow alphabetically.
    Each direct subdirectory with .mdx files becomes a subgroup after the
    files; deeper directories are not scanned.
    """
    files = []
    sub_groups = []

    for entry in sorted(os.scandir(folder), key=lambda e: e.name):
        if entry.is_dir():
            sub_pages = scan_subdirectory(entry.path)
            if sub_pages:
                sub_groups.append({
                    "group": group_title(entry.name),
                    "pages": sub_pages,
                })
        elif entry.name.endswith(MDX_EXT):
            files.append(page_ref(folder, entry.name))

    if order:
        files = _apply_order(files, folder, order)

    return files + sub_groups


def _apply_order(files: list[str], folder: str, order: list[str]) -> list[str]:
    """Put files named in ``order`` first, then the remainder sorted."""
    remaining = set(files)
    ordered = []
    for name in order:
        path = page_ref(folder, name)
        if path in remaining:
            ordered.append(path)
            remaining.remove(path)
    return ordered + sorted(remaining)


def scan_subdirectory(directory: str) -> list[str]:
    """Return sorted page references for the .mdx files directly in ``directory``."""
    pages = [
        page_ref(directory, entry.name)
        for entry in os.scandir(directory)
        if not entry.is_dir() and entry.name.endswith(MDX_EXT)
    ]
    return sorted(pages)


def find_missing_files(folders: Iterable[str], root: str = '.') -> list[str]:
    """List .mdx files under ``root`` that are outside every configured folder.

    Hidden files and directories are ignored. Returned paths are relative to
    ``root``.
    """
    prefixes = [posixpath.normpath(folder) + '/' for folder in folders if folder]
    missing = []

    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if not is_hidden(d))
        for name in sorted(filenames):
            if is_hidden(name) or not name.endswith(MDX_EXT):
                continue
            rel_path = os.path.relpath(os.path.join(dirpath, name), root).replace(os.sep, '/')
            if not any(rel_path.startswith(prefix) for prefix in prefixes):
                missing.append(rel_path)

    return sorted(missing)
