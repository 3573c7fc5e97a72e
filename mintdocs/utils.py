"""Shared utilities for the docs converter and docs.json generator."""

import os
import posixpath


MDX_EXT = '.mdx'


def ensure_dir(path: str):
    """Create the parent directory of ``path`` if it doesn't exist."""
    os.makedirs(os.path.dirname(path), exist_ok=True)


def strip_mdx(path: str) -> str:
    """Drop a trailing .mdx extension to get a Mintlify page reference."""
    if path.endswith(MDX_EXT):
        return path[:-len(MDX_EXT)]
    return path


def page_ref(folder: str, name: str) -> str:
    """Build a page reference for ``name`` inside ``folder``."""
    return strip_mdx(posixpath.normpath(posixpath.join(folder, name.lstrip('/'))))


def group_title(dirname: str) -> str:
    """Turn a folder name like 'getting-started' into 'Getting started'."""
    title = os.path.basename(dirname.rstrip('/')).replace('-', ' ')
    return title[:1].upper() + title[1:]


def is_hidden(name: str) -> bool:
    return name.startswith('.')
