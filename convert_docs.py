#!/usr/bin/env python3
"""
Markdown to Mintlify MDX Conversion Tool

Rewrites a tree of Hugo-flavored Markdown docs into Mintlify MDX:
  - multi-line frontmatter descriptions folded onto one quoted line
  - {{< highlight yaml >}} shortcodes turned into fenced code blocks
  - <details><summary> blocks turned into <Accordion> components
  - heading anchors ({#id}) stripped, placeholder <angle-brackets> escaped

Usage:
  python convert_docs.py <source_dir> <dest_dir>

The destination directory is deleted and recreated on every run.
"""

import argparse
import os
import shutil
import sys

from mintdocs.markdown_converter import MarkdownConverter
from mintdocs.utils import MDX_EXT, ensure_dir


MD_EXT = '.md'
INDEX_MARKER = '_index.md'


def convert_tree(source_dir: str, dest_dir: str) -> list[str]:
    """Convert every .md file under ``source_dir`` into ``dest_dir``.

    Returns the relative paths of the .mdx files written. Stops at the first
    error; files already written are left in place.
    """
    shutil.rmtree(dest_dir, ignore_errors=True)
    os.makedirs(dest_dir, exist_ok=True)

    converter = MarkdownConverter()
    written = []

    for dirpath, dirnames, filenames in os.walk(source_dir, onerror=_raise):
        dirnames.sort()
        for name in sorted(filenames):
            if not name.endswith(MD_EXT):
                continue

            src_path = os.path.join(dirpath, name)
            rel_path = os.path.relpath(src_path, source_dir)

            # Hugo section indexes have no MDX counterpart
            if INDEX_MARKER in rel_path:
                print(f"Skipping {rel_path}")
                continue

            rel_dest = rel_path[:-len(MD_EXT)] + MDX_EXT
            dst_path = os.path.join(dest_dir, rel_dest)
            ensure_dir(dst_path)

            print(f"Converting {rel_path} -> {rel_dest}")
            converter.convert_file(src_path, dst_path)
            written.append(rel_dest)

    return written


def count_mdx_files(directory: str) -> int:
    """Count .mdx files anywhere under ``directory``."""
    count = 0
    for _, _, filenames in os.walk(directory):
        count += sum(1 for name in filenames if name.endswith(MDX_EXT))
    return count


def _raise(error: OSError):
    raise error


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Convert Hugo Markdown docs to Mintlify MDX',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python convert_docs.py ./content/docs ./mintlify/docs
        """,
    )
    parser.add_argument('source_dir', help='Directory of .md source files')
    parser.add_argument('dest_dir', help='Output directory for .mdx files (recreated)')

    args = parser.parse_args(argv)

    print(f"Converting docs from {args.source_dir} to {args.dest_dir}")

    try:
        convert_tree(args.source_dir, args.dest_dir)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print("Conversion complete!")
    print(f"Converted files: {count_mdx_files(args.dest_dir)}")


if __name__ == '__main__':
    main()
