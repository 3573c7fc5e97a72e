#!/usr/bin/env python3
"""
Mintlify docs.json Generator

Merges one or more docs-config YAML files into a single Mintlify docs.json.
Site settings (theme, colors, logo, ...) come from the first file; navigation
tabs are collected from every file in the order given.

Usage:
  python generate_docs.py docs-config.yaml > docs.json
  python generate_docs.py base.yaml talos.yaml omni.yaml --output docs.json
  python generate_docs.py --detect-missing docs-config.yaml
"""

import argparse
import sys

from mintdocs.config import ConfigError, build_docs_json, merge_configs, to_json, write_docs_json
from mintdocs.navigation import find_missing_files
from mintdocs.schema import SchemaValidationError, validate_docs


def report_missing_files(folders: list[str], root: str = '.') -> list[str]:
    """Print .mdx files that no configured group folder covers."""
    missing = find_missing_files(folders, root)

    if not missing:
        print("✅ All MDX files are included in configured folders")
        return missing

    print(f"⚠️  Found {len(missing)} MDX files not included in any configured folder:")
    print()
    for path in missing:
        print(f"  - {path}")
    print()
    print("To include these files, add their parent folders to docs-config.yaml navigation groups.")
    return missing


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Generate Mintlify docs.json from YAML config files',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python generate_docs.py docs-config.yaml > docs.json
  python generate_docs.py base.yaml extra.yaml --skip-validation -o docs.json
  python generate_docs.py --scan-folders docs-config.yaml
        """,
    )
    parser.add_argument(
        'configs', nargs='+', metavar='config.yaml',
        help='YAML config files; the first one supplies the site settings',
    )
    parser.add_argument(
        '--detect-missing',
        action='store_true',
        help='Check for MDX files not included in config and exit',
    )
    parser.add_argument(
        '--skip-validation',
        action='store_true',
        help='Skip JSON schema validation',
    )
    parser.add_argument(
        '--scan-folders',
        action='store_true',
        help='Build pages from the group folder when a group lists no pages',
    )
    parser.add_argument(
        '--output', '-o',
        default=None,
        help='Write docs.json to this path instead of stdout',
    )

    args = parser.parse_args(argv)

    try:
        config = merge_configs(args.configs)
    except ConfigError as e:
        print(f"Error processing config files: {e}", file=sys.stderr)
        sys.exit(1)

    if args.detect_missing:
        try:
            report_missing_files(config.configured_folders())
        except OSError as e:
            print(f"Error checking missing files: {e}", file=sys.stderr)
            sys.exit(1)
        return

    docs = build_docs_json(config, scan_folders=args.scan_folders)

    if not args.skip_validation and config.schema:
        try:
            validate_docs(docs, config.schema)
        except SchemaValidationError as e:
            print(f"Schema validation failed: {e}", file=sys.stderr)
            sys.exit(1)

    if args.output:
        try:
            write_docs_json(docs, args.output)
        except OSError as e:
            print(f"Error writing {args.output}: {e}", file=sys.stderr)
            sys.exit(1)
        print(f"  ✓ Generated {args.output}", file=sys.stderr)
    else:
        print(to_json(docs))


if __name__ == '__main__':
    main()
