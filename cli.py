#!/usr/bin/env python3
"""
wlls CLI

Lists every file a set of notes in an Obsidian-style vault references
through [[wiki links]] and ![[embeds]], optionally following links
recursively through the referenced notes.
"""

import argparse
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import List

from wlls.config import Settings, find_config, load_settings
from wlls.discovery import vault_contents
from wlls.errors import WllsError
from wlls.logging import configure_logging, logger
from wlls.model import VaultIndex
from wlls.traversal import resolve_seed, traverse


def _version() -> str:
    try:
        return version("wlls")
    except PackageNotFoundError:
        return "wlls (not installed)"


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="wlls",
        description="List Obsidian wiki-linked files.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  wlls ~/vault Home.md                    # Files Home.md links to or embeds
  wlls -R ~/vault Home.md                 # Follow links through linked notes
  wlls -R --skip-missing-refs ~/vault A.md B.md
  wlls ~/vault Home.md -o refs.txt        # Write the list to a file
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=_version(),
    )

    # Positional arguments
    parser.add_argument(
        "vault_root",
        help="Path to the vault root",
    )

    parser.add_argument(
        "notes",
        nargs="*",
        help="One or more note paths (absolute or vault-relative)",
    )

    # Traversal options
    parser.add_argument(
        "-R", "--recursive",
        action="store_true",
        help="Recurse through linked markdown notes",
    )

    parser.add_argument(
        "--skip-missing-refs",
        action="store_true",
        help="Skip unresolved references instead of failing",
    )

    # Indexing options
    parser.add_argument(
        "--ignore-file",
        default=None,
        help="Name of per-directory ignore files (default: .export-ignore)",
    )

    parser.add_argument(
        "--include-hidden",
        action="store_true",
        help="Index hidden files and directories",
    )

    parser.add_argument(
        "--gitignore",
        action="store_true",
        help="Also honor .gitignore files",
    )

    # Output and configuration
    parser.add_argument(
        "-o", "--output",
        default=None,
        help="Output file (default: stdout)",
    )

    parser.add_argument(
        "--config",
        default=None,
        help="Settings file (default: .wlls.yaml/.yml/.toml/.json in the vault root)",
    )

    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level for diagnostics on stderr (default: WARNING, or $WLLS_LOG_LEVEL)",
    )

    return parser.parse_args(args)


def _apply_flags(settings: Settings, parsed) -> Settings:
    """Overlay command line flags on file settings."""
    return Settings(
        recursive=settings.recursive or parsed.recursive,
        skip_missing_refs=settings.skip_missing_refs or parsed.skip_missing_refs,
        ignore_file=parsed.ignore_file if parsed.ignore_file is not None else settings.ignore_file,
        include_hidden=settings.include_hidden or parsed.include_hidden,
        gitignore=settings.gitignore or parsed.gitignore,
        document_extensions=settings.document_extensions,
    )


def run(vault_root: Path, notes: List[Path], settings: Settings) -> List[Path]:
    """
    Index the vault, validate the seed notes and collect their references.

    Args:
        vault_root: Canonical vault root directory.
        notes: Seed note paths as given on the command line.
        settings: Effective run settings.

    Returns:
        Reached paths in lexicographic order.
    """
    vault = VaultIndex(vault_contents(vault_root, settings.walk_options()))

    seeds = [resolve_seed(note, vault_root, vault) for note in notes]

    reachable = traverse(
        seeds,
        vault,
        recursive=settings.recursive,
        skip_missing=settings.skip_missing_refs,
        document_extensions=settings.document_extensions,
    )
    if reachable.has_missing():
        skipped = list(reachable.iter_missing())
        logger.warning("skipped %d unresolved reference(s) in total", len(skipped))
    return reachable.sorted()


def main(args=None):
    """Main entry point."""
    parsed = parse_args(args)
    configure_logging(parsed.log_level, default="WARNING")

    if not parsed.notes:
        print("Error: at least one note path is required", file=sys.stderr)
        return 1

    # Resolve paths
    vault_root = Path(parsed.vault_root).resolve()
    if not vault_root.exists():
        print(f"Error: vault_root does not exist: {parsed.vault_root}", file=sys.stderr)
        return 1
    if not vault_root.is_dir():
        print(f"Error: vault_root is not a directory: {vault_root}", file=sys.stderr)
        return 1

    try:
        config_path = Path(parsed.config) if parsed.config else find_config(vault_root)
        settings = _apply_flags(load_settings(config_path), parsed)
        paths = run(vault_root, [Path(note) for note in parsed.notes], settings)
    except WllsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logger.debug("Reached %d files", len(paths))
    output = "\n".join(str(path) for path in paths)

    # Write output
    if parsed.output:
        try:
            output_path = Path(parsed.output)
            output_path.write_text(output + "\n", encoding="utf-8")
            print(f"Output written to: {output_path}", file=sys.stderr)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
    else:
        print(output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
