#!/usr/bin/env python3
"""
namegen CLI
===========
Command-line interface for themed name generation.

Usage:
    namegen generate npc --theme elves -n 5 --seed 42
    namegen generate building --theme orcs --building-type industrial
    namegen generate city --theme-file steampunk=./steampunk.yaml -t steampunk
    namegen themes
"""

import argparse
import json
import logging
import sys

from namegen import __version__
from namegen.enums import BuildingType, EntityType, Gender
from namegen.exceptions import InvalidParameter, NameGenError, NamePoolExhausted
from namegen.generator import NameGenerator
from namegen.registry import ThemeConfig
from namegen import settings
from namegen.settings import resolve_path

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================

CATEGORIES = [e.value for e in EntityType]
GENDERS = [g.value for g in Gender]
BUILDING_TYPES = [b.value for b in BuildingType]


# =============================================================================
# Utilities
# =============================================================================

class Output:
    """Handles CLI output with quiet mode support."""

    def __init__(self, quiet: bool = False):
        self.quiet = quiet

    def print(self, *args, **kwargs):
        if not self.quiet:
            print(*args, **kwargs)

    def error(self, msg: str):
        print(f"Error: {msg}", file=sys.stderr)

    def result(self, line: str):
        """Always printed: the actual output of a command."""
        print(line)


def configure_logging(verbose: bool = False):
    level = logging.DEBUG if verbose else settings.logging_level()
    logging.basicConfig(level=level, format=settings.logging_format())


def positive_int(value: str) -> int:
    """argparse type for counts: integers of 1 or more."""
    try:
        count = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid count: {value!r}")
    if count < 1:
        raise argparse.ArgumentTypeError(f"count must be at least 1, got {count}")
    return count


def build_config(theme_files) -> ThemeConfig:
    """Turn repeated ID=PATH arguments into a ThemeConfig."""
    config = ThemeConfig()
    for entry in theme_files or []:
        identifier, sep, path = entry.partition('=')
        if not sep or not identifier or not path:
            raise InvalidParameter(
                'theme-file', entry,
                message=f"Expected --theme-file ID=PATH, got {entry!r}.",
            )
        config.add_theme_from_file(identifier, resolve_path(path))
    return config


# =============================================================================
# Commands
# =============================================================================

def cmd_generate(args, out: Output):
    """Generate names for one category."""
    gen = NameGenerator(seed=args.seed, config=build_config(args.theme_file))
    entity_type = EntityType(args.category)

    modifier = None
    if entity_type is EntityType.NPC:
        modifier = args.gender
    elif entity_type is EntityType.BUILDING:
        modifier = args.building_type
    if modifier is None and (args.gender or args.building_type):
        out.print(f"Note: modifiers are ignored for {entity_type.label} names", file=sys.stderr)

    out.print(f"Generating {args.count} {entity_type.label} names "
              f"(theme={args.theme}, seed={gen.seed})...", file=sys.stderr)

    names = []
    status = 0
    try:
        for _ in range(args.count):
            names.append(gen.generate(entity_type, args.theme, modifier))
    except NamePoolExhausted as e:
        out.error(str(e))
        status = 1

    if args.json:
        out.result(json.dumps({
            'seed': gen.seed,
            'theme': args.theme,
            'category': entity_type.value,
            'names': names,
        }, indent=2))
    else:
        for name in names:
            out.result(name)
    return status


def cmd_themes(args, out: Output):
    """List available themes."""
    gen = NameGenerator(seed=0, config=build_config(args.theme_file))
    for name in gen.themes:
        out.result(name)
    return 0


# =============================================================================
# Main
# =============================================================================

def main(argv=None):
    try:
        default_theme = settings.default_theme()
        default_count = settings.default_count()
    except NameGenError as e:
        Output().error(str(e))
        return 1

    parser = argparse.ArgumentParser(
        prog='namegen',
        description='namegen - Deterministic Procedural Name Generator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s generate npc --theme cyberpunk --gender female -n 5
  %(prog)s generate building --theme orcs --building-type medical
  %(prog)s generate street --theme elves --seed 100 --json
  %(prog)s themes
"""
    )

    parser.add_argument('--version', '-V', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--quiet', '-q', action='store_true', help='Suppress non-essential output')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # --- generate ---
    p = subparsers.add_parser('generate', aliases=['gen', 'g'], help='Generate names')
    p.add_argument('category', choices=CATEGORIES, help='What to name')
    p.add_argument('--theme', '-t', default=default_theme,
                   help='Theme name or custom theme identifier')
    p.add_argument('-n', '--count', type=positive_int, default=default_count,
                   help='Number of names')
    p.add_argument('--seed', '-s', type=int, help='Seed (random when omitted)')
    p.add_argument('--gender', choices=GENDERS, help='NPC gender')
    p.add_argument('--building-type', '-b', choices=BUILDING_TYPES, help='Building type')
    p.add_argument('--theme-file', action='append', metavar='ID=PATH',
                   help='Register a custom theme from a YAML/JSON file (repeatable)')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    # --- themes ---
    p = subparsers.add_parser('themes', help='List available themes')
    p.add_argument('--theme-file', action='append', metavar='ID=PATH',
                   help='Also load a custom theme file (repeatable)')

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    cmd_map = {'gen': 'generate', 'g': 'generate'}
    command = cmd_map.get(args.command, args.command)

    out = Output(quiet=args.quiet)

    commands = {
        'generate': cmd_generate,
        'themes': cmd_themes,
    }

    handler = commands.get(command)
    if handler:
        try:
            configure_logging(args.verbose)
            return handler(args, out)
        except KeyboardInterrupt:
            out.print("\nCancelled.")
            return 130
        except NameGenError as e:
            out.error(str(e))
            if args.verbose:
                logger.exception("Command failed")
            return 1

    parser.print_help()
    return 0


if __name__ == '__main__':
    sys.exit(main())
