"""
Command-line entry point

    sectiondoc -i path/to/code -o path/to/docs file1.js lib/

Directories are searched recursively; the folder structure is preserved
under the output directory.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from . import __version__
from .errors import HighlighterError
from .generator import DocGenerator, GeneratorConfig, create_default_config


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog='sectiondoc',
        description='Generate side-by-side comment and code documentation pages'
    )
    parser.add_argument('files', nargs='*', default=['.'],
                        help='Files or directories relative to the input root')
    parser.add_argument('-i', '--input', dest='in_dir', help='Root directory containing the code')
    parser.add_argument('-o', '--output', dest='out_dir', help='Directory to write the doc pages to')
    parser.add_argument('--config', type=str, help='JSON config file path')
    parser.add_argument('--highlighter', type=str, help='Highlighter command (default: python -m pygments)')
    parser.add_argument('--tab-size', type=int, help='Tab width used when highlighting')
    parser.add_argument('--timeout', type=float, help='Seconds to wait for the highlighter per file')
    parser.add_argument('--stylesheet', type=str, help='CSS file to copy into the output root instead of the default')
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose output')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> GeneratorConfig:
    """Merge defaults, the optional config file and command line flags"""
    config = create_default_config()
    if args.config:
        try:
            with open(args.config, 'r', encoding='utf-8') as f:
                config.update(json.load(f))
        except (OSError, ValueError) as e:
            print(f"Warning: Could not load config file: {e}", file=sys.stderr)

    overrides = {
        'in_dir': args.in_dir,
        'out_dir': args.out_dir,
        'highlighter': args.highlighter,
        'tab_size': args.tab_size,
        'timeout': args.timeout,
        'stylesheet': args.stylesheet,
    }
    config.update({k: v for k, v in overrides.items() if v is not None})
    return GeneratorConfig.from_dict(config)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(message)s'
    )

    try:
        config = load_config(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    generator = DocGenerator(config)

    try:
        generator.doc(args.files)
    except HighlighterError as e:
        print(f"Error: {e}", file=sys.stderr)
        if e.stderr:
            print(e.stderr, file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error reading source: {e}", file=sys.stderr)
        return 1

    print(f"\nDone! Generated documentation for {len(generator.generated)} files")
    print(f"Output: {config.out_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
