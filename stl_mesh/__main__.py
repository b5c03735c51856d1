"""
CLI entry point for the stl_mesh loader
"""

import argparse
import sys
import logging
from pathlib import Path

from .utils import format_memory_size


def setup_logging(verbose=False, log_file=None):
    """Setup logging configuration"""
    level = logging.DEBUG if verbose else logging.INFO
    format_str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(level=level, format=format_str, handlers=handlers, force=True)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="stl_mesh",
        description="STL mesh loader - decode binary and ASCII STL files into indexed meshes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Load a file and print a summary
  python -m stl_mesh info models/part.stl

  # Force the binary decoder with a custom configuration
  python -m stl_mesh info models/part.stl --format binary --config loader.json

  # Create configuration template
  python -m stl_mesh create-config --output loader.json
        """
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    info_parser = subparsers.add_parser('info', help='Load an STL file and report mesh statistics')
    info_parser.add_argument('path', help='Path to the STL file')
    info_parser.add_argument('--format', choices=['auto', 'binary', 'ascii'], default='auto',
                             help='STL variant (default: auto-detect)')
    info_parser.add_argument('--config', help='JSON configuration file')
    info_parser.add_argument('--log-file', help='Also write the log to this file')
    info_parser.add_argument('--verbose', '-v', action='store_true', help='Verbose output')

    detect_parser = subparsers.add_parser('detect', help='Print the detected STL variant')
    detect_parser.add_argument('path', help='Path to the STL file')
    detect_parser.add_argument('--config', help='JSON configuration file (probe encoding)')
    detect_parser.add_argument('--verbose', '-v', action='store_true', help='Verbose output')

    config_parser = subparsers.add_parser('create-config', help='Create configuration template')
    config_parser.add_argument('--output', default='stl_mesh_config.json', help='Output config file name')

    return parser


def main(argv=None):
    """Main CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    setup_logging(getattr(args, 'verbose', False), getattr(args, 'log_file', None))
    logger = logging.getLogger('stl_mesh.cli')

    try:
        if args.command == 'info':
            from .config import load_config
            from .stl_processor import STLProcessor

            config = load_config(args.config)
            processor = STLProcessor(config)
            loaders = {
                'auto': processor.load_stl,
                'binary': processor.load_binary_stl,
                'ascii': processor.load_ascii_stl,
            }
            mesh = loaders[args.format](args.path)
            summary = mesh.summary()

            logger.info(f"📁 File: {args.path} ({format_memory_size(Path(args.path).stat().st_size)})")
            logger.info(f"Format: {summary['format']}")
            logger.info(f"Triangles: {summary['triangles']}")
            logger.info(f"Unique points: {summary['unique_points']} "
                        f"(dedup ratio {summary['dedup_ratio']:.3f})")

            processor.release(config.collect_on_release)

        elif args.command == 'detect':
            from .config import load_config
            from .detector import detect_format

            config = load_config(args.config)
            print(detect_format(args.path, config.encoding))

        elif args.command == 'create-config':
            from .config import write_config_template

            write_config_template(Path(args.output))
            logger.info(f"✅ Created configuration template: {args.output}")

        return 0

    except Exception as e:
        logger.error(f"❌ Error: {e}")
        if getattr(args, 'verbose', False):
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
