import argparse
import logging
import pathlib
import sys
from . import extract_path, format_report, GlbError, GltfError, TRUNCATE_LIMIT

logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog='gltfdump',
                                     description='Dump materials, meshes and accessor data of a .glb or .gltf file as JSON.')
    parser.add_argument('input', type=pathlib.Path, help='path to .glb or .gltf')
    parser.add_argument('-o', '--output', type=pathlib.Path,
                        help='output json (default: <input>.json)')
    parser.add_argument('--limit', type=int, default=TRUNCATE_LIMIT,
                        help=f'truncate accessor values after N elements (default: {TRUNCATE_LIMIT})')
    parser.add_argument('--allow-missing-binary', action='store_true',
                        help='report metadata even if there is no binary buffer')
    parser.add_argument('-v', '--verbose', action='store_true')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(levelname)s:%(name)s:%(message)s')

    if args.limit < 1:
        parser.error('--limit must be positive')

    try:
        report = extract_path(args.input, limit=args.limit,
                              require_binary=not args.allow_missing_binary)
    except (GlbError, GltfError, OSError) as e:
        logger.error('%s: %s', args.input, e)
        return 1

    output = args.output or args.input.with_name(args.input.name + '.json')
    output.write_text(format_report(report), encoding='utf-8')

    metadata = report['metadata']
    print(f'Extracted binary data from {args.input.name} to {output.name}')
    print(f'Total bytes processed: {metadata.get("totalBytes", 0)}')
    print(f'Meshes mapped: {len(report["meshes"])}')
    print(f'Materials: {len(report["materials"])}')
    print(f'Arrays truncated at {metadata["truncationLimit"]} items')
    return 0


if __name__ == '__main__':
    sys.exit(main())
