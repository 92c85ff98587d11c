"""
Batch resource report for Quake 2 maps.

    python inspect_maps.py maps/ extra/q2dm1.bsp --pretty > report.json

Directories are scanned (non-recursively) for *.bsp files.
"""
import argparse
import json
import logging
import os
import sys

from inspector import BSPHeaderError, load_bsp

log = logging.getLogger('inspect_maps')


def _collect_paths(targets: list) -> list:
    paths = []
    for target in targets:
        if os.path.isdir(target):
            for entry in sorted(os.scandir(target), key=lambda e: e.name.lower()):
                if entry.is_file() and entry.name.lower().endswith('.bsp'):
                    paths.append(entry.path)
        else:
            paths.append(target)
    return paths


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='List the assets and entity counts of Q2 BSP maps.')
    parser.add_argument('paths', nargs='+', help='.bsp files or directories containing them')
    parser.add_argument('--pretty', action='store_true', help='indent the JSON output')
    parser.add_argument('-v', '--verbose', action='store_true', help='debug logging on stderr')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(levelname)s %(name)s: %(message)s',
        stream=sys.stderr,
    )

    paths = _collect_paths(args.paths)
    if not paths:
        log.error('no .bsp files found')
        return 1

    failed = 0
    results = []
    for path in paths:
        name = os.path.basename(path)
        try:
            result = load_bsp(path)
        except (OSError, BSPHeaderError) as e:
            log.error('%s: %s', path, e)
            results.append({'file': name, 'fatal': str(e)})
            failed += 1
            continue
        for msg in result.errors:
            log.warning('%s: %s', name, msg)
        results.append({'file': name, **result.to_dict()})

    json.dump({'results': results}, sys.stdout, indent=2 if args.pretty else None)
    sys.stdout.write('\n')
    log.info('processed %d file(s), %d failed', len(paths), failed)
    return 1 if failed else 0


if __name__ == '__main__':
    sys.exit(main())
