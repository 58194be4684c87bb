"""Command-line interface for bloodline."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .. import __version__
from ..config import default_config
from ..graph.graph import Graph
from ..io.gedcom_import import graph_from_gedcom, rows_from_gedcom
from ..io.snapshot import load_snapshot, save_snapshot

GEDCOM_SUFFIXES = {'.ged', '.gedcom'}


def load_graph(filepath: str, args: argparse.Namespace) -> Graph:
    """Load a snapshot (.json) or GEDCOM (.ged) file with the CLI options."""
    changes = {}
    if args.sentinel is not None:
        changes['lastname_sentinel'] = args.sentinel
    if args.max_depth is not None:
        changes['max_kinship_depth'] = args.max_depth
    config = default_config.replace(**changes)

    if Path(filepath).suffix.lower() in GEDCOM_SUFFIXES:
        return graph_from_gedcom(filepath, config)
    return load_snapshot(filepath, config)


def print_statistics(graph: Graph) -> None:
    """Print statistics about the loaded graph.

    Args:
        graph: Graph instance
    """
    stats = graph.stats()

    print("\n" + "=" * 60)
    print("GRAPH STATISTICS")
    print("=" * 60)
    print(f"Total Persons:          {stats['persons']:,}")
    print(f"Lineage Members:        {stats['members']:,}")
    print(f"Unions:                 {stats.get('unions', 0):,}")
    print(f"Filiations:             {stats.get('filiations', 0):,}")
    print(f"Dropped Rows:           {stats.get('dropped_rows', 0):,}")
    print()
    print(f"Males:                  {stats['males']:,}")
    print(f"Females:                {stats['females']:,}")
    print(f"Unknown Sex:            {stats['unknown_sex']:,}")

    if 'earliest_year' in stats and 'latest_year' in stats:
        print()
        print(f"Date Range:             {stats['earliest_year']} - {stats['latest_year']}")

    print("=" * 60 + "\n")


def stats_command(graph: Graph, args: argparse.Namespace) -> int:
    print_statistics(graph)
    return 0


def search_command(graph: Graph, args: argparse.Namespace) -> int:
    hits = graph.search_index.search_labels(args.query, limit=args.limit)
    if not hits:
        suggestions = graph.search_index.suggest(args.query, limit=args.limit)
        if not suggestions:
            print("No match found.")
            return 0
        print("No exact match. Did you mean:")
        for person_id, score in suggestions:
            print(f"  {graph.person(person_id)}  [{person_id}]  ({score:.0f}%)")
        return 0

    for i, hit in enumerate(hits, 1):
        print(f"{i}. {hit.search_by}  [{hit.id}]")
    return 0


def kinship_command(graph: Graph, args: argparse.Namespace) -> int:
    for person_id in (args.person_a, args.person_b):
        if not graph.has(person_id):
            print(f"Error: Unknown person: {person_id}", file=sys.stderr)
            return 1

    relation = graph.relation_of(args.person_a, args.person_b)
    a = graph.person(args.person_a)
    b = graph.person(args.person_b)
    print(f"{a} is the {relation.value} of {b}")

    kin = graph.kinship_of(args.person_a, args.person_b)
    if kin is not None:
        print(f"Common ancestor: {kin.common}  (depths {kin.depth_a}/{kin.depth_b})")
        if kin.path:
            print("Path: " + " > ".join(str(p) for p in kin.path))
    return 0


def ancestors_command(graph: Graph, args: argparse.Namespace) -> int:
    if not graph.has(args.person):
        print(f"Error: Unknown person: {args.person}", file=sys.stderr)
        return 1

    if args.bloodline:
        chain = graph.bloodline_id_of(args.person, args.max_steps)
        name = graph.bloodline_name_of(args.person, args.max_steps)
        if name:
            print(name)
    else:
        chain = graph.ancestors_id_of(args.person)
    for depth, person_id in enumerate(chain):
        print(f"{depth:>3}  {graph.person(person_id)}  [{person_id}]")
    return 0


def convert_command(args: argparse.Namespace) -> int:
    persons, unions, filiations = rows_from_gedcom(args.file)
    save_snapshot(args.output, persons, unions, filiations)
    print(f"Wrote {len(persons)} persons, {len(unions)} unions and "
          f"{len(filiations)} filiations to {args.output}")
    return 0


COMMANDS = {
    'stats': stats_command,
    'search': search_command,
    'kinship': kinship_command,
    'ancestors': ancestors_command,
}


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog='bloodline',
        description='Query family graphs: search, ancestry and kinship.',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )
    parser.add_argument(
        '--sentinel',
        help='Root family name seeding the lineage'
    )
    parser.add_argument(
        '--max-depth',
        type=int,
        help='Generations beyond which relations are distant (default: 4)'
    )

    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands'
    )

    stats_parser = subparsers.add_parser('stats', help='Display graph statistics')
    stats_parser.add_argument('file', help='Snapshot (.json) or GEDCOM (.ged) file')

    search_parser = subparsers.add_parser('search', help='Search persons')
    search_parser.add_argument('file', help='Snapshot (.json) or GEDCOM (.ged) file')
    search_parser.add_argument('query', help='Free text or key:value query')
    search_parser.add_argument(
        '-n', '--limit',
        type=int,
        default=20,
        help='Maximum number of results (default: 20)'
    )

    kinship_parser = subparsers.add_parser('kinship', help='Name the relation of A to B')
    kinship_parser.add_argument('file', help='Snapshot (.json) or GEDCOM (.ged) file')
    kinship_parser.add_argument('person_a', help='Id of person A')
    kinship_parser.add_argument('person_b', help='Id of person B')

    ancestors_parser = subparsers.add_parser('ancestors', help='List the ancestor chain')
    ancestors_parser.add_argument('file', help='Snapshot (.json) or GEDCOM (.ged) file')
    ancestors_parser.add_argument('person', help='Person id')
    ancestors_parser.add_argument(
        '-b', '--bloodline',
        action='store_true',
        help='Follow fathers only'
    )
    ancestors_parser.add_argument(
        '--max-steps',
        type=int,
        help='Maximum chain length for --bloodline'
    )

    convert_parser = subparsers.add_parser('convert', help='Convert a GEDCOM file to a snapshot')
    convert_parser.add_argument('file', help='Path to the GEDCOM file')
    convert_parser.add_argument('-o', '--output', required=True, help='Snapshot output path')

    return parser


def main(argv: Optional[list] = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s'
    )

    if not args.command:
        parser.print_help()
        return 0

    try:
        if args.command == 'convert':
            return convert_command(args)
        graph = load_graph(args.file, args)
        return COMMANDS[args.command](graph, args)
    except (OSError, ValueError, TypeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
