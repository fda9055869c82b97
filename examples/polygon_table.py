"""
Fill a table of polygon diagrams and print symmetry factors.

    python examples/polygon_table.py --max-ngons 8 --max-order 2 --split --singlet
"""
import argparse

from fodgetools import DiagramTable, configure_logging
from fodgetools.legacy import describe_comprep


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--max-ngons", type=int, default=6)
    parser.add_argument("--max-order", type=int, default=1,
                        help="Largest order label; label l is O(p^(2(l+1)))")
    parser.add_argument("--split", action="store_true", help="Add flavour-split diagrams")
    parser.add_argument("--singlet", action="store_true", help="Add singlet-propagator diagrams")
    parser.add_argument("--show-reps", action="store_true")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    configure_logging("DEBUG" if args.verbose else None)

    tab = DiagramTable(args.max_ngons, args.max_order, split=args.split, singlet=args.singlet)
    tab.fill()

    print("=" * 70)
    for order in range(args.max_order + 1):
        for ngons in range(4, args.max_ngons + 1, 2):
            for d in tab.get(order, ngons):
                print(d.describe())
                if args.show_reps:
                    print(describe_comprep(d.rep, indent=1))
    print("=" * 70)
    print(tab.summary())


if __name__ == "__main__":
    main()
