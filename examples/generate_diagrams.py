"""
Generate flavour-ordered diagrams and print them.

    python examples/generate_diagrams.py 4 6
    python examples/generate_diagrams.py 6 6 --exclude "3,3" --detailed
"""
import argparse

from fodgetools import configure_logging, filter_flav_split, generate, parse_flav_splits, summarise


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("order", type=int, help="Power of momentum, even and >= 2")
    parser.add_argument("n_legs", type=int, help="Number of external legs, even and >= 4")
    parser.add_argument("--no-singlets", action="store_true")
    parser.add_argument("--keep-zero", action="store_true",
                        help="Keep diagrams whose flavour structure vanishes")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--include", default=None, help='Keep only these splits, e.g. "2,4 3,3"')
    group.add_argument("--exclude", default=None, help="Drop these splits")
    parser.add_argument("--detailed", action="store_true", help="Print trees and labellings")
    parser.add_argument("--draw", default=None, help="Save a drawing of each diagram with this prefix")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    configure_logging("DEBUG" if args.verbose else None)

    diagrams = generate(args.order, args.n_legs,
                        singlets=not args.no_singlets, remove_zero=not args.keep_zero)
    if args.include:
        filter_flav_split(diagrams, parse_flav_splits(args.include), include=True)
    if args.exclude:
        filter_flav_split(diagrams, parse_flav_splits(args.exclude), include=False)

    for i, d in enumerate(diagrams):
        print(f"[{i}] {d.describe(args.detailed)}")
    print()
    print(summarise(diagrams))

    if args.draw:
        from fodgetools.viz import draw_diagram

        for i, d in enumerate(diagrams):
            draw_diagram(d, save_path=f"{args.draw}_{i}.png")


if __name__ == "__main__":
    main()
