#!/usr/bin/env python3
# run_solver.py
# This file is part of Arbor - A Truth Tree Solver
#
# Command-line interface for solving truth trees with configurable logging levels

import sys
import argparse
from pathlib import Path
from typing import List, Optional

from core.solver import TruthTreeSolver
from core.strategies import STRATEGIES, get_strategy
from parser import parse
from parser.exceptions import ParseError
from utils.logger import configure_logging, get_logger
from utils.tree_document import DocumentFormatError, read_document, write_document
from utils.tree_visualizer import format_tree, render_tree

DOCUMENT_SUFFIX = ".willow"


def configure_logging_for_solver(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging levels for the solver.

    Args:
        verbose: Enable INFO level logging
        debug: Enable DEBUG level logging (overrides verbose)
    """
    configure_logging(verbose=verbose, debug=debug)


def validate_premises(premises: List[str]) -> None:
    """Check that every premise parses.

    Raises:
        ParseError: Names the first malformed premise
    """
    logger = get_logger()
    for text in premises:
        try:
            parse(text)
        except ParseError as e:
            logger.validation_result(False, f"Premise '{text}' does not parse")
            raise ParseError(f"Premise '{text}': {e}") from e
        logger.validation_result(True, f"Premise '{text}' parsed")


def default_output_path(input_path: Optional[Path]) -> Path:
    """Result file name derived from the input, '<name>_result.willow'."""
    if input_path is None:
        return Path(f"premises_result{DOCUMENT_SUFFIX}")
    name = input_path.name
    if name.endswith(DOCUMENT_SUFFIX):
        name = name[: -len(DOCUMENT_SUFFIX)]
    return input_path.with_name(f"{name}_result{DOCUMENT_SUFFIX}")


def print_final_analysis(solver: TruthTreeSolver) -> None:
    """Print the outcome of solving: proof, countermodels, or what is missing."""
    finished, message = solver.tree.is_correct()
    print(f"Tree complete: {'yes' if finished else 'no'} ({message})")

    if solver.is_closed():
        print("All branches closed: the premises are jointly unsatisfiable.")
        return

    for leaf_id, model in zip(solver.open_branches(), solver.countermodels()):
        assignment = ", ".join(f"{atom}={'T' if value else 'F'}" for atom, value in model.items())
        print(f"Open branch at node {leaf_id}: {assignment or '(no literals)'}")


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser for command line interface.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        description="Arbor Truth Tree Solver",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_solver.py -i argument.willow
  python run_solver.py -i argument.willow --steps 1 -o next.willow
  python run_solver.py -p "P -> Q" -p "P" -p "~Q" --print-tree
  python run_solver.py -i argument.willow -s less-branch --render svg

Formula syntax:
  negation ¬ ~ !   conjunction ∧ &   disjunction ∨ |
  conditional → ->   biconditional ↔ <->
        """,
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "-i", "--input", type=Path, help="Path to a tree document (.willow)"
    )
    source.add_argument(
        "-p", "--premise", action="append", help="Premise formula (repeatable)"
    )

    parser.add_argument(
        "-o", "--output", type=Path, help="Where to write the resulting tree document"
    )

    parser.add_argument(
        "-s",
        "--strategy",
        choices=sorted(STRATEGIES),
        default="first",
        help="Policy for choosing the next node to decompose",
    )

    parser.add_argument(
        "--steps", type=int, help="Perform this many expansion steps instead of solving fully"
    )

    parser.add_argument(
        "--max-steps", type=int, help="Give up a full solve after this many steps"
    )

    parser.add_argument(
        "--no-clean",
        action="store_true",
        help="Keep the expansion recorded in the input instead of restarting from the premises",
    )

    parser.add_argument(
        "--render", metavar="FORMAT", help="Also render the tree with Graphviz (png, svg, ...)"
    )

    parser.add_argument(
        "--print-tree", action="store_true", help="Print the resulting tree as an outline"
    )

    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )

    parser.add_argument(
        "--debug", action="store_true", help="Enable debug output (overrides --verbose)"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the solver application.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    configure_logging_for_solver(verbose=args.verbose, debug=args.debug)
    logger = get_logger()

    try:
        strategy = get_strategy(args.strategy)

        if args.input is not None:
            tree = read_document(args.input)
            solver = TruthTreeSolver(tree, clean=not args.no_clean, strategy=strategy)
        else:
            validate_premises(args.premise)
            solver = TruthTreeSolver.from_premises(args.premise, strategy=strategy)

        if args.steps is not None:
            for _ in range(args.steps):
                if not solver.expand():
                    break
        else:
            steps = solver.expand_all(max_steps=args.max_steps)
            logger.info(f"Solved in {steps} steps")

        output_path = args.output or default_output_path(args.input)
        write_document(solver.tree, output_path)
        logger.info(f"Tree written to {output_path}")

        if args.print_tree:
            print(format_tree(solver.tree))

        if args.render:
            render_tree(solver.tree, output_path.stem, fmt=args.render)

        finished = solver.is_finished()
        logger.final_result(finished, solver.tree.is_correct()[1])
        print_final_analysis(solver)

        return 0

    except DocumentFormatError as e:
        logger.error(f"Tree document error: {e}")
        return 1

    except ParseError as e:
        logger.error(f"Formula parsing error: {e}")
        return 2

    except OSError as e:
        logger.error(f"File error: {e}")
        return 3

    except KeyboardInterrupt:
        logger.error("Solving interrupted by user")
        return 4

    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        import traceback

        traceback.print_exc()
        return 5


if __name__ == "__main__":
    sys.exit(main())
