"""
CLI Argument Parser

This module handles command-line argument parsing for promptfoo-action.
Inputs come from the environment set by action.yml; the flags below only
override them for local runs.
"""

import argparse


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser for the promptfoo-action CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        description="promptfoo-action - Evaluate changed prompts with promptfoo"
    )
    subparsers = parser.add_subparsers(dest="command", help="Subcommands")

    parser_evaluate = subparsers.add_parser(
        "evaluate",
        help="Detect changes and run a promptfoo evaluation when needed"
    )
    parser_evaluate.add_argument(
        "--force",
        action="store_true",
        help="Run the evaluation even when nothing changed"
    )

    parser_detect = subparsers.add_parser(
        "detect-changes",
        help="Only decide whether an evaluation is needed"
    )
    parser_detect.add_argument(
        "--force",
        action="store_true",
        help="Report a forced run"
    )

    parser_manual = subparsers.add_parser(
        "manual-run",
        help="Evaluate one generated prompt against a provider and test file"
    )
    parser_manual.add_argument(
        "--prompt-file",
        help="Generated prompt name to look up under prompts-output/"
    )
    parser_manual.add_argument(
        "--input-file",
        help="Test cases file passed to --tests"
    )
    parser_manual.add_argument(
        "--provider",
        help="Provider passed to --filter-providers"
    )

    return parser
