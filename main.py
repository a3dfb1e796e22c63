"""
main.py

Entry point. Launches the Gradio UI,
or the terminal rehearsal mode with --cli.
"""

import argparse

from mootcourt.logging_config import configure_logging


def main() -> None:
    parser = argparse.ArgumentParser(description="AI Moot Court")
    parser.add_argument("--cli", action="store_true", help="rehearse in the terminal instead of the browser")
    args = parser.parse_args()

    configure_logging()

    if args.cli:
        from mootcourt.cli import run_cli

        run_cli()
        return

    from mootcourt.ui import create_ui

    demo = create_ui()
    demo.launch()


if __name__ == "__main__":
    main()
