"""Entry point for `python -m claude_history_viewer`."""

import sys


def main():
    from claude_history_viewer.app import run
    sys.exit(run())


if __name__ == "__main__":
    main()
