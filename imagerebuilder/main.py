#!/usr/bin/env python3
"""
Main entry point for image-rebuilder.
"""
from .cli.rebuild_cli import rebuild


def main():
    """Run the rebuild command line"""
    rebuild(prog_name='image-rebuilder')


if __name__ == "__main__":
    main()
