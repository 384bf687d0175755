#!/usr/bin/env python3
"""Main entry point for TrustGraph."""

import sys

from trust_graph.cli import main


if __name__ == "__main__":
    sys.exit(main())
