# Copyright 2023 WolkenVision AG. All rights reserved.
"""Command-line interface."""
from pcd_reader.cli import main

if __name__ == "__main__":
    main()
