"""Command-line interface for trinucmat.

This module provides command-line access to trinucmat utilities.

Usage:
    python -m trinucmat matrix       # Build matrix and APOBEC scores
    python -m trinucmat check-data   # Check reference data status
"""

import sys


def main():
    """Main CLI entry point."""
    if len(sys.argv) < 2:
        print(__doc__)
        print("\nAvailable commands:")
        print("  matrix        Build the 96-class matrix from MAF files")
        print("  check-data    Check status of reference data files")
        return 1

    command = sys.argv[1]

    if command == "matrix":
        from trinucmat.trinucleotide_matrix import main as matrix_main

        return matrix_main(sys.argv[2:])

    elif command == "check-data":
        from trinucmat.locations import print_data_status

        print_data_status()
        return 0

    else:
        print(f"Unknown command: {command}")
        print(__doc__)
        return 1


if __name__ == "__main__":
    sys.exit(main())
