"""Location of reference data files for trinucmat.

The reference genome is never bundled with the package. Its location
defaults to a file inside the data directory and can be overridden
with environment variables or passed explicitly to the pipeline.
"""

import os
from pathlib import Path


# Package data directory
_PKG_DATA_DIR = Path(__file__).parent / "data"

# Allow override via environment variable
DATA_DIR = Path(os.environ.get("TRINUCMAT_DATA_DIR", _PKG_DATA_DIR))


# ============================================================
# Reference genome (faidx-style FASTA, provided by the user)
# ============================================================

location_reference_genome = Path(
    os.environ.get("TRINUCMAT_REFERENCE_GENOME", DATA_DIR / "hg19.fa")
)


# ============================================================
# Helper functions
# ============================================================


def check_data_file(file_path: Path, name: str = None) -> Path:
    """Check if a data file exists, provide helpful error if not.

    Parameters
    ----------
    file_path : Path
        Path to check
    name : str, optional
        Human-readable name of the file for error messages

    Returns
    -------
    Path
        The file path if it exists

    Raises
    ------
    FileNotFoundError
        If the file doesn't exist, with instructions on where to put it
    """
    file_path = Path(file_path)
    if not file_path.exists():
        name = name or file_path.name
        raise FileNotFoundError(
            f"{name} not found at {file_path}.\n"
            f"Pass the FASTA explicitly (--ref-genome) or point "
            f"TRINUCMAT_REFERENCE_GENOME to it.\n"
            f"Or manually place it in: {DATA_DIR}"
        )
    return file_path


def list_data_files() -> dict[str, bool]:
    """List all reference data files and their availability.

    Returns
    -------
    dict[str, bool]
        Mapping of file name to whether it exists
    """
    files = {
        "reference_genome": location_reference_genome,
    }
    return {name: path.exists() for name, path in files.items()}


def print_data_status():
    """Print status of all reference data files."""
    print(f"Data directory: {DATA_DIR}\n")
    print("File status:")
    print("-" * 60)

    status = list_data_files()
    for name, exists in status.items():
        symbol = "✓" if exists else "✗"
        status_str = "Found" if exists else "Missing"
        print(f"{symbol} {name:<30} {status_str}")

    missing = [name for name, exists in status.items() if not exists]
    if missing:
        print("\nSet the location of missing files with:")
        print("    export TRINUCMAT_REFERENCE_GENOME=/path/to/genome.fa")
