"""Load maf files.

Read one or several MAF files, keep the columns the pipeline works
with and segregate silent variants from the main table.
"""

import logging
import pandas as pd

from pathlib import Path
from multiprocessing import Pool, cpu_count

from .constants import nucleotides
from .constants import silent_variant_classifications

logger = logging.getLogger(__name__)


# These are the original columns of the MAF files that are needed to
# build the matrix. For a full description check
# :var:`constants.maf_column_descriptions`
cols_to_keep = [
    "Tumor_Sample_Barcode",
    "Chromosome",
    "Start_Position",
    "End_Position",
    "Variant_Classification",
    "Variant_Type",
    "Reference_Allele",
    "Tumor_Seq_Allele2",
]


def filter_db(db, variant_type="SNP"):
    """Filter a MAF-style DataFrame to retain only `variant_type`.

    Parameters
    ----------
    db : pd.DataFrame
        Mutation annotation format (MAF) DataFrame. Must contain a
        'Variant_Type' column.

    variant_type : str
        MAF variant type to keep (e.g. 'SNP', 'DNP', 'INS', 'DEL'),
        case is ignored.

    Returns
    -------
    pd.DataFrame
        Filtered copy containing only rows with the requested
        'Variant_Type'.

    Raises
    ------
    KeyError
        If the 'Variant_Type' column is missing.

    """
    if "Variant_Type" not in db.columns:
        logger.error(
            "Missing 'Variant_Type' column in input DataFrame."
        )
        raise KeyError(
            "Input DataFrame must contain 'Variant_Type' column."
        )

    return db[db["Variant_Type"] == variant_type.upper()].copy()


def validate_alleles_snv(df):
    """Validate SNV alleles in a MAF dataframe.

    Filters rows where both 'Reference_Allele' and 'Tumor_Seq_Allele2'
    are valid nucleotides of length 1 that differ from each other.
    Removes indels, ambiguous codes, and malformed entries.

    Parameters
    ----------
    df : pandas.DataFrame
        Must contain 'Reference_Allele' and 'Tumor_Seq_Allele2'
        columns.

    Returns
    -------
    pandas.DataFrame
        DataFrame with only valid SNVs (one-letter alleles), alleles
        in upper case.

    """
    df = df.copy()
    df["Reference_Allele"] = df["Reference_Allele"].astype(str).str.upper()
    df["Tumor_Seq_Allele2"] = df["Tumor_Seq_Allele2"].astype(str).str.upper()

    is_nuc_ref = df["Reference_Allele"].isin(nucleotides)
    is_nuc_alt = df["Tumor_Seq_Allele2"].isin(nucleotides)
    is_change = df["Reference_Allele"] != df["Tumor_Seq_Allele2"]

    is_valid = is_nuc_ref & is_nuc_alt & is_change
    invalid_entries = df[~is_valid]

    if not invalid_entries.empty:
        relevant_cols = [c for c in cols_to_keep if c in df.columns]
        logger.warning(
            f"Removed {len(invalid_entries)} invalid alleles"
        )
        logger.debug(
            f"Invalid rows:\n{invalid_entries[relevant_cols]}"
        )
    else:
        logger.debug("All entries have valid one-letter alleles")

    return df[is_valid]


def split_silent(df):
    """Segregate silent variants from the main MAF table.

    Returns
    -------
    tuple[pandas.DataFrame, pandas.DataFrame]
        ``(maf, maf_silent)``, the non-silent and the silent entries.
    """
    is_silent = df["Variant_Classification"].isin(
        silent_variant_classifications)
    return (df[~is_silent].reset_index(drop=True),
            df[is_silent].reset_index(drop=True))


def read_maf(maf_file):
    """Read a single MAF file into a compact DataFrame.

    Parameters
    ----------
    maf_file : str or Path
        Tab separated MAF, optionally gzipped. Lines starting with '#'
        are skipped.

    Returns
    -------
    pandas.DataFrame
        The columns in :data:`cols_to_keep`. 'End_Position' is filled
        from 'Start_Position' when the file lacks it.

    Raises
    ------
    KeyError
        If a column other than 'End_Position' is missing.
    """
    maf_file = Path(maf_file)
    logger.debug(f"Reading MAF file: {maf_file.name}")

    df = pd.read_csv(
        maf_file, sep="\t", comment="#", low_memory=False,
        dtype={"Chromosome": str, "Tumor_Sample_Barcode": str}
    )

    if "End_Position" not in df.columns and "Start_Position" in df.columns:
        df["End_Position"] = df["Start_Position"]

    missing = [c for c in cols_to_keep if c not in df.columns]
    if missing:
        logger.error(f"{maf_file.name} is missing columns {missing}")
        raise KeyError(
            f"MAF file {maf_file} lacks required columns: {missing}")

    return df[cols_to_keep]


def load_maf_files(maf_files):
    """Load one or more MAF files and segregate silent variants.

    Files are read in parallel when more than one is given.

    Parameters
    ----------
    maf_files : str, Path or list of them
        MAF file(s), or a directory whose '.maf' and '.maf.gz' files
        are all read.

    Returns
    -------
    tuple[pandas.DataFrame, pandas.DataFrame]
        ``(maf, maf_silent)`` as returned by :func:`split_silent`.

    Raises
    ------
    ValueError
        If no MAF files are found.
    """
    if isinstance(maf_files, (str, Path)):
        maf_files = [maf_files]

    all_files = []
    for maf_file in map(Path, maf_files):
        if maf_file.is_dir():
            all_files.extend(
                sorted(f for f in maf_file.iterdir()
                       if f.is_file()
                       and f.name.endswith((".maf", ".maf.gz"))))
        else:
            all_files.append(maf_file)

    if not all_files:
        raise ValueError("No .maf files found.")

    logger.info(f"Found {len(all_files)} MAF files to process.")

    if len(all_files) == 1:
        all_dataframes = [read_maf(all_files[0])]
    else:
        with Pool(processes=min(cpu_count(), len(all_files))) as pool:
            all_dataframes = pool.map(read_maf, all_files)

    combined_df = pd.concat(all_dataframes, ignore_index=True)
    logger.info(
        f"Loaded {len(combined_df)} variants from "
        f"{combined_df['Tumor_Sample_Barcode'].nunique()} samples."
    )

    return split_silent(combined_df)
