"""Prepare variants for trinucleotide context extraction.

Remove silent variants (optionally adding back the silent pool),
exclude and rename contigs, and keep single nucleotide variants only.
"""

import logging
import pandas as pd

from .constants import silent_variant_classifications
from .errors import FatalInputError
from .load_maf_files import filter_db
from .load_maf_files import validate_alleles_snv

logger = logging.getLogger(__name__)


required_columns = [
    "Tumor_Sample_Barcode",
    "Chromosome",
    "Start_Position",
    "Variant_Classification",
    "Variant_Type",
    "Reference_Allele",
    "Tumor_Seq_Allele2",
]


def rename_contigs(chromosomes, prefix, add=True):
    """Add or remove `prefix` from contig names.

    Parameters
    ----------
    chromosomes : pandas.Series
        Contig names.
    prefix : str
        Prefix, e.g. 'chr'.
    add : bool, default True
        If True, `prefix` is prepended to every name. If False, every
        literal occurrence of `prefix` is removed (no regular
        expressions involved).

    Returns
    -------
    pandas.Series
    """
    chromosomes = chromosomes.astype(str)
    if add:
        return prefix + chromosomes
    return chromosomes.str.replace(prefix, "", regex=False)


def prepare_variants(maf, maf_silent=None, *, use_syn=True,
                     ignore_chr=None, prefix=None, add=True):
    """Filter and normalize variants before context extraction.

    Parameters
    ----------
    maf : pandas.DataFrame
        MAF-style table. Must contain the columns in
        :data:`required_columns`. 'End_Position' is optional and
        defaults to 'Start_Position'.
    maf_silent : pandas.DataFrame or None
        Silent variants segregated from `maf` when it was read.
    use_syn : bool, default True
        Whether to add `maf_silent` back into the analysis.
    ignore_chr : iterable of str or None
        Contigs to remove (exact name match, before renaming).
    prefix : str or None
        Prefix to add or remove from contig names.
    add : bool, default True
        Whether `prefix` is added (True) or removed (False).

    Returns
    -------
    pandas.DataFrame
        Single nucleotide variants only, with a fresh index and
        integer positions.

    Raises
    ------
    KeyError
        If a required column is missing.
    FatalInputError
        If no single nucleotide variants are left.
    """
    missing = [c for c in required_columns if c not in maf.columns]
    if missing:
        logger.error(f"Missing columns {missing} in input DataFrame.")
        raise KeyError(
            f"Input DataFrame must contain columns: {missing}")

    # in case the maf was read without removing silent variants
    db = maf[~maf["Variant_Classification"].isin(
        silent_variant_classifications)]
    n_silent = len(maf) - len(db)
    if n_silent:
        logger.info(f"Removed {n_silent} silent variants from main table")

    if use_syn and maf_silent is not None and len(maf_silent):
        logger.info(f"Adding {len(maf_silent)} synonymous variants")
        db = pd.concat([db, maf_silent], ignore_index=True, sort=False)

    db = db.copy()
    db["Chromosome"] = db["Chromosome"].astype(str)

    if ignore_chr:
        ignored = db["Chromosome"].isin(list(ignore_chr))
        logger.info(
            f"Ignoring {ignored.sum()} variants on {sorted(ignore_chr)}")
        db = db[~ignored].copy()

    if prefix is not None:
        db["Chromosome"] = rename_contigs(db["Chromosome"], prefix, add)

    snvs = filter_db(db, "SNP")
    snvs = validate_alleles_snv(snvs).copy()

    if snvs.empty:
        raise FatalInputError(
            "No more single nucleotide variants left after filtering "
            "for SNP in Variant_Type field.")

    if "End_Position" not in snvs.columns:
        snvs["End_Position"] = snvs["Start_Position"]
    snvs["End_Position"] = snvs["End_Position"].fillna(
        snvs["Start_Position"])
    snvs["Start_Position"] = snvs["Start_Position"].astype(int)
    snvs["End_Position"] = snvs["End_Position"].astype(int)

    logger.info(
        f"{len(snvs)} single nucleotide variants from "
        f"{snvs['Tumor_Sample_Barcode'].nunique()} samples")

    return snvs.reset_index(drop=True)
