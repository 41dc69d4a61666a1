"""Classify substitutions into the 96 trinucleotide classes."""

import logging

from .constants import substitution_conversion

logger = logging.getLogger(__name__)


def normalize_substitution(substitution):
    """Refer a substitution to the pyrimidine of the mutated base pair.

    The mapping is total over the 12 possible substitutions and
    idempotent: an already normalized substitution maps to itself.

    Parameters
    ----------
    substitution : str
        Substitution as 'REF>ALT', e.g. 'G>A'.

    Returns
    -------
    str
        One of 'C>A', 'C>G', 'C>T', 'T>A', 'T>C', 'T>G'.

    Raises
    ------
    ValueError
        If `substitution` is not one of the 12 single base changes.

    Examples
    --------
    >>> normalize_substitution('G>A')
    'C>T'
    >>> normalize_substitution('C>T')
    'C>T'
    """
    try:
        return substitution_conversion[substitution.upper()]
    except (KeyError, AttributeError):
        raise ValueError(
            f"Unknown substitution {substitution!r}") from None


def substitution_motif(trinucleotide, substitution):
    """Build a motif like 'T[C>T]A' from a trinucleotide.

    The flanking bases are taken as they are, without reverse
    complementing them when the substitution was normalized.
    """
    return f"{trinucleotide[0]}[{substitution}]{trinucleotide[2]}"


def classify_substitutions(contexts):
    """Add substitution and substitution motif columns.

    Parameters
    ----------
    contexts : pandas.DataFrame
        Must contain 'Reference_Allele', 'Tumor_Seq_Allele2' and
        'trinucleotide' (three bases, validated).

    Returns
    -------
    pandas.DataFrame
        Copy of `contexts` with the new columns:

        - 'Substitution' : observed change, e.g. 'G>A'
        - 'SubstitutionMotif' : e.g. 'T[G>A]A'
        - 'SubstitutionType' : pyrimidine change, e.g. 'C>T'
        - 'SubstitutionTypeMotif' : e.g. 'T[C>T]A', one of
          :data:`constants.canonical_types_order`
    """
    df = contexts.copy()
    trinucleotide = df["trinucleotide"].astype(str)

    df["Substitution"] = (df["Reference_Allele"].str.upper() + ">"
                          + df["Tumor_Seq_Allele2"].str.upper())
    df["SubstitutionMotif"] = [
        substitution_motif(tri, sub)
        for tri, sub in zip(trinucleotide, df["Substitution"])]
    df["SubstitutionType"] = df["Substitution"].map(
        normalize_substitution)
    df["SubstitutionTypeMotif"] = [
        substitution_motif(tri, sub)
        for tri, sub in zip(trinucleotide, df["SubstitutionType"])]

    logger.debug(
        "Substitution types:\n"
        f"{df['SubstitutionType'].value_counts().sort_index()}")
    return df
