"""Mutational matrix construction."""

import logging

from .constants import canonical_types_order


logger = logging.getLogger(__name__)


def build_mutational_matrix(classified):
    """Build the samples x 96 matrix of substitution type motifs.

    Parameters
    ----------
    classified : pandas.DataFrame
        Must contain 'Tumor_Sample_Barcode' and
        'SubstitutionTypeMotif'.

    Returns
    -------
    pandas.DataFrame
        Integer counts, one row per sample (index
        'Tumor_Sample_Barcode') and exactly the 96 columns of
        :data:`constants.canonical_types_order` in that order.
        Classes never observed (possible for cancer types with a low
        mutation rate or for small cohorts) are zero columns.
    """
    logger.info("Creating mutation matrix...")

    counts = (classified
              .groupby(["Tumor_Sample_Barcode", "SubstitutionTypeMotif"])
              .size()
              .unstack(fill_value=0))

    unexpected = [c for c in counts.columns
                  if c not in canonical_types_order]
    if unexpected:
        logger.warning(
            f"Ignoring {len(unexpected)} non canonical motifs: "
            f"{unexpected}")

    missing = [c for c in canonical_types_order if c not in counts.columns]
    if missing:
        logger.debug(f"Adding {len(missing)} absent classes as zeros")

    matrix = counts.reindex(columns=canonical_types_order,
                            fill_value=0).astype(int)
    matrix.columns.name = None

    logger.info(
        f"matrix of dimension {matrix.shape[0]}x{matrix.shape[1]}")
    return matrix


def to_sigprofiler_format(matrix):
    """Transpose a samples x 96 matrix into SigProfiler's layout.

    SigProfiler tools expect mutation types as rows, in a first column
    named 'MutationType', and samples as columns.

    Parameters
    ----------
    matrix : pandas.DataFrame
        Output of :func:`build_mutational_matrix`.

    Returns
    -------
    pandas.DataFrame
    """
    out = matrix.T.reindex(canonical_types_order, fill_value=0)
    out.index.name = "MutationType"
    out.columns.name = None
    return out.reset_index()
