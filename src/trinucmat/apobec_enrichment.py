"""APOBEC enrichment estimation.

Enrichment is computed as described by Roberts et al. (2013)::

    E = (n_tcw * background_C) / (n_C * background_tcw)

where n_tcw is the number of mutations within the APOBEC motifs (see
:data:`constants.apobec_enrichment_motifs`), n_C the number of
mutated C and G (C>T and C>G type mutations), and background_C and
background_tcw the number of C bases and TCW motifs found within
+/- 20bp of each mutation.

A one-sided Fisher's exact test tells whether the APOBEC motif
mutations are over-represented with respect to that background.

References
----------
Roberts SA, Lawrence MS, Klimczak LJ, et al. An APOBEC cytidine
deaminase mutagenesis pattern is widespread in human cancers. Nature
Genetics. 2013;45(9):970-976. doi:10.1038/ng.2702
"""

import logging
import math

import numpy as np
import pandas as pd
from scipy.stats import fisher_exact
from scipy.stats.contingency import odds_ratio

from .constants import enrichment_cutoff
from .models import EnrichmentResult
from .models import ExactTestResult

logger = logging.getLogger(__name__)


result_columns = ["apobec_enrichment_ratio", "fisher_pvalue",
                  "odds_ratio", "ci_low", "ci_high", "apobec_enriched"]


def apobec_enrichment_ratio(n_tcw_mutations, n_apobec_mutations,
                            n_bg_tcw, n_bg_c):
    """Return the APOBEC enrichment score of a sample.

    Parameters
    ----------
    n_tcw_mutations : int
        Mutations in APOBEC motifs ('tCw_to_G+tCw_to_T').
    n_apobec_mutations : int
        APOBEC type mutations ('n_C>G_and_C>T').
    n_bg_tcw : int
        TCW motifs in the background windows.
    n_bg_c : int
        C bases in the background windows.

    Returns
    -------
    float
        The enrichment, or NaN if any denominator is zero.
    """
    if n_apobec_mutations == 0 or n_bg_c == 0 or n_bg_tcw == 0:
        return math.nan
    return ((n_tcw_mutations / n_apobec_mutations)
            / (n_bg_tcw / n_bg_c))


def contingency_table(summary_row):
    """Build the 2x2 table for the exact test of one sample.

    ::

        [[tCw_to_G+tCw_to_T,   n_C>G_and_C>T - tCw_to_G+tCw_to_T],
         [n_bg_C + n_bg_tcw,   n_bg_C - n_bg_tcw                ]]

    The first row holds the mutations in and out of APOBEC motifs, the
    second the background counts they are compared with. The
    background cells are inherited as they are; in particular the
    first one adds, rather than isolates, the TCW motifs.

    Parameters
    ----------
    summary_row : mapping or pandas.Series
        A row of :func:`summarize_samples.summarize_samples`.

    Returns
    -------
    numpy.ndarray
    """
    n_tcw = int(summary_row["tCw_to_G+tCw_to_T"])
    n_apobec = int(summary_row["n_C>G_and_C>T"])
    n_bg_tcw = int(summary_row["n_bg_tcw"])
    n_bg_c = int(summary_row["n_bg_C"])
    return np.array([[n_tcw, n_apobec - n_tcw],
                     [n_bg_c + n_bg_tcw, n_bg_c - n_bg_tcw]])


def exact_enrichment_test(table, *, alternative="greater",
                          confidence_level=0.95):
    """One-sided Fisher's exact test on a 2x2 table.

    Parameters
    ----------
    table : array_like
        2x2 table of non-negative counts.
    alternative : {'greater', 'less', 'two-sided'}, default 'greater'
        Alternative hypothesis on the odds ratio.
    confidence_level : float, default 0.95
        Confidence level of the odds ratio interval.

    Returns
    -------
    ExactTestResult
        p-value, conditional maximum likelihood odds ratio and its
        confidence interval. Every field is NaN when a row or a column
        of `table` adds up to zero, in which case the test is
        undefined.

    Raises
    ------
    ValueError
        If `table` is not 2x2 or has negative entries.
    """
    table = np.asarray(table)
    if table.shape != (2, 2):
        raise ValueError(f"Expected a 2x2 table, got shape {table.shape}")
    if (table < 0).any():
        raise ValueError(f"Negative counts in contingency table:\n{table}")
    table = table.astype(np.int64)

    if (table.sum(axis=0) == 0).any() or (table.sum(axis=1) == 0).any():
        return ExactTestResult(math.nan, math.nan, math.nan, math.nan)

    _, pvalue = fisher_exact(table, alternative=alternative)
    result = odds_ratio(table, kind="conditional")
    ci = result.confidence_interval(confidence_level=confidence_level,
                                    alternative=alternative)

    return ExactTestResult(pvalue=float(pvalue),
                           odds_ratio=float(result.statistic),
                           ci_low=float(ci.low),
                           ci_high=float(ci.high))


def score_sample(summary_row, *, cutoff=enrichment_cutoff):
    """Compute the APOBEC enrichment of one sample.

    Parameters
    ----------
    summary_row : mapping or pandas.Series
        A row of :func:`summarize_samples.summarize_samples`.
    cutoff : float, default 2
        Samples with an enrichment above `cutoff` are enriched.

    Returns
    -------
    EnrichmentResult
    """
    ratio = apobec_enrichment_ratio(summary_row["tCw_to_G+tCw_to_T"],
                                    summary_row["n_C>G_and_C>T"],
                                    summary_row["n_bg_tcw"],
                                    summary_row["n_bg_C"])
    test = exact_enrichment_test(contingency_table(summary_row))
    return EnrichmentResult(apobec_enrichment_ratio=ratio,
                            fisher_pvalue=test.pvalue,
                            odds_ratio=test.odds_ratio,
                            confidence_interval=test.confidence_interval,
                            enriched=bool(ratio > cutoff))


def estimate_apobec_enrichment(summary, *, cutoff=enrichment_cutoff):
    """Add APOBEC enrichment columns to the per-sample summary.

    Parameters
    ----------
    summary : pandas.DataFrame
        Output of :func:`summarize_samples.summarize_samples`.
    cutoff : float, default 2
        Enrichment above which a sample is labelled as enriched.

    Returns
    -------
    pandas.DataFrame
        Copy of `summary` with the columns in :data:`result_columns`,
        sorted by increasing 'fisher_pvalue'. Samples for which the
        test is undefined (NaN) come last.
    """
    logger.info("Estimating APOBEC enrichment scores...")

    records = []
    for _, row in summary.iterrows():
        res = score_sample(row, cutoff=cutoff)
        records.append({
            "apobec_enrichment_ratio": res.apobec_enrichment_ratio,
            "fisher_pvalue": res.fisher_pvalue,
            "odds_ratio": res.odds_ratio,
            "ci_low": res.confidence_interval[0],
            "ci_high": res.confidence_interval[1],
            "apobec_enriched": res.enriched,
        })

    scores = pd.DataFrame(records, index=summary.index,
                          columns=result_columns)
    scores["apobec_enriched"] = scores["apobec_enriched"].astype(bool)
    scores = pd.concat([summary, scores], axis=1)
    scores = scores.sort_values("fisher_pvalue", na_position="last",
                                kind="mergesort")

    n_enriched = int(scores["apobec_enriched"].sum())
    if len(scores):
        logger.info(
            "APOBEC related mutations are enriched in "
            f"{round(n_enriched / len(scores) * 100, 3)}% of samples "
            f"(APOBEC enrichment score > {cutoff}; {n_enriched} of "
            f"{len(scores)} samples)")
    return scores
