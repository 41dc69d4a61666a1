"""Per-sample mutation and background counts.

Aggregates classified SNVs into one row per tumor sample with:

- raw substitution counts and their per-reference-base totals,
- counts of the oriented tCw / wGa APOBEC events,
- nucleotide and motif counts summed over the background windows.

Missing combinations count as zero at aggregation time.
"""

import logging
import pandas as pd

from .constants import apobec_motif_events
from .constants import apobec_enrichment_motifs

logger = logging.getLogger(__name__)


raw_substitutions = [f"{ref}>{alt}"
                     for ref in "ACGT"
                     for alt in "ACGT".replace(ref, "")]

background_columns = ["A", "T", "G", "C", "tcw", "wga", "bases"]


def _counts_by_sample(classified, column, categories):
    """Sample x category counts with zeros for absent categories."""
    counts = (classified
              .groupby(["Tumor_Sample_Barcode", column])
              .size()
              .unstack(fill_value=0))
    extra = [c for c in counts.columns if c not in categories]
    return counts.reindex(columns=list(categories) + extra,
                          fill_value=0).astype(int)


def count_substitutions(classified):
    """Count raw substitutions per sample.

    Parameters
    ----------
    classified : pandas.DataFrame
        Must contain 'Tumor_Sample_Barcode' and 'Substitution'.

    Returns
    -------
    pandas.DataFrame
        Indexed by 'Tumor_Sample_Barcode' with one column for each of
        the 12 substitutions plus:

        - n_A, n_T, n_G, n_C : mutations from each reference base
        - n_mutations : total number of mutations
        - n_C>G_and_C>T : APOBEC type mutations, i.e. C>G, G>C, C>T
          and G>A
    """
    sub_tbl = _counts_by_sample(classified, "Substitution",
                                raw_substitutions)[raw_substitutions].copy()

    for ref in "ATGC":
        sub_tbl[f"n_{ref}"] = sub_tbl[
            [s for s in raw_substitutions if s.startswith(ref)]
        ].sum(axis=1)

    sub_tbl["n_mutations"] = sub_tbl[["n_A", "n_T", "n_G", "n_C"]].sum(
        axis=1)
    sub_tbl["n_C>G_and_C>T"] = (sub_tbl["C>G"] + sub_tbl["G>C"]
                                + sub_tbl["C>T"] + sub_tbl["G>A"])
    sub_tbl.columns.name = None
    return sub_tbl


def count_apobec_motifs(classified):
    """Count tCw and wGa mutation events per sample.

    Each oriented event adds up two raw substitution motifs, e.g.
    ``tCw_to_A = T[C>A]A + T[C>A]T``.

    Parameters
    ----------
    classified : pandas.DataFrame
        Must contain 'Tumor_Sample_Barcode' and 'SubstitutionMotif'.

    Returns
    -------
    pandas.DataFrame
        Indexed by 'Tumor_Sample_Barcode' with columns tCw_to_A,
        tCw_to_G, tCw_to_T, tCw, wGa_to_C, wGa_to_T, wGa_to_A, wGa and
        'tCw_to_G+tCw_to_T', the number of mutations in the APOBEC
        motifs of :data:`constants.apobec_enrichment_motifs`.
    """
    motifs = sorted({m for ms in apobec_motif_events.values() for m in ms}
                    | set(apobec_enrichment_motifs))
    motif_tbl = _counts_by_sample(classified, "SubstitutionMotif", motifs)

    out = pd.DataFrame(index=motif_tbl.index)
    for event, event_motifs in apobec_motif_events.items():
        out[event] = motif_tbl[event_motifs].sum(axis=1)

    out["tCw"] = out[["tCw_to_A", "tCw_to_G", "tCw_to_T"]].sum(axis=1)
    out["wGa"] = out[["wGa_to_C", "wGa_to_T", "wGa_to_A"]].sum(axis=1)
    out["tCw_to_G+tCw_to_T"] = motif_tbl[apobec_enrichment_motifs].sum(
        axis=1)

    return out[["tCw_to_A", "tCw_to_G", "tCw_to_T", "tCw",
                "wGa_to_C", "wGa_to_T", "wGa_to_A", "wGa",
                "tCw_to_G+tCw_to_T"]]


def summarize_background(contexts):
    """Sum background nucleotide and motif counts per sample.

    Parameters
    ----------
    contexts : pandas.DataFrame
        Must contain 'Tumor_Sample_Barcode', 'A', 'T', 'G', 'C', 'tcw'
        and 'wga' as produced by
        :func:`extract_contexts.extract_contexts`.

    Returns
    -------
    pandas.DataFrame
        Indexed by 'Tumor_Sample_Barcode' with columns A, T, G, C,
        tcw, wga and bases (A + T + G + C).
    """
    summary = contexts.groupby("Tumor_Sample_Barcode")[
        ["A", "T", "G", "C", "tcw", "wga"]].sum().astype(int)
    summary["bases"] = summary[["A", "T", "G", "C"]].sum(axis=1)
    return summary[background_columns]


def summarize_samples(classified):
    """Build the per-sample table used for APOBEC enrichment.

    Parameters
    ----------
    classified : pandas.DataFrame
        Output of :func:`classify_substitutions.classify_substitutions`.

    Returns
    -------
    pandas.DataFrame
        One row per 'Tumor_Sample_Barcode' with the columns of
        :func:`count_substitutions` and :func:`count_apobec_motifs`,
        the background counts prefixed by 'n_bg_' (n_bg_A, n_bg_T,
        n_bg_G, n_bg_C, n_bg_tcw, n_bg_wga, n_bg_bases) and
        'non_APOBEC_mutations'.
    """
    logger.info("Summarizing mutations and background per sample...")

    background = summarize_background(classified).add_prefix("n_bg_")

    summary = pd.concat([count_substitutions(classified),
                         count_apobec_motifs(classified),
                         background], axis=1)
    summary["non_APOBEC_mutations"] = (summary["n_mutations"]
                                       - summary["tCw_to_G+tCw_to_T"])
    summary.index.name = "Tumor_Sample_Barcode"

    logger.info(f"... done ({len(summary)} samples).")
    return summary
