"""Extract trinucleotide contexts and background windows.

For every SNV the immediate 5' and 3' bases are extracted from the
reference genome, together with a window of `flank` bases on each
side of the mutation. Nucleotide and TCW/WGA motif frequencies in
that window are the background against which APOBEC enrichment is
estimated.
"""

import logging
import pandas as pd

from .constants import flank as default_flank
from .constants import tcw_motifs
from .constants import wga_motifs
from .errors import FatalInputError
from .models import ContigMismatchReport
from .models import ContextIntegrityReport
from .models import ContextMismatch

logger = logging.getLogger(__name__)


background_motifs = tcw_motifs + wga_motifs


def count_motifs(seq, motifs):
    """Count overlapping occurrences of each motif in `seq`.

    Parameters
    ----------
    seq : str
        Nucleotide sequence, case is ignored.
    motifs : iterable of str
        Motifs to count.

    Returns
    -------
    dict[str, int]

    Examples
    --------
    >>> count_motifs("TCATCTCA", ["TCA", "TCT", "CTC"])
    {'TCA': 2, 'TCT': 1, 'CTC': 1}
    """
    seq = seq.upper()
    counts = {}
    for motif in motifs:
        motif = motif.upper()
        counts[motif] = sum(
            1 for i in range(len(seq) - len(motif) + 1)
            if seq.startswith(motif, i))
    return counts


def base_composition(seq):
    """Return the number of A, T, G and C in `seq` (case ignored)."""
    seq = seq.upper()
    return {base: seq.count(base) for base in "ATGC"}


def _drop_missing_contigs(snvs, contigs_in_reference):
    maf_contigs = sorted(snvs["Chromosome"].unique())
    missing = [c for c in maf_contigs if c not in contigs_in_reference]
    is_missing = snvs["Chromosome"].isin(missing)

    report = ContigMismatchReport(
        dropped_contigs=tuple(missing),
        n_variants_dropped=int(is_missing.sum()),
        maf_contigs=tuple(maf_contigs))

    if missing:
        logger.warning(
            "Contig names in MAF must match to contig names in "
            f"reference fasta. Ignoring {report.n_variants_dropped} "
            f"single nucleotide variants from {', '.join(missing)}")
        logger.debug(
            f"Contigs in fasta file: {sorted(contigs_in_reference)}\n"
            f"Contigs in maf: {maf_contigs}")

    return snvs[~is_missing], report


def extract_contexts(snvs, sequence_provider, *, flank=default_flank):
    """Annotate SNVs with trinucleotide context and background counts.

    The reference is queried once per contig: a single range covering
    all the windows on that contig is fetched and sliced locally.

    Parameters
    ----------
    snvs : pandas.DataFrame
        Output of :func:`prepare_variants.prepare_variants`.
    sequence_provider : SequenceProvider
        Reference genome.
    flank : int, default 20
        Bases up and downstream of the mutation in the background
        window. The window spans
        [Start_Position - flank, End_Position + flank].

    Returns
    -------
    contexts : pandas.DataFrame
        Copy of `snvs` (minus dropped contigs) with the columns
        'trinucleotide', 'updown', 'A', 'T', 'G', 'C', 'TCA', 'TCT',
        'AGA', 'TGA', 'tcw' and 'wga'.
    report : ContigMismatchReport
        Contigs absent from the reference and how many variants were
        dropped because of them.

    Raises
    ------
    FatalInputError
        If every variant lies on a contig missing from the reference.
    """
    snvs, report = _drop_missing_contigs(
        snvs, sequence_provider.list_contigs())

    if snvs.empty:
        raise FatalInputError(
            "None of the contigs in the MAF are present in the "
            f"reference genome: {', '.join(report.dropped_contigs)}")

    logger.info("Extracting 5' and 3' adjacent bases and +/- "
                f"{flank}bp around mutated bases for background "
                "estimation...")

    rows = {}
    for contig, group in snvs.groupby("Chromosome", sort=False):
        starts = group["Start_Position"]
        ends = group["End_Position"]
        lo = max(1, int(min(starts.min() - flank, starts.min() - 1)))
        hi = int(max(ends.max() + flank, starts.max() + 1))
        seq = sequence_provider.get_sequence(contig, lo, hi)
        logger.debug(f"Fetched {contig}:{lo}-{hi} for {len(group)} "
                     "variants")

        for idx, start, end in zip(group.index, starts, ends):
            start, end = int(start), int(end)
            trinucleotide = seq[max(start - 1, lo) - lo:start + 1 - lo + 1]
            updown = seq[max(start - flank, lo) - lo:end + flank - lo + 1]

            row = {"trinucleotide": trinucleotide, "updown": updown}
            row.update(base_composition(updown))
            row.update(count_motifs(updown, background_motifs))
            rows[idx] = row

    extracted = pd.DataFrame.from_dict(rows, orient="index")
    extracted["tcw"] = extracted[list(tcw_motifs)].sum(axis=1)
    extracted["wga"] = extracted[list(wga_motifs)].sum(axis=1)

    contexts = pd.concat([snvs, extracted.reindex(snvs.index)], axis=1)

    logger.info("... done.")
    return contexts, report


def validate_reference_matches_context(contexts):
    """Check the middle base of each trinucleotide against the MAF.

    Variants whose trinucleotide is not three bases long (mutation at
    the very edge of a contig) or whose middle base differs from
    'Reference_Allele' are excluded, since they point to a strand or
    coordinate error upstream.

    Parameters
    ----------
    contexts : pandas.DataFrame
        Output of :func:`extract_contexts`.

    Returns
    -------
    valid : pandas.DataFrame
        Rows that passed the check.
    report : ContextIntegrityReport
        One entry per excluded variant.
    """
    trinucleotide = contexts["trinucleotide"].astype(str)
    middle = trinucleotide.str[1:2]
    is_valid = ((trinucleotide.str.len() == 3)
                & (middle == contexts["Reference_Allele"].str.upper()))

    invalid = contexts[~is_valid]
    report = ContextIntegrityReport(tuple(
        ContextMismatch(
            tumor_sample_barcode=str(row.Tumor_Sample_Barcode),
            chromosome=str(row.Chromosome),
            start_position=int(row.Start_Position),
            reference_allele=str(row.Reference_Allele),
            trinucleotide=str(row.trinucleotide))
        for row in invalid.itertuples(index=False)))

    if report.n_mismatches:
        logger.warning(
            f"Reference allele does not match the reference genome "
            f"for {report.n_mismatches} variants, excluding them")
        logger.debug(f"Mismatching rows:\n{report.to_frame()}")

    return contexts[is_valid].copy(), report
