"""Trinucleotide matrix and APOBEC enrichment from a MAF.

Extracts the single 5' and 3' bases flanking each mutated site,
classifies the substitutions into the 96 trinucleotide classes and
estimates APOBEC enrichment per sample. Users can run this as:

    python -m trinucmat matrix --maf cohort.maf --ref-genome hg19.fa \\
        --out-dir results

Or import and call programmatically:

    from trinucmat import trinucleotide_matrix, TrinucleotideMatrixConfig
    result = trinucleotide_matrix(
        maf, TrinucleotideMatrixConfig(reference_genome="hg19.fa",
                                       prefix="chr"),
        maf_silent=maf_silent)
"""

import logging
from pathlib import Path

from .apobec_enrichment import estimate_apobec_enrichment
from .classify_substitutions import classify_substitutions
from .errors import FatalInputError
from .extract_contexts import extract_contexts
from .extract_contexts import validate_reference_matches_context
from .models import Diagnostics
from .models import TrinucleotideMatrixConfig
from .models import TrinucleotideMatrixResult
from .mutational_matrix import build_mutational_matrix
from .prepare_variants import prepare_variants
from .sequence_provider import SequenceProvider
from .sequence_provider import open_sequence_provider
from .summarize_samples import summarize_samples

logger = logging.getLogger(__name__)


def trinucleotide_matrix(maf, config=None, *, maf_silent=None):
    """Build the 96-class matrix and APOBEC scores for a cohort.

    Parameters
    ----------
    maf : pandas.DataFrame
        MAF-style variants (see
        :data:`prepare_variants.required_columns`).
    config : TrinucleotideMatrixConfig or None
        Run configuration; defaults to ``TrinucleotideMatrixConfig()``.
    maf_silent : pandas.DataFrame or None
        Silent variants segregated from `maf`, added back when
        ``config.use_syn`` is True.

    Returns
    -------
    TrinucleotideMatrixResult
        ``nmf_matrix`` (samples x 96), ``apobec_scores`` (per sample,
        sorted by Fisher's p-value) and ``diagnostics``.

    Raises
    ------
    FatalInputError
        If no SNVs are left after filtering, after dropping contigs
        absent from the reference, or after the reference allele check.
    """
    if config is None:
        config = TrinucleotideMatrixConfig()

    snvs = prepare_variants(maf, maf_silent,
                            use_syn=config.use_syn,
                            ignore_chr=config.ignore_chr,
                            prefix=config.prefix,
                            add=config.add)

    owns_provider = not isinstance(config.reference_genome,
                                   SequenceProvider)
    provider = open_sequence_provider(config.reference_genome)
    try:
        contexts, contig_report = extract_contexts(
            snvs, provider, flank=config.flank)
    finally:
        if owns_provider:
            provider.close()

    contexts, integrity_report = validate_reference_matches_context(
        contexts)
    if contexts.empty:
        raise FatalInputError(
            "No single nucleotide variants left: none of the reference "
            "alleles match the reference genome.")

    classified = classify_substitutions(contexts)

    apobec_scores = estimate_apobec_enrichment(
        summarize_samples(classified), cutoff=config.enrichment_cutoff)
    nmf_matrix = build_mutational_matrix(classified)

    n_input = len(maf) + (len(maf_silent) if maf_silent is not None
                          and config.use_syn else 0)
    diagnostics = Diagnostics(n_input_variants=int(n_input),
                              n_snvs=int(len(snvs)),
                              contig_mismatch=contig_report,
                              context_integrity=integrity_report)

    return TrinucleotideMatrixResult(nmf_matrix=nmf_matrix,
                                     apobec_scores=apobec_scores,
                                     diagnostics=diagnostics)


def main(argv=None):
    """Main entry point for command-line usage."""
    import argparse

    from .load_maf_files import load_maf_files
    from .locations import location_reference_genome

    parser = argparse.ArgumentParser(
        description=("Build a 96 trinucleotide class matrix and "
                     "estimate APOBEC enrichment from MAF files"),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # MAF contigs are 1, 2, ... and the fasta uses chr1, chr2, ...
  python -m trinucmat matrix --maf cohort.maf --ref-genome hg19.fa \\
      --prefix chr --out-dir results

  # Exclude synonymous variants and the mitochondrial genome
  python -m trinucmat matrix --maf mafs/ --ref-genome hg19.fa \\
      --no-syn --ignore-chr chrM --out-dir results
        """,
    )

    parser.add_argument(
        "--maf",
        nargs="+",
        type=Path,
        required=True,
        help="MAF file(s) or directories containing them",
    )
    parser.add_argument(
        "--ref-genome",
        type=Path,
        default=location_reference_genome,
        help=("Reference fasta (default: $TRINUCMAT_REFERENCE_GENOME "
              f"or {location_reference_genome})"),
    )
    parser.add_argument(
        "--out-dir",
        type=Path,
        required=True,
        help="Directory where results are written",
    )
    parser.add_argument(
        "--prefix",
        default=None,
        help="Prefix to add or remove from contig names in the MAF",
    )
    parser.add_argument(
        "--remove-prefix",
        action="store_true",
        help="Remove --prefix from contig names instead of adding it",
    )
    parser.add_argument(
        "--ignore-chr",
        nargs="+",
        default=None,
        help="Contigs to remove from the analysis, e.g. chrM",
    )
    parser.add_argument(
        "--no-syn",
        action="store_true",
        help="Do not include synonymous variants",
    )
    parser.add_argument(
        "--flank",
        type=int,
        default=TrinucleotideMatrixConfig.flank,
        help="Bases around each mutation used as background (default: 20)",
    )
    parser.add_argument(
        "--force",
        "-f",
        action="store_true",
        help="Overwrite existing results in --out-dir",
    )

    args = parser.parse_args(argv)

    # Configure logging
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    config = TrinucleotideMatrixConfig(
        reference_genome=args.ref_genome,
        prefix=args.prefix,
        add=not args.remove_prefix,
        ignore_chr=args.ignore_chr,
        use_syn=not args.no_syn,
        flank=args.flank,
    )

    try:
        maf, maf_silent = load_maf_files(args.maf)
        result = trinucleotide_matrix(maf, config, maf_silent=maf_silent)
        result.save(args.out_dir, force=args.force)
    except Exception as e:
        logger.error(f"\nError: {e}")
        return 1

    logger.info(repr(result))
    return 0


if __name__ == "__main__":
    import sys

    sys.exit(main())
