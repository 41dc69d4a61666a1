"""Basic usage example for trinucmat.

This script demonstrates how to build the 96 trinucleotide class
matrix of a cohort and estimate APOBEC enrichment per sample.
"""

from pathlib import Path

from trinucmat import TrinucleotideMatrixConfig, trinucleotide_matrix
from trinucmat.load_maf_files import load_maf_files


def main():
    # Use your own MAF files directory and reference genome
    maf_directory = Path("/path/to/your/maf/files")
    reference_genome = Path("/path/to/hg19.fa")

    # Silent variants are kept apart and added back when use_syn=True
    maf, maf_silent = load_maf_files(maf_directory)

    # MAF contigs are 1, 2, ... while the FASTA names them chr1, chr2, ...
    # ignore_chr uses the MAF names, before the prefix is added
    config = TrinucleotideMatrixConfig(
        reference_genome=reference_genome,
        prefix="chr",
        add=True,
        ignore_chr=["M"],
    )
    result = trinucleotide_matrix(maf, config, maf_silent=maf_silent)
    print(result)

    # Samples x 96 matrix, ready for signature extraction
    print(result.nmf_matrix.head())

    # Enriched samples, smallest p-values first
    scores = result.apobec_scores
    print(scores.loc[scores["apobec_enriched"],
                     ["apobec_enrichment_ratio", "fisher_pvalue"]])

    dropped = result.diagnostics.contig_mismatch
    if dropped.has_mismatches:
        print(f"Dropped {dropped.n_variants_dropped} variants on "
              f"{', '.join(dropped.dropped_contigs)}")

    result.save(Path("results"), force=True)


if __name__ == "__main__":
    main()
