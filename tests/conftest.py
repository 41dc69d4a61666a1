"""
Pytest configuration and fixtures for trinucmat tests.
"""

import pandas as pd
import pytest

from trinucmat.sequence_provider import InMemorySequenceProvider


# ============================================================================
# Reference Fixtures
# ============================================================================

def _cg_repeat_with_tca(length, sites):
    """CGCG... sequence with a TCA motif centered on each site (1-based).

    A CG repeat has many C bases but no TCW motif, so the only TCW
    motifs are the ones placed at `sites`.
    """
    seq = list("CG" * (length // 2))
    for site in sites:
        seq[site - 2:site + 1] = list("TCA")
    return "".join(seq)


@pytest.fixture
def tca_sites():
    """Positions of the C in each TCA motif of chr1."""
    return [50, 150, 250]


@pytest.fixture
def reference_sequences(tca_sites):
    """Two small contigs: a CG repeat with TCA motifs, and a poly-A."""
    return {
        "chr1": _cg_repeat_with_tca(300, tca_sites),
        "chr2": "A" * 120,
    }


@pytest.fixture
def provider(reference_sequences):
    """In-memory reference genome."""
    return InMemorySequenceProvider(reference_sequences)


# ============================================================================
# Variant Fixtures
# ============================================================================

@pytest.fixture
def make_maf():
    """Factory fixture building MAF-style DataFrames from tuples.

    Each tuple is (sample, chromosome, position, ref, alt) and may add
    a variant type and a variant classification.
    """
    def _make_maf(rows):
        records = []
        for row in rows:
            sample, chrom, pos, ref, alt = row[:5]
            variant_type = row[5] if len(row) > 5 else "SNP"
            classification = row[6] if len(row) > 6 else "Missense_Mutation"
            records.append({
                "Tumor_Sample_Barcode": sample,
                "Chromosome": chrom,
                "Start_Position": pos,
                "End_Position": pos,
                "Variant_Classification": classification,
                "Variant_Type": variant_type,
                "Reference_Allele": ref,
                "Tumor_Seq_Allele2": alt,
            })
        return pd.DataFrame(records)
    return _make_maf


@pytest.fixture
def two_sample_maf(make_maf, tca_sites):
    """Sample X: three C>T in TCA context. Sample Y: three A>G."""
    rows = [("X", "chr1", pos, "C", "T") for pos in tca_sites]
    rows += [("Y", "chr2", pos, "A", "G") for pos in (30, 60, 90)]
    return make_maf(rows)


@pytest.fixture
def sample_fasta(tmp_path, reference_sequences):
    """Write the reference sequences to a FASTA file."""
    fasta_path = tmp_path / "reference.fa"
    lines = []
    for name, seq in reference_sequences.items():
        lines.append(f">{name} test contig")
        lines.extend(seq[i:i + 60] for i in range(0, len(seq), 60))
    fasta_path.write_text("\n".join(lines) + "\n")
    return fasta_path
