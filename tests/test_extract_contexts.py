"""Tests for trinucleotide context and background extraction."""

import pandas as pd
import pytest

from trinucmat.errors import FatalInputError
from trinucmat.extract_contexts import base_composition
from trinucmat.extract_contexts import count_motifs
from trinucmat.extract_contexts import extract_contexts
from trinucmat.extract_contexts import validate_reference_matches_context
from trinucmat.prepare_variants import prepare_variants
from trinucmat.sequence_provider import InMemorySequenceProvider


class CountingProvider(InMemorySequenceProvider):
    """In-memory provider recording every query."""

    def __init__(self, sequences):
        super().__init__(sequences)
        self.queries = []

    def get_sequence(self, contig, start, end):
        self.queries.append((contig, start, end))
        return super().get_sequence(contig, start, end)


def test_count_motifs_overlapping():
    assert count_motifs("TCTCT", ["TCT"]) == {"TCT": 2}
    assert count_motifs("aaaa", ["AA", "TCA"]) == {"AA": 3, "TCA": 0}


def test_base_composition():
    assert base_composition("AAcgTN") == {"A": 2, "T": 1, "G": 1, "C": 1}


def test_trinucleotide_and_background_window(two_sample_maf, provider):
    snvs = prepare_variants(two_sample_maf)
    contexts, report = extract_contexts(snvs, provider)

    assert not report.has_mismatches
    assert contexts["trinucleotide"].tolist() == ["TCA"] * 3 + ["AAA"] * 3
    assert (contexts["updown"].str.len() == 41).all()

    # CG repeat around each TCA: 19 C, 20 G, one A, one T, one TCA
    x = contexts[contexts["Tumor_Sample_Barcode"] == "X"]
    assert x["C"].tolist() == [19, 19, 19]
    assert x["G"].tolist() == [20, 20, 20]
    assert x["A"].tolist() == [1, 1, 1]
    assert x["T"].tolist() == [1, 1, 1]
    assert x["tcw"].tolist() == [1, 1, 1]
    assert x["wga"].tolist() == [0, 0, 0]

    y = contexts[contexts["Tumor_Sample_Barcode"] == "Y"]
    assert y["A"].tolist() == [41, 41, 41]
    assert y["C"].tolist() == [0, 0, 0]


def test_flank_sets_window_size(two_sample_maf, provider):
    snvs = prepare_variants(two_sample_maf)
    contexts, _ = extract_contexts(snvs, provider, flank=5)
    assert (contexts["updown"].str.len() == 11).all()
    assert contexts["trinucleotide"].tolist()[:3] == ["TCA"] * 3


def test_one_query_per_contig(two_sample_maf, reference_sequences):
    provider = CountingProvider(reference_sequences)
    snvs = prepare_variants(two_sample_maf)
    extract_contexts(snvs, provider)

    assert sorted(q[0] for q in provider.queries) == ["chr1", "chr2"]
    assert ("chr1", 30, 270) in provider.queries
    assert ("chr2", 10, 110) in provider.queries


def test_window_clipped_at_contig_start(make_maf):
    provider = InMemorySequenceProvider({"chr1": "TCAGGGGGGG"})
    snvs = prepare_variants(make_maf([("S1", "chr1", 2, "C", "T")]))
    contexts, _ = extract_contexts(snvs, provider, flank=20)

    assert contexts["trinucleotide"].tolist() == ["TCA"]
    assert contexts["updown"].tolist() == ["TCAGGGGGGG"]


def test_missing_contigs_are_reported(two_sample_maf, make_maf, provider):
    extra = make_maf([("X", "chrUn", 5, "C", "T"),
                      ("Y", "chrUn", 9, "G", "A")])
    maf = pd.concat([two_sample_maf, extra], ignore_index=True)
    snvs = prepare_variants(maf)
    contexts, report = extract_contexts(snvs, provider)

    assert report.has_mismatches
    assert report.dropped_contigs == ("chrUn",)
    assert report.n_variants_dropped == 2
    assert "chrUn" in report.maf_contigs
    assert len(contexts) == 6


def test_all_contigs_missing_is_fatal(make_maf, provider):
    snvs = prepare_variants(make_maf([("X", "1", 5, "C", "T")]))
    with pytest.raises(FatalInputError, match="None of the contigs"):
        extract_contexts(snvs, provider)


def test_reference_mismatch_is_excluded(make_maf):
    provider = InMemorySequenceProvider({"chr1": "TCAGGGTTTG"})
    snvs = prepare_variants(make_maf([
        ("S1", "chr1", 2, "C", "T"),   # matches
        ("S1", "chr1", 5, "C", "T"),   # reference has G
        ("S1", "chr1", 1, "T", "A"),   # no 5' base
    ]))
    contexts, _ = extract_contexts(snvs, provider)
    valid, report = validate_reference_matches_context(contexts)

    assert valid["Start_Position"].tolist() == [2]
    assert report.n_mismatches == 2
    frame = report.to_frame()
    assert frame["start_position"].tolist() == [5, 1]
    assert frame["trinucleotide"].tolist() == ["GGG", "TC"]
