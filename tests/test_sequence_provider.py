"""Tests for reference genome access."""

import pytest

from trinucmat.errors import ContigNotFoundError
from trinucmat.sequence_provider import FastaSequenceProvider
from trinucmat.sequence_provider import InMemorySequenceProvider
from trinucmat.sequence_provider import open_sequence_provider


def test_coordinates_are_one_based_inclusive():
    provider = InMemorySequenceProvider({"chr1": "acgtTCAGG"})
    assert provider.get_sequence("chr1", 1, 1) == "A"
    assert provider.get_sequence("chr1", 5, 7) == "TCA"


def test_ranges_are_clipped_to_contig():
    provider = InMemorySequenceProvider({"chr1": "ACGTACGT"})
    assert provider.get_sequence("chr1", -5, 2) == "AC"
    assert provider.get_sequence("chr1", 7, 100) == "GT"
    assert provider.get_sequence("chr1", 20, 30) == ""


def test_unknown_contig_raises():
    provider = InMemorySequenceProvider({"chr1": "ACGT"})
    with pytest.raises(ContigNotFoundError):
        provider.get_sequence("1", 1, 2)
    # Still a KeyError for callers catching the generic exception
    with pytest.raises(KeyError):
        provider.get_sequence("chrUn", 1, 2)


def test_fasta_provider(sample_fasta, reference_sequences):
    with FastaSequenceProvider(sample_fasta) as provider:
        assert provider.list_contigs() == {"chr1", "chr2"}
        assert provider.get_sequence("chr1", 49, 51) == "TCA"
        assert provider.get_sequence("chr2", 1, 5) == "AAAAA"
        # Queries spanning line breaks of the FASTA file
        assert (provider.get_sequence("chr1", 55, 125)
                == reference_sequences["chr1"][54:125])


def test_in_memory_from_fasta(sample_fasta, reference_sequences):
    provider = InMemorySequenceProvider.from_fasta(sample_fasta)
    assert provider.list_contigs() == set(reference_sequences)
    assert (provider.get_sequence("chr1", 1, 300)
            == reference_sequences["chr1"])


def test_open_sequence_provider(provider, sample_fasta, tmp_path):
    assert open_sequence_provider(provider) is provider

    opened = open_sequence_provider(sample_fasta)
    assert isinstance(opened, FastaSequenceProvider)
    opened.close()

    with pytest.raises(FileNotFoundError, match="Reference genome"):
        open_sequence_provider(tmp_path / "missing.fa")
