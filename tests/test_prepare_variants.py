"""Tests for variant filtering before context extraction."""

import pandas as pd
import pytest

from trinucmat.errors import FatalInputError
from trinucmat.prepare_variants import prepare_variants
from trinucmat.prepare_variants import rename_contigs


def test_keeps_only_snvs(make_maf):
    maf = make_maf([
        ("S1", "1", 10, "C", "T"),
        ("S1", "1", 20, "-", "A", "INS"),
        ("S1", "1", 30, "AT", "-", "DEL"),
        ("S1", "1", 40, "C", "C"),
    ])
    snvs = prepare_variants(maf)
    assert snvs["Start_Position"].tolist() == [10]
    assert snvs.index.tolist() == [0]


def test_silent_rows_in_main_table_are_removed(make_maf):
    maf = make_maf([
        ("S1", "1", 10, "C", "T"),
        ("S1", "1", 20, "G", "A", "SNP", "Intron"),
    ])
    snvs = prepare_variants(maf, use_syn=True)
    assert snvs["Start_Position"].tolist() == [10]


def test_silent_pool_added_back_only_with_use_syn(make_maf):
    maf = make_maf([("S1", "1", 10, "C", "T")])
    silent = make_maf([("S2", "1", 20, "G", "A", "SNP", "Silent")])
    # The silent pool may carry fewer columns than the main table
    silent = silent.drop(columns=["End_Position"])

    with_syn = prepare_variants(maf, silent, use_syn=True)
    assert sorted(with_syn["Tumor_Sample_Barcode"]) == ["S1", "S2"]
    assert with_syn["End_Position"].tolist() == [10, 20]

    without_syn = prepare_variants(maf, silent, use_syn=False)
    assert without_syn["Tumor_Sample_Barcode"].tolist() == ["S1"]


def test_ignore_chr_exact_match(make_maf):
    maf = make_maf([
        ("S1", "chrM", 10, "C", "T"),
        ("S1", "chrM1", 10, "C", "T"),
        ("S1", "chr1", 10, "C", "T"),
    ])
    snvs = prepare_variants(maf, ignore_chr=["chrM"])
    assert snvs["Chromosome"].tolist() == ["chrM1", "chr1"]


def test_prefix_is_added(make_maf):
    maf = make_maf([("S1", 1, 10, "C", "T"), ("S1", "X", 11, "G", "A")])
    snvs = prepare_variants(maf, prefix="chr", add=True)
    assert snvs["Chromosome"].tolist() == ["chr1", "chrX"]


def test_prefix_removal_is_literal():
    chromosomes = pd.Series(["chr.1", "chrX1", "chr2"])
    renamed = rename_contigs(chromosomes, "chr.", add=False)
    assert renamed.tolist() == ["1", "chrX1", "chr2"]


def test_ignore_chr_applies_before_renaming(make_maf):
    maf = make_maf([("S1", "M", 10, "C", "T"), ("S1", "1", 10, "C", "T")])
    snvs = prepare_variants(maf, ignore_chr=["M"], prefix="chr")
    assert snvs["Chromosome"].tolist() == ["chr1"]


def test_positions_are_integers(make_maf):
    maf = make_maf([("S1", "1", 10, "c", "t")])
    maf["Start_Position"] = maf["Start_Position"].astype(float)
    snvs = prepare_variants(maf)
    assert snvs["Start_Position"].dtype.kind == "i"
    assert snvs["Reference_Allele"].tolist() == ["C"]


def test_no_snvs_left_is_fatal(make_maf):
    maf = make_maf([
        ("S1", "1", 20, "-", "A", "INS"),
        ("S1", "1", 30, "A", "-", "DEL"),
    ])
    with pytest.raises(FatalInputError, match="No more single nucleotide"):
        prepare_variants(maf)


def test_missing_column_raises(make_maf):
    maf = make_maf([("S1", "1", 10, "C", "T")]).drop(
        columns=["Tumor_Seq_Allele2"])
    with pytest.raises(KeyError):
        prepare_variants(maf)
